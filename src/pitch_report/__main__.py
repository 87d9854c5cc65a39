from pitch_report.cli.app import app

app()
