from rich.console import Console
from rich.table import Table

from pitch_report.aggregate import AggregateRow, GroupingKey, Metric, format_key, metric_value
from pitch_report.outliers import OutlierFlag, OutlierReport

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)

_KEY_LABELS: dict[GroupingKey, str] = {
    GroupingKey.PITCH_TYPE: "Pitch Type",
    GroupingKey.HITTING_TEAM: "Team (batting)",
    GroupingKey.PITCHING_TEAM: "Team (pitching)",
    GroupingKey.GAME_DATE: "Date",
    GroupingKey.BATTER: "Batter",
    GroupingKey.PITCHER: "Pitcher",
    GroupingKey.PITCHER_PITCH_TYPE: "Pitcher / Pitch Type",
}

METRIC_LABELS: dict[Metric, str] = {
    Metric.PITCHES: "Pitches",
    Metric.SWING_PERC: "Swing%",
    Metric.WHIFF_PERC: "Whiff%",
    Metric.ZONE_PERC: "Zone%",
    Metric.CHASE_PERC: "Chase%",
    Metric.RUN_VALUE_RATE: "RV/100",
    Metric.VELOCITY: "Velo",
    Metric.EXIT_VELOCITY: "EV",
    Metric.LAUNCH_ANGLE: "LA",
    Metric.XWOBACON: "xwOBACON",
    Metric.HARD_HIT_PERC: "HardHit%",
}


def format_metric(value: float | None, metric: Metric, decimals: int) -> str:
    if value is None:
        return "NA"
    if metric is Metric.PITCHES:
        return str(int(value))
    if metric.is_rate:
        return f"{value * 100:.{max(decimals - 2, 0)}f}"
    return f"{value:.{decimals}f}"


def _format_residual(value: float, metric: Metric, decimals: int) -> str:
    if metric.is_rate:
        return f"{value * 100:+.{max(decimals - 2, 0)}f}"
    return f"{value:+.{decimals}f}"


def print_error(message: str) -> None:
    err_console.print(f"[red bold]Error:[/red bold] {message}")


def print_notice(message: str) -> None:
    console.print(f"[yellow]{message}[/yellow]")


def aggregate_table(rows: list[AggregateRow], key: GroupingKey, *, title: str, decimals: int = 3) -> Table:
    table = Table(title=title)
    table.add_column(_KEY_LABELS[key])
    for metric in Metric:
        table.add_column(METRIC_LABELS[metric], justify="right")
    for row in rows:
        table.add_row(
            format_key(row.key),
            *(format_metric(metric_value(row, metric), metric, decimals) for metric in Metric),
        )
    return table


def print_aggregate_table(rows: list[AggregateRow], key: GroupingKey, *, title: str, decimals: int = 3) -> None:
    if not rows:
        console.print("No groups met the minimum sample size.")
        return
    console.print(aggregate_table(rows, key, title=title, decimals=decimals))


def outlier_table(report: OutlierReport, key: GroupingKey, *, decimals: int = 3) -> Table:
    table = Table(title=f"{METRIC_LABELS[report.response]} vs {METRIC_LABELS[report.predictor]}")
    table.add_column("Rank", justify="right")
    table.add_column(_KEY_LABELS[key])
    table.add_column(METRIC_LABELS[report.predictor], justify="right")
    table.add_column(METRIC_LABELS[report.response], justify="right")
    table.add_column("Fitted", justify="right")
    table.add_column("Residual", justify="right")
    table.add_column("Outlier")
    for ranked in report.ranked:
        if ranked.flag is OutlierFlag.HIGH:
            flag = "[green]high[/green]"
        elif ranked.flag is OutlierFlag.LOW:
            flag = "[red]low[/red]"
        else:
            flag = ""
        table.add_row(
            str(ranked.rank),
            format_key(ranked.row.key),
            format_metric(ranked.x, report.predictor, decimals),
            format_metric(ranked.observed, report.response, decimals),
            format_metric(ranked.predicted, report.response, decimals),
            _format_residual(ranked.residual, report.response, decimals),
            flag,
        )
    return table


def print_outlier_report(report: OutlierReport, key: GroupingKey, *, decimals: int = 3) -> None:
    console.print(outlier_table(report, key, decimals=decimals))
    console.print(
        f"Fit: {METRIC_LABELS[report.response]} = {report.fit.slope:.4f} x {METRIC_LABELS[report.predictor]}"
        f" + {report.fit.intercept:.4f}"
    )
