import logging
import re
from pathlib import Path
from typing import Annotated

import pandas as pd
import typer

from pitch_report.aggregate import GroupingKey, Metric, aggregate, rows_to_frame, sort_rows
from pitch_report.classify import classify_pitches
from pitch_report.cli._logging import configure_logging
from pitch_report.cli._output import (
    print_aggregate_table,
    print_error,
    print_notice,
    print_outlier_report,
)
from pitch_report.config import AnalysisSettings, create_config, load_analysis_settings
from pitch_report.names import NameResolver, PybaseballNameResolver, attach_batter_names
from pitch_report.outliers import OutlierFitError, detect_outliers
from pitch_report.plots import plot_hard_hit_heatmap, plot_pitch_locations, plot_regression
from pitch_report.selectors import select_hard_hit, select_pitch_locations
from pitch_report.statcast.calendar import parse_date_range
from pitch_report.statcast.fetcher import PybaseballFetcher, StatcastFetcher

logger = logging.getLogger(__name__)

app = typer.Typer(name="pitch-report", help="Summaries, outliers and location plots from Statcast pitch data.")


def _build_fetcher() -> StatcastFetcher:
    return PybaseballFetcher()


def _build_name_resolver() -> NameResolver:
    return PybaseballNameResolver()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable DEBUG logging")] = False,
    config_path: Annotated[
        str, typer.Option("--config", help="YAML settings file (missing file falls back to defaults)")
    ] = "pitch_report.yaml",
) -> None:
    configure_logging(verbose=verbose)
    ctx.obj = load_analysis_settings(create_config(yaml_path=config_path))
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


_StartOpt = Annotated[str | None, typer.Option("--start", help="First game date, YYYY-MM-DD")]
_EndOpt = Annotated[str | None, typer.Option("--end", help="Last game date, YYYY-MM-DD (inclusive)")]
_SeasonOpt = Annotated[int | None, typer.Option("--season", help="Use the whole season's date range")]
_TeamOpt = Annotated[str | None, typer.Option("--team", help="Only games involving this team (e.g. NYY)")]
_ByOpt = Annotated[
    str,
    typer.Option("--by", help="Grouping: " + ", ".join(k.cli_name for k in GroupingKey)),
]
_MinPitchesOpt = Annotated[int | None, typer.Option("--min-pitches", help="Drop groups with fewer pitches")]


def _settings(ctx: typer.Context) -> AnalysisSettings:
    if isinstance(ctx.obj, AnalysisSettings):
        return ctx.obj
    return load_analysis_settings()


def _grouping_key(name: str) -> GroupingKey:
    try:
        return GroupingKey.from_name(name)
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None


def _load_pitches(
    start: str | None,
    end: str | None,
    season: int | None,
    team: str | None,
    *,
    with_batter_names: bool,
) -> pd.DataFrame:
    try:
        first, last = parse_date_range(start, end, season)
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None

    raw = _build_fetcher().fetch_range(first, last, team=team)
    pitches = classify_pitches(raw)
    if with_batter_names:
        pitches = attach_batter_names(pitches, _build_name_resolver())
    logger.info("Loaded %d pitches from %s to %s", len(pitches), first, last)
    return pitches


def _default_plot_path(settings: AnalysisSettings, name: str, suffix: str) -> Path:
    slug = re.sub(r"[^a-z0-9]+", "_", name.casefold()).strip("_")
    return settings.output_dir / f"{slug}_{suffix}.png"


@app.command()
def summary(
    ctx: typer.Context,
    start: _StartOpt = None,
    end: _EndOpt = None,
    season: _SeasonOpt = None,
    team: _TeamOpt = None,
    by: _ByOpt = "pitch_type",
    min_pitches: _MinPitchesOpt = None,
    sort: Annotated[Metric | None, typer.Option("--sort", help="Metric to sort by")] = None,
    ascending: Annotated[bool, typer.Option("--ascending/--descending", help="Sort direction")] = False,
    limit: Annotated[int | None, typer.Option("--limit", help="Show only the first N rows")] = None,
    csv: Annotated[Path | None, typer.Option("--csv", help="Also write the table to this CSV file")] = None,
) -> None:
    """Swing, whiff, zone, chase and run-value rates per group.

    Example:
        pitch-report summary --start 2024-04-01 --end 2024-04-30 --by pitch_type --sort whiff_perc
    """
    settings = _settings(ctx)
    key = _grouping_key(by)
    pitches = _load_pitches(start, end, season, team, with_batter_names=key is GroupingKey.BATTER)
    threshold = settings.min_pitches if min_pitches is None else min_pitches
    rows = aggregate(pitches, key, min_pitches=threshold, hard_hit_speed=settings.hard_hit_speed)
    if sort is not None:
        rows = sort_rows(rows, sort, descending=not ascending)
    if limit is not None:
        rows = rows[:limit]

    if csv is not None:
        csv.parent.mkdir(parents=True, exist_ok=True)
        rows_to_frame(rows, key).to_csv(csv, index=False)
        logger.info("Wrote %d rows to %s", len(rows), csv)

    print_aggregate_table(
        rows,
        key,
        title=f"By {key.cli_name} (min {threshold} pitches)",
        decimals=settings.decimals,
    )


@app.command()
def outliers(
    ctx: typer.Context,
    start: _StartOpt = None,
    end: _EndOpt = None,
    season: _SeasonOpt = None,
    team: _TeamOpt = None,
    by: _ByOpt = "hitting_team",
    x: Annotated[Metric, typer.Option("--x", help="Predictor metric")] = Metric.CHASE_PERC,
    y: Annotated[Metric, typer.Option("--y", help="Response metric")] = Metric.RUN_VALUE_RATE,
    k: Annotated[int | None, typer.Option("--k", help="Flag this many rows at each end")] = None,
    min_pitches: _MinPitchesOpt = None,
    plot: Annotated[Path | None, typer.Option("--plot", help="Write a scatter with the fitted line here")] = None,
) -> None:
    """Fit y ~ x across groups and flag the largest residuals.

    Example:
        pitch-report outliers --season 2024 --by hitting_team --x chase_perc --y run_value_rate
    """
    settings = _settings(ctx)
    key = _grouping_key(by)
    pitches = _load_pitches(start, end, season, team, with_batter_names=key is GroupingKey.BATTER)
    threshold = settings.min_pitches if min_pitches is None else min_pitches
    rows = aggregate(pitches, key, min_pitches=threshold, hard_hit_speed=settings.hard_hit_speed)
    try:
        report = detect_outliers(rows, x, y, k=settings.outlier_k if k is None else k)
    except OutlierFitError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None

    print_outlier_report(report, key, decimals=settings.decimals)
    if plot is not None:
        plot_regression(report, key, plot)


@app.command()
def heatmap(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Batter as 'Last, First'")],
    start: _StartOpt = None,
    end: _EndOpt = None,
    season: _SeasonOpt = None,
    team: _TeamOpt = None,
    out: Annotated[Path | None, typer.Option("--out", help="Image path")] = None,
) -> None:
    """Density of where a batter's hard-hit balls crossed the plate."""
    settings = _settings(ctx)
    pitches = _load_pitches(start, end, season, team, with_batter_names=True)
    result = select_hard_hit(
        pitches,
        name,
        min_batted_balls=settings.heatmap_min_batted_balls,
        hard_hit_speed=settings.hard_hit_speed,
        box=settings.plate_box,
    )
    if result.is_err():
        print_notice(result.unwrap_err().message)
        return
    path = plot_hard_hit_heatmap(result.unwrap(), out or _default_plot_path(settings, name, "hard_hit"))
    typer.echo(f"Wrote {path}")


@app.command()
def locations(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Pitcher as 'Last, First'")],
    start: _StartOpt = None,
    end: _EndOpt = None,
    season: _SeasonOpt = None,
    team: _TeamOpt = None,
    out: Annotated[Path | None, typer.Option("--out", help="Image path")] = None,
) -> None:
    """Plate locations of every pitch a pitcher threw, colored by pitch type."""
    settings = _settings(ctx)
    pitches = _load_pitches(start, end, season, team, with_batter_names=False)
    result = select_pitch_locations(
        pitches,
        name,
        min_pitches=settings.location_min_pitches,
        box=settings.plate_box,
    )
    if result.is_err():
        print_notice(result.unwrap_err().message)
        return
    path = plot_pitch_locations(result.unwrap(), out or _default_plot_path(settings, name, "locations"))
    typer.echo(f"Wrote {path}")
