"""Grouped pitch statistics.

``aggregate`` partitions classified pitches by one of a fixed set of grouping
keys and computes the same statistic set for every group. Ratios whose
denominator is zero are reported as ``None`` rather than raising.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum, StrEnum
from typing import TYPE_CHECKING

import pandas as pd

from pitch_report.statcast.columns import IN_PLAY_TYPE, Column, column_or_missing

if TYPE_CHECKING:
    from collections.abc import Callable, Hashable, Iterable

logger = logging.getLogger(__name__)

DEFAULT_HARD_HIT_SPEED = 95.0


class GroupingKey(Enum):
    PITCH_TYPE = (Column.PITCH_TYPE,)
    HITTING_TEAM = (Column.HITTING_TEAM,)
    PITCHING_TEAM = (Column.PITCHING_TEAM,)
    GAME_DATE = (Column.GAME_DATE,)
    BATTER = (Column.BATTER_NAME,)
    PITCHER = (Column.PITCHER_NAME,)
    PITCHER_PITCH_TYPE = (Column.PITCHER_NAME, Column.PITCH_TYPE)

    @property
    def columns(self) -> tuple[Column, ...]:
        return self.value

    @property
    def cli_name(self) -> str:
        return self.name.lower()

    @classmethod
    def from_name(cls, name: str) -> GroupingKey:
        try:
            return cls[name.strip().upper().replace("-", "_")]
        except KeyError:
            choices = ", ".join(k.cli_name for k in cls)
            raise ValueError(f"Unknown grouping key {name!r}; choose one of: {choices}") from None


class Metric(StrEnum):
    PITCHES = "pitches"
    SWING_PERC = "swing_perc"
    WHIFF_PERC = "whiff_perc"
    ZONE_PERC = "zone_perc"
    CHASE_PERC = "chase_perc"
    RUN_VALUE_RATE = "run_value_rate"
    VELOCITY = "velocity"
    EXIT_VELOCITY = "exit_velocity"
    LAUNCH_ANGLE = "launch_angle"
    XWOBACON = "xwobacon"
    HARD_HIT_PERC = "hard_hit_perc"

    @property
    def is_rate(self) -> bool:
        return self in _RATE_METRICS


_RATE_METRICS = frozenset(
    {
        Metric.SWING_PERC,
        Metric.WHIFF_PERC,
        Metric.ZONE_PERC,
        Metric.CHASE_PERC,
        Metric.HARD_HIT_PERC,
    }
)


@dataclass(frozen=True)
class AggregateRow:
    key: tuple[Hashable, ...]
    pitches: int
    swing_perc: float | None
    whiff_perc: float | None  # whiffs / swings
    zone_perc: float | None
    chase_perc: float | None  # chases / out-of-zone pitches
    run_value_rate: float | None  # run value per 100 pitches
    velocity: float | None = None
    exit_velocity: float | None = None
    launch_angle: float | None = None
    xwobacon: float | None = None
    hard_hit_perc: float | None = None


_ACCESSORS: dict[Metric, Callable[[AggregateRow], float | None]] = {
    Metric.PITCHES: lambda row: float(row.pitches),
    Metric.SWING_PERC: lambda row: row.swing_perc,
    Metric.WHIFF_PERC: lambda row: row.whiff_perc,
    Metric.ZONE_PERC: lambda row: row.zone_perc,
    Metric.CHASE_PERC: lambda row: row.chase_perc,
    Metric.RUN_VALUE_RATE: lambda row: row.run_value_rate,
    Metric.VELOCITY: lambda row: row.velocity,
    Metric.EXIT_VELOCITY: lambda row: row.exit_velocity,
    Metric.LAUNCH_ANGLE: lambda row: row.launch_angle,
    Metric.XWOBACON: lambda row: row.xwobacon,
    Metric.HARD_HIT_PERC: lambda row: row.hard_hit_perc,
}


def metric_value(row: AggregateRow, metric: Metric) -> float | None:
    return _ACCESSORS[metric](row)


def _numeric(values: pd.Series) -> pd.Series:
    return values.dropna().astype("float64")


def _mean(values: pd.Series) -> float | None:
    numeric = _numeric(values)
    if numeric.empty:
        return None
    return float(numeric.mean())


def _rate(events: pd.Series, opportunities: pd.Series) -> float | None:
    """sum(events) / sum(opportunities) over rows where both are known."""
    known = events.notna() & opportunities.notna()
    denominator = float(opportunities[known].astype("float64").sum())
    if denominator == 0:
        return None
    return float(events[known].astype("float64").sum()) / denominator


def _batted_balls(group: pd.DataFrame) -> pd.DataFrame:
    if Column.TYPE in group.columns:
        return group[group[Column.TYPE] == IN_PLAY_TYPE]
    return group[column_or_missing(group, Column.LAUNCH_SPEED).notna()]


def _hard_hit_perc(batted: pd.DataFrame, hard_hit_speed: float) -> float | None:
    speeds = _numeric(column_or_missing(batted, Column.LAUNCH_SPEED))
    if speeds.empty:
        return None
    return float((speeds >= hard_hit_speed).mean())


def _scaled(value: float | None, factor: float) -> float | None:
    return None if value is None else value * factor


def summarize_group(
    key: tuple[Hashable, ...], group: pd.DataFrame, hard_hit_speed: float = DEFAULT_HARD_HIT_SPEED
) -> AggregateRow:
    """Compute the statistic set for one group of classified pitches."""
    batted = _batted_balls(group)
    contact = group[group[Column.IS_CONTACT].fillna(False).astype(bool)]
    return AggregateRow(
        key=key,
        pitches=len(group),
        swing_perc=_mean(group[Column.IS_SWING]),
        whiff_perc=_rate(group[Column.IS_WHIFF], group[Column.IS_SWING]),
        zone_perc=_mean(group[Column.IS_IN_ZONE]),
        chase_perc=_rate(group[Column.IS_CHASE], group[Column.IS_OUT_ZONE]),
        run_value_rate=_scaled(_mean(column_or_missing(group, Column.DELTA_RUN_EXP)), 100.0),
        velocity=_mean(column_or_missing(group, Column.RELEASE_SPEED)),
        exit_velocity=_mean(column_or_missing(batted, Column.LAUNCH_SPEED)),
        launch_angle=_mean(column_or_missing(batted, Column.LAUNCH_ANGLE)),
        xwobacon=_mean(column_or_missing(contact, Column.XWOBA)),
        hard_hit_perc=_hard_hit_perc(batted, hard_hit_speed),
    )


def _normalize_key(raw: object, width: int) -> tuple[Hashable, ...]:
    values = raw if isinstance(raw, tuple) else (raw,)
    if len(values) != width:
        raise ValueError(f"Expected a {width}-part group key, got {values!r}")
    return tuple(None if _is_missing(v) else v for v in values)


def _is_missing(value: object) -> bool:
    if value is None or value is pd.NA or value is pd.NaT:
        return True
    return isinstance(value, float) and math.isnan(value)


def aggregate(
    frame: pd.DataFrame,
    key: GroupingKey,
    *,
    min_pitches: int = 0,
    hard_hit_speed: float = DEFAULT_HARD_HIT_SPEED,
) -> list[AggregateRow]:
    """Group classified pitches by ``key`` and summarize each group.

    Groups with fewer than ``min_pitches`` records are dropped; a group of
    exactly ``min_pitches`` is kept. Pitches whose key value is missing form
    their own group. Row order is not part of the contract; use ``sort_rows``.
    """
    columns = [c.value for c in key.columns]
    # A feed without a key column groups every pitch under a missing key.
    keyed = frame.assign(**{c.value: column_or_missing(frame, c) for c in key.columns})
    rows: list[AggregateRow] = []
    dropped = 0
    grouper = columns if len(columns) > 1 else columns[0]
    for raw_key, group in keyed.groupby(grouper, dropna=False, sort=True):
        row = summarize_group(_normalize_key(raw_key, len(columns)), group, hard_hit_speed)
        if row.pitches < min_pitches:
            dropped += 1
            continue
        rows.append(row)
    logger.debug(
        "Aggregated %d pitches by %s into %d groups (%d below %d pitches dropped)",
        len(frame),
        key.cli_name,
        len(rows),
        dropped,
        min_pitches,
    )
    return rows


def sort_rows(rows: Iterable[AggregateRow], metric: Metric, *, descending: bool = True) -> list[AggregateRow]:
    """Stable sort by ``metric``; rows without a value for it go last."""
    present: list[AggregateRow] = []
    missing: list[AggregateRow] = []
    for row in rows:
        (missing if metric_value(row, metric) is None else present).append(row)
    ordered = sorted(present, key=lambda r: metric_value(r, metric) or 0.0, reverse=descending)
    return ordered + missing


def rows_to_frame(rows: Iterable[AggregateRow], key: GroupingKey) -> pd.DataFrame:
    """Flatten rows into a DataFrame with one column per key part and metric."""
    records: list[dict[str, object]] = []
    for row in rows:
        record: dict[str, object] = {c.value: v for c, v in zip(key.columns, row.key, strict=True)}
        for metric in Metric:
            value = metric_value(row, metric)
            record[metric.value] = math.nan if value is None else value
        records.append(record)
    columns = [c.value for c in key.columns] + [m.value for m in Metric]
    frame = pd.DataFrame.from_records(records, columns=columns)
    return frame.astype({Metric.PITCHES.value: "int64"})


def format_key(key: tuple[Hashable, ...]) -> str:
    """Render a group key for tables and chart labels."""
    return " / ".join("NA" if v is None else str(v) for v in key)
