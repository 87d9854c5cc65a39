"""Validate-then-filter selection of one player's pitches for plotting.

A bad name or a thin sample is an expected outcome, returned as
``Err(SelectionError)`` with a message fit for the console.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum

import pandas as pd

from pitch_report.aggregate import DEFAULT_HARD_HIT_SPEED
from pitch_report.result import Err, Ok, Result
from pitch_report.statcast.columns import IN_PLAY_TYPE, Column, column_or_missing

logger = logging.getLogger(__name__)

DEFAULT_HEATMAP_MIN_BATTED_BALLS = 5
DEFAULT_LOCATION_MIN_PITCHES = 15


class SelectionKind(StrEnum):
    HARD_HIT = "hard-hit batted balls"
    PITCH_LOCATIONS = "pitches"


class SelectionError(Exception):
    """A player selection that cannot be plotted.

    Attributes:
        message: Human-readable description of why.
        name: The name as the caller supplied it.
    """

    def __init__(self, message: str, name: str) -> None:
        super().__init__(message)
        self.message = message
        self.name = name


@dataclass(frozen=True)
class PlateBox:
    """Plate-crossing window, in feet from the center of the plate and above the ground."""

    x_min: float = -2.0
    x_max: float = 2.0
    z_min: float = 0.0
    z_max: float = 5.0

    def contains(self, frame: pd.DataFrame) -> pd.Series:
        x = pd.to_numeric(column_or_missing(frame, Column.PLATE_X), errors="coerce")
        z = pd.to_numeric(column_or_missing(frame, Column.PLATE_Z), errors="coerce")
        inside = x.between(self.x_min, self.x_max) & z.between(self.z_min, self.z_max)
        return inside.fillna(False).astype(bool)


@dataclass(frozen=True)
class Selection:
    name: str
    kind: SelectionKind
    sample_size: int  # qualifying records before the plate box is applied
    pitches: pd.DataFrame


def normalize_name(name: str) -> str:
    """Fold a "last, first" name for comparison."""
    last, sep, first = name.partition(",")
    if not sep:
        return " ".join(name.split()).casefold()
    return f"{' '.join(last.split())}, {' '.join(first.split())}".casefold()


def _matching(frame: pd.DataFrame, column: Column, name: str) -> pd.Series:
    if column not in frame.columns:
        return pd.Series(False, index=frame.index)
    target = normalize_name(name)
    folded = frame[column].map(lambda v: normalize_name(v) if isinstance(v, str) else None)
    return folded.eq(target)


def _select(
    frame: pd.DataFrame,
    name: str,
    column: Column,
    kind: SelectionKind,
    qualifying: pd.Series,
    threshold: int,
    box: PlateBox,
) -> Result[Selection, SelectionError]:
    player = _matching(frame, column, name)
    if not player.any():
        logger.debug("No %s found for %r", column, name)
        return Err(SelectionError(f"No player named {name!r} found in the data. Use the form 'Last, First'.", name))

    chosen = frame[player & qualifying]
    if len(chosen) < threshold:
        return Err(
            SelectionError(
                f"{name} has {len(chosen)} {kind} in this date range; at least {threshold} are needed.",
                name,
            )
        )
    boxed = chosen[box.contains(chosen)]
    logger.debug("Selected %d of %d %s for %s", len(boxed), len(chosen), kind, name)
    return Ok(Selection(name=name, kind=kind, sample_size=len(chosen), pitches=boxed))


def select_hard_hit(
    frame: pd.DataFrame,
    batter_name: str,
    *,
    min_batted_balls: int = DEFAULT_HEATMAP_MIN_BATTED_BALLS,
    hard_hit_speed: float = DEFAULT_HARD_HIT_SPEED,
    box: PlateBox | None = None,
) -> Result[Selection, SelectionError]:
    """Select a batter's hard-hit batted balls for a location heatmap."""
    speed = pd.to_numeric(column_or_missing(frame, Column.LAUNCH_SPEED), errors="coerce")
    hard_hit = speed.ge(hard_hit_speed).fillna(False).astype(bool)
    if Column.TYPE in frame.columns:
        hard_hit &= frame[Column.TYPE].eq(IN_PLAY_TYPE).fillna(False).astype(bool)
    return _select(
        frame,
        batter_name,
        Column.BATTER_NAME,
        SelectionKind.HARD_HIT,
        hard_hit,
        min_batted_balls,
        box or PlateBox(),
    )


def select_pitch_locations(
    frame: pd.DataFrame,
    pitcher_name: str,
    *,
    min_pitches: int = DEFAULT_LOCATION_MIN_PITCHES,
    box: PlateBox | None = None,
) -> Result[Selection, SelectionError]:
    """Select every pitch thrown by a pitcher for a location plot."""
    every_pitch = pd.Series(True, index=frame.index)
    return _select(
        frame,
        pitcher_name,
        Column.PITCHER_NAME,
        SelectionKind.PITCH_LOCATIONS,
        every_pitch,
        min_pitches,
        box or PlateBox(),
    )
