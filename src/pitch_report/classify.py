"""Per-pitch event classification.

Every derived column is a pure function of the pitch's own fields. Missing
inputs become missing outputs (pandas ``<NA>`` in a nullable boolean column)
rather than errors, so downstream means and sums skip them.
"""

from __future__ import annotations

import logging

import pandas as pd

from pitch_report.statcast.columns import (
    BOTTOM_OF_INNING,
    CONTACT_DESCRIPTIONS,
    IN_ZONE_MAX,
    IN_ZONE_MIN,
    SWING_DESCRIPTIONS,
    TOP_OF_INNING,
    WHIFF_DESCRIPTIONS,
    Column,
    column_or_missing,
)

logger = logging.getLogger(__name__)


def _membership(values: pd.Series, codes: frozenset[str]) -> pd.Series:
    flags = values.isin(codes).astype("boolean")
    return flags.mask(values.isna())


def classify_zone(zone: pd.Series) -> tuple[pd.Series, pd.Series]:
    """Return (in_zone, out_zone) flags; both are missing where zone is missing."""
    codes = pd.to_numeric(zone, errors="coerce")
    missing = codes.isna()
    in_zone = codes.between(IN_ZONE_MIN, IN_ZONE_MAX).astype("boolean").mask(missing)
    out_zone = (codes > IN_ZONE_MAX).astype("boolean").mask(missing)
    return in_zone, out_zone


def resolve_teams(frame: pd.DataFrame) -> tuple[pd.Series, pd.Series]:
    """Return (hitting_team, pitching_team). The away team bats in the top half."""
    half = column_or_missing(frame, Column.INNING_TOPBOT)
    home = column_or_missing(frame, Column.HOME_TEAM)
    away = column_or_missing(frame, Column.AWAY_TEAM)
    top = half.eq(TOP_OF_INNING).fillna(False).astype(bool)
    bottom = half.eq(BOTTOM_OF_INNING).fillna(False).astype(bool)

    unknown = pd.Series(pd.NA, index=frame.index, dtype="object")
    hitting = unknown.mask(top, away).mask(bottom, home)
    pitching = unknown.mask(top, home).mask(bottom, away)
    return hitting, pitching


def classify_pitches(frame: pd.DataFrame) -> pd.DataFrame:
    """Return a copy of ``frame`` with the swing, zone, chase and team columns added."""
    description = column_or_missing(frame, Column.DESCRIPTION)
    is_swing = _membership(description, SWING_DESCRIPTIONS)
    is_whiff = _membership(description, WHIFF_DESCRIPTIONS)
    is_contact = _membership(description, CONTACT_DESCRIPTIONS)
    is_in_zone, is_out_zone = classify_zone(column_or_missing(frame, Column.ZONE))
    hitting_team, pitching_team = resolve_teams(frame)

    enriched = frame.assign(
        **{
            Column.IS_SWING.value: is_swing,
            Column.IS_WHIFF.value: is_whiff,
            Column.IS_CONTACT.value: is_contact,
            Column.IS_IN_ZONE.value: is_in_zone,
            Column.IS_OUT_ZONE.value: is_out_zone,
            Column.IS_CHASE.value: is_swing & is_out_zone,
            Column.HITTING_TEAM.value: hitting_team,
            Column.PITCHING_TEAM.value: pitching_team,
        }
    )
    logger.debug("Classified %d pitches", len(enriched))
    return enriched
