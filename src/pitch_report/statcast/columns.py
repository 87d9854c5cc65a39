from __future__ import annotations

from enum import StrEnum

import pandas as pd


class Column(StrEnum):
    """Statcast pitch-level columns read by this package, plus the derived ones it adds."""

    # Raw, as returned by pybaseball.statcast
    PITCH_TYPE = "pitch_type"
    PLATE_X = "plate_x"
    PLATE_Z = "plate_z"
    DESCRIPTION = "description"
    ZONE = "zone"
    RELEASE_SPEED = "release_speed"
    LAUNCH_SPEED = "launch_speed"
    LAUNCH_ANGLE = "launch_angle"
    XWOBA = "estimated_woba_using_speedangle"
    DELTA_RUN_EXP = "delta_run_exp"
    BATTER = "batter"
    PITCHER_NAME = "player_name"
    INNING_TOPBOT = "inning_topbot"
    HOME_TEAM = "home_team"
    AWAY_TEAM = "away_team"
    GAME_DATE = "game_date"
    TYPE = "type"

    # Derived
    IS_SWING = "is_swing"
    IS_WHIFF = "is_whiff"
    IS_IN_ZONE = "is_in_zone"
    IS_OUT_ZONE = "is_out_zone"
    IS_CHASE = "is_chase"
    IS_CONTACT = "is_contact"
    HITTING_TEAM = "hitting_team"
    PITCHING_TEAM = "pitching_team"
    BATTER_NAME = "batter_name"


WHIFF_DESCRIPTIONS: frozenset[str] = frozenset(
    {
        "swinging_strike",
        "swinging_strike_blocked",
        "missed_bunt",
    }
)

CONTACT_DESCRIPTIONS: frozenset[str] = frozenset(
    {
        "foul",
        "foul_tip",
        "foul_bunt",
        "bunt_foul_tip",
        "hit_into_play",
        "hit_into_play_no_out",
        "hit_into_play_score",
    }
)

SWING_DESCRIPTIONS: frozenset[str] = WHIFF_DESCRIPTIONS | CONTACT_DESCRIPTIONS

# Zones 1-9 tile the strike zone; 11-14 surround it.
IN_ZONE_MIN = 1
IN_ZONE_MAX = 9

TOP_OF_INNING = "Top"
BOTTOM_OF_INNING = "Bot"

# pitch result type "X" marks a ball put in play
IN_PLAY_TYPE = "X"


def column_or_missing(frame: pd.DataFrame, column: Column) -> pd.Series:
    """Return ``frame[column]``, or an all-missing series when the feed lacks it."""
    if column in frame.columns:
        return frame[column]
    return pd.Series(pd.NA, index=frame.index, dtype="object")
