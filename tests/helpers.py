import pandas as pd


def make_pitches(n: int | None = None, **columns: list[object]) -> pd.DataFrame:
    """Build a Statcast-shaped frame.

    Columns not supplied get a neutral default so tests only spell out what
    they care about.
    """
    if n is None:
        n = len(next(iter(columns.values()))) if columns else 1
    defaults: dict[str, list[object]] = {
        "pitch_type": ["FF"] * n,
        "description": ["ball"] * n,
        "zone": [5] * n,
        "plate_x": [0.0] * n,
        "plate_z": [2.5] * n,
        "release_speed": [95.0] * n,
        "launch_speed": [None] * n,
        "launch_angle": [None] * n,
        "estimated_woba_using_speedangle": [None] * n,
        "delta_run_exp": [0.0] * n,
        "batter": [660271] * n,
        "player_name": ["Cole, Gerrit"] * n,
        "inning_topbot": ["Top"] * n,
        "home_team": ["NYY"] * n,
        "away_team": ["BOS"] * n,
        "game_date": [pd.Timestamp("2024-04-01")] * n,
        "type": ["B"] * n,
    }
    defaults.update(columns)
    return pd.DataFrame(defaults)
