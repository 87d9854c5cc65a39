from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from config import ConfigurationSet, config_from_dict, config_from_env, config_from_yaml

from pitch_report.selectors import PlateBox

_DEFAULTS: dict[str, object] = {
    "analysis": {
        "min_pitches": 25,
        "hard_hit_speed": 95.0,
        "decimals": 3,
    },
    "outliers": {
        "k": 3,
    },
    "selectors": {
        "heatmap_min_batted_balls": 5,
        "location_min_pitches": 15,
        "plate_x_min": -2.0,
        "plate_x_max": 2.0,
        "plate_z_min": 0.0,
        "plate_z_max": 5.0,
    },
    "output": {
        "dir": ".",
    },
}


@dataclass(frozen=True)
class AnalysisSettings:
    min_pitches: int = 25
    hard_hit_speed: float = 95.0
    decimals: int = 3
    outlier_k: int = 3
    heatmap_min_batted_balls: int = 5
    location_min_pitches: int = 15
    plate_box: PlateBox = PlateBox()
    output_dir: Path = Path()


def create_config(
    yaml_path: str = "pitch_report.yaml",
    env_prefix: str = "PITCH_REPORT",
    defaults: dict[str, object] | None = None,
    overrides: dict[str, object] | None = None,
) -> ConfigurationSet:
    """Create a layered configuration.

    Priority (highest to lowest): explicit overrides > env vars > YAML file > defaults dict.

    Args:
        yaml_path: Path to the YAML config file; a missing file is skipped.
        env_prefix: Prefix for environment variables, e.g. ``PITCH_REPORT__ANALYSIS__MIN_PITCHES``.
        defaults: Default configuration values.
        overrides: Values set on the command line.
    """
    if defaults is None:
        defaults = _DEFAULTS

    layers = [
        config_from_env(env_prefix, separator="__", lowercase_keys=True),
        config_from_yaml(yaml_path, read_from_file=True, ignore_missing_paths=True),
        config_from_dict(defaults),
    ]
    if overrides:
        layers.insert(0, config_from_dict(overrides))

    return ConfigurationSet(*layers)


def load_analysis_settings(cfg: ConfigurationSet | None = None) -> AnalysisSettings:
    # Env vars arrive as strings, hence the explicit conversions.
    if cfg is None:
        cfg = create_config()
    return AnalysisSettings(
        min_pitches=int(str(cfg["analysis.min_pitches"])),
        hard_hit_speed=float(str(cfg["analysis.hard_hit_speed"])),
        decimals=int(str(cfg["analysis.decimals"])),
        outlier_k=int(str(cfg["outliers.k"])),
        heatmap_min_batted_balls=int(str(cfg["selectors.heatmap_min_batted_balls"])),
        location_min_pitches=int(str(cfg["selectors.location_min_pitches"])),
        plate_box=PlateBox(
            x_min=float(str(cfg["selectors.plate_x_min"])),
            x_max=float(str(cfg["selectors.plate_x_max"])),
            z_min=float(str(cfg["selectors.plate_z_min"])),
            z_max=float(str(cfg["selectors.plate_z_max"])),
        ),
        output_dir=Path(str(cfg["output.dir"])).expanduser(),
    )
