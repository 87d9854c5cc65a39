from __future__ import annotations

from pathlib import Path

import pytest
from config import ConfigurationSet

from pitch_report.config import AnalysisSettings, create_config, load_analysis_settings
from pitch_report.selectors import PlateBox


def test_create_config_returns_defaults() -> None:
    cfg = create_config(yaml_path="/nonexistent/pitch_report.yaml")
    assert isinstance(cfg, ConfigurationSet)
    assert cfg["analysis.min_pitches"] == 25
    assert cfg["outliers.k"] == 3
    assert cfg["selectors.heatmap_min_batted_balls"] == 5
    assert cfg["selectors.location_min_pitches"] == 15


def test_defaults_match_settings_dataclass() -> None:
    settings = load_analysis_settings(create_config(yaml_path="/nonexistent/pitch_report.yaml"))
    assert settings == AnalysisSettings()


def test_yaml_overrides_defaults(tmp_path: Path) -> None:
    yaml_file = tmp_path / "pitch_report.yaml"
    yaml_file.write_text("analysis:\n  min_pitches: 50\nselectors:\n  plate_z_max: 4.5\n")
    settings = load_analysis_settings(create_config(yaml_path=str(yaml_file)))
    assert settings.min_pitches == 50
    assert settings.plate_box == PlateBox(z_max=4.5)
    # Defaults still apply for unset keys
    assert settings.outlier_k == 3


def test_env_overrides_yaml(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    yaml_file = tmp_path / "pitch_report.yaml"
    yaml_file.write_text("outliers:\n  k: 2\n")
    monkeypatch.setenv("PITCH_REPORT__OUTLIERS__K", "5")
    monkeypatch.setenv("PITCH_REPORT__ANALYSIS__HARD_HIT_SPEED", "100")

    settings = load_analysis_settings(create_config(yaml_path=str(yaml_file)))
    assert settings.outlier_k == 5
    assert settings.hard_hit_speed == 100.0


def test_explicit_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PITCH_REPORT__ANALYSIS__MIN_PITCHES", "10")
    cfg = create_config(yaml_path="/nonexistent/pitch_report.yaml", overrides={"analysis": {"min_pitches": 1}})
    assert load_analysis_settings(cfg).min_pitches == 1


def test_output_dir_expands_user(tmp_path: Path) -> None:
    yaml_file = tmp_path / "pitch_report.yaml"
    yaml_file.write_text("output:\n  dir: ~/charts\n")
    settings = load_analysis_settings(create_config(yaml_path=str(yaml_file)))
    assert settings.output_dir == Path.home() / "charts"
