from pathlib import Path

import pandas as pd

from pitch_report.aggregate import AggregateRow, GroupingKey, Metric
from pitch_report.outliers import detect_outliers
from pitch_report.plots import plot_hard_hit_heatmap, plot_pitch_locations, plot_regression
from pitch_report.selectors import Selection, SelectionKind
from tests.helpers import make_pitches


def _selection(kind: SelectionKind, frame: pd.DataFrame) -> Selection:
    return Selection(name="Judge, Aaron", kind=kind, sample_size=len(frame), pitches=frame)


class TestPlots:
    def test_heatmap_writes_png(self, tmp_path: Path) -> None:
        frame = make_pitches(
            plate_x=[-0.5, -0.2, 0.0, 0.3, 0.6, 0.1],
            plate_z=[2.0, 2.4, 3.1, 2.8, 2.2, 3.3],
        )
        path = plot_hard_hit_heatmap(_selection(SelectionKind.HARD_HIT, frame), tmp_path / "charts" / "judge.png")
        assert path.exists()
        assert path.stat().st_size > 0

    def test_heatmap_with_single_point(self, tmp_path: Path) -> None:
        frame = make_pitches(plate_x=[0.0], plate_z=[2.5])
        path = plot_hard_hit_heatmap(_selection(SelectionKind.HARD_HIT, frame), tmp_path / "one.png")
        assert path.exists()

    def test_locations_writes_png(self, tmp_path: Path) -> None:
        frame = make_pitches(pitch_type=["FF", "SL", "CH", "FF"], plate_x=[0.0, 0.5, -0.5, 1.0])
        path = plot_pitch_locations(_selection(SelectionKind.PITCH_LOCATIONS, frame), tmp_path / "cole.png")
        assert path.exists()

    def test_regression_writes_png(self, tmp_path: Path) -> None:
        rows = [
            AggregateRow(
                key=(team,),
                pitches=100,
                swing_perc=None,
                whiff_perc=None,
                zone_perc=None,
                chase_perc=x,
                run_value_rate=y,
            )
            for team, x, y in [("NYY", 0.25, 1.0), ("BOS", 0.30, -0.5), ("TOR", 0.28, 0.2), ("TB", 0.33, -1.0)]
        ]
        report = detect_outliers(rows, Metric.CHASE_PERC, Metric.RUN_VALUE_RATE, k=1)
        path = plot_regression(report, GroupingKey.HITTING_TEAM, tmp_path / "fit.png")
        assert path.exists()
