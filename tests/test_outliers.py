import pytest

from pitch_report.aggregate import AggregateRow, Metric
from pitch_report.outliers import OutlierFitError, OutlierFlag, detect_outliers, fit_line


def _row(key: str, x: float | None, y: float | None) -> AggregateRow:
    return AggregateRow(
        key=(key,),
        pitches=500,
        swing_perc=None,
        whiff_perc=None,
        zone_perc=None,
        chase_perc=x,
        run_value_rate=y,
    )


def _five_rows() -> list[AggregateRow]:
    # Residuals [1, -2, 0, 2, -1] around y = 2x sum to zero and are orthogonal to x,
    # so the least-squares line is exactly y = 2x.
    return [
        _row("a", 1.0, 3.0),
        _row("b", 2.0, 2.0),
        _row("c", 3.0, 6.0),
        _row("d", 4.0, 10.0),
        _row("e", 5.0, 9.0),
    ]


class TestFitLine:
    def test_recovers_known_line(self) -> None:
        fit = fit_line([1.0, 2.0, 3.0, 4.0, 5.0], [3.0, 2.0, 6.0, 10.0, 9.0])
        assert fit.slope == pytest.approx(2.0)
        assert fit.intercept == pytest.approx(0.0, abs=1e-9)
        assert fit.predict(10.0) == pytest.approx(20.0)

    def test_needs_two_points(self) -> None:
        with pytest.raises(OutlierFitError, match="at least two"):
            fit_line([1.0], [1.0])

    def test_constant_predictor(self) -> None:
        with pytest.raises(OutlierFitError, match="constant"):
            fit_line([2.0, 2.0, 2.0], [1.0, 2.0, 3.0])


class TestDetectOutliers:
    def test_flags_single_high_and_low_with_k_one(self) -> None:
        report = detect_outliers(_five_rows(), Metric.CHASE_PERC, Metric.RUN_VALUE_RATE, k=1)
        flags = {r.row.key[0]: r.flag for r in report.ranked}
        assert flags == {
            "d": OutlierFlag.HIGH,
            "b": OutlierFlag.LOW,
            "a": OutlierFlag.NONE,
            "c": OutlierFlag.NONE,
            "e": OutlierFlag.NONE,
        }
        assert [r.row.key[0] for r in report.flagged] == ["d", "b"]

    def test_ranks_by_residual_descending(self) -> None:
        report = detect_outliers(_five_rows(), Metric.CHASE_PERC, Metric.RUN_VALUE_RATE, k=1)
        assert [r.row.key[0] for r in report.ranked] == ["d", "a", "c", "e", "b"]
        assert [r.rank for r in report.ranked] == [1, 2, 3, 4, 5]
        assert report.ranked[0].residual == pytest.approx(2.0)
        assert report.ranked[0].predicted == pytest.approx(8.0)
        assert report.ranked[0].x == 4.0

    def test_ties_keep_input_order(self) -> None:
        rows = [
            _row("first", 2.0, 9.0),
            _row("low", 1.0, 1.0),
            _row("second", 2.0, 9.0),
            _row("mid", 3.0, 5.0),
        ]
        report = detect_outliers(rows, Metric.CHASE_PERC, Metric.RUN_VALUE_RATE, k=1)
        order = [r.row.key[0] for r in report.ranked]
        assert order.index("first") < order.index("second")
        assert report.ranked[0].row.key == ("first",)
        assert report.ranked[0].flag is OutlierFlag.HIGH
        assert report.ranked[1].flag is OutlierFlag.NONE

    def test_default_k_is_three(self) -> None:
        rows = [_row(str(i), float(i), float((i * 7) % 5)) for i in range(10)]
        report = detect_outliers(rows, Metric.CHASE_PERC, Metric.RUN_VALUE_RATE)
        assert sum(r.flag is OutlierFlag.HIGH for r in report.ranked) == 3
        assert sum(r.flag is OutlierFlag.LOW for r in report.ranked) == 3

    def test_high_wins_when_flags_overlap(self) -> None:
        rows = _five_rows()[:3]
        report = detect_outliers(rows, Metric.CHASE_PERC, Metric.RUN_VALUE_RATE, k=2)
        assert [r.flag for r in report.ranked] == [OutlierFlag.HIGH, OutlierFlag.HIGH, OutlierFlag.LOW]

    def test_rows_missing_a_metric_are_skipped(self) -> None:
        rows = [*_five_rows(), _row("no-x", None, 4.0), _row("no-y", 3.0, None)]
        report = detect_outliers(rows, Metric.CHASE_PERC, Metric.RUN_VALUE_RATE, k=1)
        assert len(report.ranked) == 5
        assert report.fit.slope == pytest.approx(2.0)

    def test_too_few_usable_rows(self) -> None:
        rows = [_row("a", 1.0, 1.0), _row("b", None, 2.0)]
        with pytest.raises(OutlierFitError):
            detect_outliers(rows, Metric.CHASE_PERC, Metric.RUN_VALUE_RATE)

    def test_negative_k_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            detect_outliers(_five_rows(), Metric.CHASE_PERC, Metric.RUN_VALUE_RATE, k=-1)

    def test_records_metrics_on_report(self) -> None:
        report = detect_outliers(_five_rows(), Metric.CHASE_PERC, Metric.RUN_VALUE_RATE)
        assert report.predictor is Metric.CHASE_PERC
        assert report.response is Metric.RUN_VALUE_RATE
