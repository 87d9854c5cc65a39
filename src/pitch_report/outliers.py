"""Regression-residual outlier ranking over aggregated rows."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

import numpy as np

from pitch_report.aggregate import metric_value

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pitch_report.aggregate import AggregateRow, Metric

logger = logging.getLogger(__name__)

DEFAULT_OUTLIER_COUNT = 3


class OutlierFitError(Exception):
    """Raised when the rows cannot support a straight-line fit."""


class OutlierFlag(StrEnum):
    HIGH = "high"
    LOW = "low"
    NONE = ""


@dataclass(frozen=True)
class LineFit:
    slope: float
    intercept: float

    def predict(self, x: float) -> float:
        return self.slope * x + self.intercept


@dataclass(frozen=True)
class RankedRow:
    row: AggregateRow
    x: float
    observed: float
    predicted: float
    residual: float
    rank: int  # 1 = largest positive residual
    flag: OutlierFlag

    @property
    def is_outlier(self) -> bool:
        return self.flag is not OutlierFlag.NONE


@dataclass(frozen=True)
class OutlierReport:
    predictor: Metric
    response: Metric
    fit: LineFit
    ranked: list[RankedRow]

    @property
    def flagged(self) -> list[RankedRow]:
        return [r for r in self.ranked if r.is_outlier]


def fit_line(xs: Sequence[float], ys: Sequence[float]) -> LineFit:
    """Ordinary least squares fit of ys ~ xs."""
    if len(xs) < 2:
        raise OutlierFitError(f"Need at least two rows to fit a line, got {len(xs)}")
    x = np.asarray(xs, dtype=float)
    if np.ptp(x) == 0:
        raise OutlierFitError("Predictor is constant across rows; the fit is undefined")
    slope, intercept = np.polyfit(x, np.asarray(ys, dtype=float), deg=1)
    return LineFit(slope=float(slope), intercept=float(intercept))


def detect_outliers(
    rows: Sequence[AggregateRow],
    predictor: Metric,
    response: Metric,
    *,
    k: int = DEFAULT_OUTLIER_COUNT,
) -> OutlierReport:
    """Rank rows by their residual from the response ~ predictor line.

    Rows missing either metric are left out. The ``k`` largest positive
    residuals are flagged HIGH and the ``k`` largest negative ones LOW. Equal
    residuals keep the order the rows were given in.
    """
    if k < 0:
        raise ValueError(f"k must be non-negative, got {k}")
    usable: list[tuple[AggregateRow, float, float]] = []
    for row in rows:
        x = metric_value(row, predictor)
        y = metric_value(row, response)
        if x is None or y is None:
            continue
        usable.append((row, x, y))
    skipped = len(rows) - len(usable)
    if skipped:
        logger.debug("Skipped %d rows missing %s or %s", skipped, predictor, response)

    fit = fit_line([x for _, x, _ in usable], [y for _, _, y in usable])
    scored = [(row, x, y, fit.predict(x)) for row, x, y in usable]
    ordered = sorted(scored, key=lambda item: item[2] - item[3], reverse=True)

    n = len(ordered)
    ranked: list[RankedRow] = []
    for index, (row, x, observed, predicted) in enumerate(ordered):
        rank = index + 1
        if rank <= k:
            flag = OutlierFlag.HIGH
        elif rank > n - k:
            flag = OutlierFlag.LOW
        else:
            flag = OutlierFlag.NONE
        ranked.append(
            RankedRow(
                row=row,
                x=x,
                observed=observed,
                predicted=predicted,
                residual=observed - predicted,
                rank=rank,
                flag=flag,
            )
        )
    logger.debug(
        "Fit %s ~ %s over %d rows: slope=%.4f intercept=%.4f",
        response,
        predictor,
        n,
        fit.slope,
        fit.intercept,
    )
    return OutlierReport(predictor=predictor, response=response, fit=fit, ranked=ranked)
