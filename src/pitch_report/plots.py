"""Chart rendering. Each function writes one image and returns its path."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import seaborn as sns  # noqa: E402
from matplotlib.patches import Rectangle  # noqa: E402

from pitch_report.aggregate import format_key  # noqa: E402
from pitch_report.outliers import OutlierFlag  # noqa: E402
from pitch_report.statcast.columns import Column  # noqa: E402

if TYPE_CHECKING:
    from pathlib import Path

    from matplotlib.axes import Axes

    from pitch_report.aggregate import GroupingKey
    from pitch_report.outliers import OutlierReport
    from pitch_report.selectors import Selection

logger = logging.getLogger(__name__)

# Rulebook zone for an average hitter, catcher's view, in feet.
_ZONE_LEFT = -0.83
_ZONE_WIDTH = 1.66
_ZONE_BOTTOM = 1.5
_ZONE_HEIGHT = 2.0

_FIGSIZE = (6, 7)


def _draw_zone(ax: Axes, selection: Selection) -> None:
    ax.add_patch(Rectangle((_ZONE_LEFT, _ZONE_BOTTOM), _ZONE_WIDTH, _ZONE_HEIGHT, fill=False, edgecolor="black", lw=2))
    ax.set_xlim(-2.0, 2.0)
    ax.set_ylim(0.0, 5.0)
    ax.set_aspect("equal")
    ax.set_xlabel("Horizontal location (ft, catcher's view)")
    ax.set_ylabel("Height (ft)")
    ax.set_title(f"{selection.name}: {selection.sample_size} {selection.kind}")


def _save(fig: plt.Figure, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    fig.savefig(path, dpi=150)
    plt.close(fig)
    logger.info("Wrote %s", path)
    return path


def plot_hard_hit_heatmap(selection: Selection, path: Path) -> Path:
    fig, ax = plt.subplots(figsize=_FIGSIZE)
    pitches = selection.pitches
    if len(pitches) >= 2:
        sns.kdeplot(data=pitches, x=Column.PLATE_X.value, y=Column.PLATE_Z.value, fill=True, cmap="Reds", ax=ax)
    ax.scatter(pitches[Column.PLATE_X], pitches[Column.PLATE_Z], s=12, color="black", alpha=0.5)
    _draw_zone(ax, selection)
    return _save(fig, path)


def plot_pitch_locations(selection: Selection, path: Path) -> Path:
    fig, ax = plt.subplots(figsize=_FIGSIZE)
    pitches = selection.pitches
    hue = Column.PITCH_TYPE.value if Column.PITCH_TYPE in pitches.columns else None
    sns.scatterplot(data=pitches, x=Column.PLATE_X.value, y=Column.PLATE_Z.value, hue=hue, s=25, ax=ax)
    _draw_zone(ax, selection)
    return _save(fig, path)


def plot_regression(report: OutlierReport, key: GroupingKey, path: Path) -> Path:
    """Scatter of every ranked row with the fitted line; flagged rows are labelled."""
    fig, ax = plt.subplots(figsize=(8, 6))
    xs = [r.x for r in report.ranked]
    ys = [r.observed for r in report.ranked]
    colors = [
        "tab:red" if r.flag is OutlierFlag.HIGH else "tab:blue" if r.flag is OutlierFlag.LOW else "gray"
        for r in report.ranked
    ]
    ax.scatter(xs, ys, c=colors)
    lo, hi = min(xs), max(xs)
    ax.plot([lo, hi], [report.fit.predict(lo), report.fit.predict(hi)], color="black", lw=1)
    for ranked in report.flagged:
        ax.annotate(format_key(ranked.row.key), (ranked.x, ranked.observed), textcoords="offset points", xytext=(4, 4))
    ax.set_xlabel(report.predictor.value)
    ax.set_ylabel(report.response.value)
    ax.set_title(f"{report.response.value} vs {report.predictor.value} by {key.cli_name}")
    return _save(fig, path)
