from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol, runtime_checkable

import pandas as pd

from pitch_report.statcast.columns import Column, column_or_missing

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)


@runtime_checkable
class NameResolver(Protocol):
    def resolve(self, ids: Iterable[int]) -> dict[int, str]: ...


def format_display_name(last: str, first: str) -> str:
    """Return the "Last, First" form used throughout the reports."""
    return f"{last.strip().title()}, {first.strip().title()}"


class PybaseballNameResolver:
    """Looks up MLBAM ids in the Chadwick register via pybaseball."""

    def resolve(self, ids: Iterable[int]) -> dict[int, str]:
        import pybaseball

        unique_ids = sorted({int(i) for i in ids})
        if not unique_ids:
            return {}
        lookup = pybaseball.playerid_reverse_lookup(unique_ids, key_type="mlbam")
        names: dict[int, str] = {}
        for _, row in lookup.iterrows():
            names[int(row["key_mlbam"])] = format_display_name(str(row["name_last"]), str(row["name_first"]))
        logger.debug("Resolved %d of %d batter ids", len(names), len(unique_ids))
        return names


def attach_batter_names(frame: pd.DataFrame, resolver: NameResolver) -> pd.DataFrame:
    """Left-join batter display names onto ``frame`` by MLBAM id.

    Ids the resolver does not know keep their rows with a missing name.
    """
    batter_ids = pd.to_numeric(column_or_missing(frame, Column.BATTER), errors="coerce")
    names = resolver.resolve(int(i) for i in batter_ids.dropna().unique())
    lookup = pd.DataFrame(
        {
            "_batter_key": pd.Series(list(names.keys()), dtype="float64"),
            Column.BATTER_NAME.value: pd.Series(list(names.values()), dtype="object"),
        }
    )
    keyed = frame.drop(columns=Column.BATTER_NAME.value, errors="ignore").assign(
        _batter_key=batter_ids.astype("float64")
    )
    joined = keyed.merge(lookup, on="_batter_key", how="left", validate="many_to_one")
    joined.index = frame.index
    missing = int(joined[Column.BATTER_NAME].isna().sum())
    if missing:
        logger.debug("%d pitches have no resolved batter name", missing)
    return joined.drop(columns="_batter_key")
