from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from datetime import date

    import pandas as pd

logger = logging.getLogger(__name__)


@runtime_checkable
class StatcastFetcher(Protocol):
    def fetch_range(self, start: date, end: date, *, team: str | None = None) -> pd.DataFrame: ...


class PybaseballFetcher:
    """Pulls pitch-level rows from Baseball Savant through pybaseball.

    Network and parsing failures are left to propagate to the caller.
    """

    def fetch_range(self, start: date, end: date, *, team: str | None = None) -> pd.DataFrame:
        import pybaseball

        start_str = start.strftime("%Y-%m-%d")
        end_str = end.strftime("%Y-%m-%d")
        logger.info("Fetching Statcast pitches %s to %s%s", start_str, end_str, f" for {team}" if team else "")
        frame = pybaseball.statcast(start_dt=start_str, end_dt=end_str, team=team, verbose=False)
        logger.debug("Fetched %d pitches", len(frame))
        return frame
