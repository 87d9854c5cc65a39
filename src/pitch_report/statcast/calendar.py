from __future__ import annotations

from datetime import date

# Season-specific overrides for non-standard start/end dates.
_SEASON_OVERRIDES: dict[int, tuple[date, date]] = {
    2020: (date(2020, 7, 23), date(2020, 10, 28)),
}

_DEFAULT_START_MONTH_DAY = (3, 20)
_DEFAULT_END_MONTH_DAY = (11, 5)


def season_date_range(season: int) -> tuple[date, date]:
    """Return the (start, end) dates for an MLB season, inclusive."""
    if season in _SEASON_OVERRIDES:
        return _SEASON_OVERRIDES[season]
    return date(season, *_DEFAULT_START_MONTH_DAY), date(season, *_DEFAULT_END_MONTH_DAY)


def parse_date_range(start: str | None, end: str | None, season: int | None) -> tuple[date, date]:
    """Resolve command-line date options into an inclusive (start, end) pair.

    An explicit start wins over a season; a missing end means a single day, or
    the end of the season when only a season is given.
    """
    if start is None:
        if season is None:
            raise ValueError("Give either --start or --season")
        season_start, season_end = season_date_range(season)
        resolved_start = season_start
        resolved_end = date.fromisoformat(end) if end else season_end
    else:
        resolved_start = date.fromisoformat(start)
        if end:
            resolved_end = date.fromisoformat(end)
        elif season is not None:
            resolved_end = season_date_range(season)[1]
        else:
            resolved_end = resolved_start
    if resolved_start > resolved_end:
        raise ValueError(f"Start date {resolved_start} is after end date {resolved_end}")
    return resolved_start, resolved_end
