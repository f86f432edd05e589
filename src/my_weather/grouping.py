"""Entry grouping: folds raw feed entries into one record per weekday.

The feed lists day and night forecasts as separate entries ("Monday: ..."
then "Monday night: ..."). ``to_forecast`` merges them by weekday and keeps
the position where each weekday was first seen so the merged records can be
put back in feed order.

Current conditions and warnings are emitted as they are met; all merged
weekday records follow them, whatever their position in the feed was.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from my_weather.errors import ParseError, UnrecognizedDayKey
from my_weather.parsers import parse_current_conditions, parse_forecast_title
from my_weather.schemas import (
    Category,
    CurrentEntry,
    DayNight,
    DayOfWeek,
    ForecastEntry,
    ForecastWithEntry,
    FutureEntry,
    RawEntry,
    WarningEntry,
)

logger = logging.getLogger(__name__)


@dataclass
class _FutureDraft:
    """Mutable stand-in for a FutureEntry while a pass is running."""

    sequence: int
    day: Optional[ForecastWithEntry] = None
    night: Optional[ForecastWithEntry] = None

    def freeze(self) -> FutureEntry:
        return FutureEntry(sequence=self.sequence, day=self.day, night=self.night)


def day_key_for(entry: RawEntry) -> DayOfWeek:
    """Weekday named at the start of a forecast entry's title."""
    for day in DayOfWeek:
        if entry.title.startswith(day.value):
            return day
    raise UnrecognizedDayKey(f"no weekday at start of {entry.title!r}")


def _current_entry(entry: RawEntry) -> Optional[CurrentEntry]:
    try:
        current = parse_current_conditions(entry.title)
    except ParseError as exc:
        logger.warning("Skipping current conditions entry: %s", exc)
        return None
    return CurrentEntry(current=current, entry=entry)


def _future_forecast(entry: RawEntry) -> Optional[tuple[DayOfWeek, ForecastWithEntry]]:
    try:
        day_key = day_key_for(entry)
        forecast = parse_forecast_title(entry.title)
    except ParseError as exc:
        logger.warning("No forecast parsed from %r: %s", entry.title, exc)
        return None
    return day_key, ForecastWithEntry(forecast=forecast, entry=entry)


def to_forecast(entries: Iterable[RawEntry]) -> list[ForecastEntry]:
    """Classify, parse and group one feed snapshot.

    Never raises for a bad entry; unparseable entries are logged and dropped.
    """
    day_map: dict[DayOfWeek, _FutureDraft] = {}
    result: list[ForecastEntry] = []

    for index, entry in enumerate(entries):
        if entry.category is Category.CURRENT:
            current = _current_entry(entry)
            if current is not None:
                result.append(current)

        elif entry.category is Category.WARNING:
            result.append(WarningEntry(entry=entry))

        elif entry.category is Category.FORECAST:
            parsed = _future_forecast(entry)
            if parsed is None:
                continue
            day_key, fc_entry = parsed

            draft = day_map.get(day_key)
            if draft is None:
                draft = day_map[day_key] = _FutureDraft(sequence=index)
            if fc_entry.forecast.day is DayNight.DAY:
                draft.day = fc_entry
            else:
                draft.night = fc_entry

        else:
            logger.warning(
                "Skipping entry %r with unhandled category %r",
                entry.title, entry.category,
            )

    # Weekday records go back into first-seen feed order.
    futures = sorted(day_map.values(), key=lambda d: d.sequence)
    result.extend(d.freeze() for d in futures)

    logger.debug(
        "Grouped feed entries into %d records (%d weekdays)",
        len(result), len(futures),
    )
    return result
