"""Pydantic models for feed entries and the parsed forecast model.

Everything here is frozen: a grouping pass builds the records once per feed
snapshot and nothing mutates them afterwards.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

from my_weather.units import celsius_to_fahrenheit, format_celsius, format_fahrenheit

# ── Enums ──────────────────────────────────────────────────────────────

class Category(str, Enum):
    """Feed ``<category term=...>`` values."""

    CURRENT = "Current Conditions"
    FORECAST = "Weather Forecasts"
    WARNING = "Warnings and Watches"


class TemperatureKind(str, Enum):
    HIGH = "High"
    LOW = "Low"
    CURRENT = "Current"


class DayNight(str, Enum):
    DAY = "Day"
    NIGHT = "Night"


class DayOfWeek(str, Enum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"


# ── Raw feed entry ─────────────────────────────────────────────────────

class RawEntry(BaseModel):
    title: str
    category: Category
    summary: str = ""

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return self.title


# ── Temperatures ───────────────────────────────────────────────────────
#
# Celsius and Fahrenheit are separate model types with the same shape and
# no unit field. A field declared as CelsiusTemperature rejects a
# FahrenheitTemperature instance at validation time.

class _Temperature(BaseModel):
    kind: TemperatureKind
    value: float

    model_config = {"frozen": True}


class CelsiusTemperature(_Temperature):
    def to_fahrenheit(self) -> FahrenheitTemperature:
        return FahrenheitTemperature(
            kind=self.kind, value=celsius_to_fahrenheit(self.value),
        )

    def __str__(self) -> str:
        return format_celsius(self.value)


class FahrenheitTemperature(_Temperature):
    def __str__(self) -> str:
        return format_fahrenheit(self.value)


# ── Parsed records ─────────────────────────────────────────────────────

class Forecast(BaseModel):
    """One parsed forecast title, e.g. ``Monday night: Clear. Low minus 9.``"""

    celsius: CelsiusTemperature
    fahrenheit: FahrenheitTemperature
    description: str
    day: DayNight
    day_of_week: DayOfWeek

    model_config = {"frozen": True}


class ForecastWithEntry(BaseModel):
    forecast: Forecast
    entry: RawEntry

    model_config = {"frozen": True}


class CurrentForecast(BaseModel):
    celsius: CelsiusTemperature
    fahrenheit: FahrenheitTemperature
    description: str

    model_config = {"frozen": True}


# ── Summary markup ─────────────────────────────────────────────────────

_BR_RE = re.compile(r"<br\s*/?>")


def remap_html(text: str) -> str:
    """Convert feed summary HTML into display markup.

    Sentence breaks become newlines and the ``minus ``/``plus `` word forms
    collapse to a sign.
    """
    text = text.replace("&deg;", "°")
    text = _BR_RE.sub("", text)
    return (
        text.replace(". ", ".\n")
        .replace("minus ", "-")
        .replace("plus ", "")
    )


# ── ForecastEntry union ────────────────────────────────────────────────

class WarningEntry(BaseModel):
    type: Literal["Warning"] = "Warning"
    entry: RawEntry

    model_config = {"frozen": True}

    def summary(self) -> str:
        return remap_html(self.entry.summary)


class CurrentEntry(BaseModel):
    type: Literal["Current"] = "Current"
    current: CurrentForecast
    entry: RawEntry

    model_config = {"frozen": True}

    def summary(self) -> str:
        return remap_html(self.entry.summary)


class FutureEntry(BaseModel):
    """Day and night forecasts for one weekday.

    ``sequence`` is the feed index where the weekday was first seen.
    """

    type: Literal["Future"] = "Future"
    sequence: int
    day: Optional[ForecastWithEntry] = None
    night: Optional[ForecastWithEntry] = None

    model_config = {"frozen": True}

    @property
    def day_of_week(self) -> Optional[DayOfWeek]:
        slot = self.day or self.night
        return slot.forecast.day_of_week if slot else None

    def summary(self) -> str:
        parts = []
        if self.day is not None:
            parts.append(f"<b>Day:</b>\n{remap_html(self.day.entry.summary)}")
        if self.night is not None:
            parts.append(f"<b>Night:</b>\n{remap_html(self.night.entry.summary)}")
        return "\n\n".join(parts)


ForecastEntry = Annotated[
    Union[WarningEntry, CurrentEntry, FutureEntry],
    Field(discriminator="type"),
]


# ── Display snapshot ───────────────────────────────────────────────────

class WeatherResponse(BaseModel):
    """A grouped feed snapshot as handed to display layers."""

    forecasts: list[ForecastEntry] = Field(default_factory=list)
    fetched: str
