"""Forecast title grammar: turns feed titles into typed records.

Handles the two title shapes the feed uses:

    Monday night: Cloudy periods. Low minus 9.
    Current Conditions: Light Snow, -3.4°C

Each lexer step takes the unconsumed input and returns ``(value, rest)``.
Failures raise the typed errors from :mod:`my_weather.errors`.
"""

from __future__ import annotations

import re

from my_weather.errors import (
    CurrentForecastError,
    NumberParseError,
    ParseError,
    TemperaturePhraseError,
    TitleParseError,
)
from my_weather.schemas import (
    CelsiusTemperature,
    CurrentForecast,
    DayNight,
    DayOfWeek,
    Forecast,
    TemperatureKind,
)

# ── Number lexer ─────────────────────────────────────────────────────

# "minus 9", " plus 2", "zero", "6", "6.5"
_WORD_NUMBER_RE = re.compile(
    r"\s*(?P<sign>minus|plus|zero)?(?:\s*(?P<digits>\d+(?:\.\d+)?))?"
)

# "-3.4", " 12 "
_SIGNED_NUMBER_RE = re.compile(r"\s*(?P<neg>-)?(?P<digits>\d+(?:\.\d+)?)\s*")


def parse_number(text: str) -> tuple[float, str]:
    """Parse a magnitude with an optional sign word.

    ``zero`` is always 0.0, even when digits follow it.

    >>> parse_number("minus 9. Forecast issued")
    (-9.0, '. Forecast issued')
    >>> parse_number("zero by morning.")
    (0.0, ' by morning.')
    """
    m = _WORD_NUMBER_RE.match(text)
    sign = m.group("sign")
    digits = m.group("digits")
    rest = text[m.end():]

    if sign == "zero":
        return 0.0, rest
    if digits is None:
        raise NumberParseError(f"expected digits in {text!r}")

    value = float(digits)
    if sign == "minus":
        value = -value
    return value, rest


def parse_signed_number(text: str) -> tuple[float, str]:
    """Parse a bare decimal with an optional leading ``-``."""
    m = _SIGNED_NUMBER_RE.match(text)
    if not m:
        raise NumberParseError(f"expected a signed decimal in {text!r}")

    value = float(m.group("digits"))
    if m.group("neg"):
        value = -value
    return value, text[m.end():]


# ── Temperature phrase ───────────────────────────────────────────────

# Checked in order at the current position; case-sensitive.
LEAD_IN_PHRASES: tuple[tuple[str, TemperatureKind], ...] = (
    ("High", TemperatureKind.HIGH),
    ("Temperature steady near", TemperatureKind.HIGH),
    ("Temperature rising to", TemperatureKind.HIGH),
    ("Low", TemperatureKind.LOW),
    ("Temperature falling to", TemperatureKind.LOW),
)

_LEAD_IN_RE = re.compile("|".join(re.escape(p) for p, _ in LEAD_IN_PHRASES))


def parse_temperature_phrase(text: str) -> tuple[CelsiusTemperature, str]:
    """Parse ``High 6`` / ``Low minus 9`` / ``Temperature rising to zero``."""
    for phrase, kind in LEAD_IN_PHRASES:
        if text.startswith(phrase):
            value, rest = parse_number(text[len(phrase):])
            return CelsiusTemperature(kind=kind, value=value), rest
    raise TemperaturePhraseError(f"no temperature lead-in at {text[:30]!r}")


# ── Title grammar ────────────────────────────────────────────────────

_NIGHT_RE = re.compile(r"\s*night:")


def parse_day_of_week(text: str) -> tuple[DayOfWeek, str]:
    for day in DayOfWeek:
        if text.startswith(day.value):
            return day, text[len(day.value):]
    raise TitleParseError(text, "title does not start with a weekday")


def parse_day_night(text: str) -> tuple[DayNight, str]:
    if text.startswith(":"):
        return DayNight.DAY, text[1:]
    m = _NIGHT_RE.match(text)
    if m:
        return DayNight.NIGHT, text[m.end():]
    raise TitleParseError(text, "expected ':' or 'night:' after weekday")


def parse_description(text: str) -> tuple[str, str]:
    """Split off everything before the first temperature lead-in."""
    m = _LEAD_IN_RE.search(text)
    if not m:
        raise TemperaturePhraseError(f"no temperature phrase in {text!r}")
    return text[:m.start()].strip(), text[m.start():]


def parse_forecast_title(title: str) -> Forecast:
    """Parse a future-forecast title into a Forecast.

    Raises TitleParseError, chained to the failing grammar step.
    """
    try:
        day_of_week, rest = parse_day_of_week(title)
        day, rest = parse_day_night(rest)
        description, rest = parse_description(rest)
        celsius, _ = parse_temperature_phrase(rest)
    except TitleParseError as exc:
        raise TitleParseError(title, exc.reason) from exc
    except ParseError as exc:
        raise TitleParseError(title, str(exc)) from exc

    return Forecast(
        celsius=celsius,
        fahrenheit=celsius.to_fahrenheit(),
        description=description,
        day=day,
        day_of_week=day_of_week,
    )


# ── Current conditions ───────────────────────────────────────────────

CURRENT_PREFIX = "Current Conditions: "


def parse_current_conditions(title: str) -> CurrentForecast:
    """Parse ``Current Conditions: <description>, <temp>°C``."""
    if not title.startswith(CURRENT_PREFIX):
        raise CurrentForecastError(f"missing {CURRENT_PREFIX!r} prefix: {title!r}")

    rest = title[len(CURRENT_PREFIX):]
    description, sep, rest = rest.partition(", ")
    if not sep:
        raise CurrentForecastError(f"missing ', ' before temperature: {title!r}")

    try:
        value, _ = parse_signed_number(rest)
    except NumberParseError as exc:
        raise CurrentForecastError(f"bad temperature in {title!r}") from exc

    celsius = CelsiusTemperature(kind=TemperatureKind.CURRENT, value=value)
    return CurrentForecast(
        celsius=celsius,
        fahrenheit=celsius.to_fahrenheit(),
        description=description,
    )
