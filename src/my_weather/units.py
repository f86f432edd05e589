"""Celsius to Fahrenheit conversion and display helpers.

The feed reports Celsius only. Fahrenheit values are derived once, when a
title is parsed, using the same linear map the desktop shell has always
shown: ``f = c * 2 + 30``. This is a rough mental-arithmetic rule, not the
exact ``c * 9 / 5 + 32``; keep it unless the displayed numbers are meant to
change.
"""

from __future__ import annotations

from enum import Enum


def celsius_to_fahrenheit(c: float) -> float:
    """Approximate Celsius to Fahrenheit.

    >>> celsius_to_fahrenheit(-9.0)
    12.0
    >>> celsius_to_fahrenheit(0.0)
    30.0
    """
    return c * 2 + 30


def format_celsius(value: float) -> str:
    """Full precision, no trailing ``.0`` (``-3.4°C``, ``-9°C``)."""
    return f"{value:.15g}°C"


def format_fahrenheit(value: float) -> str:
    """Rounded to the nearest whole degree (``23°F``)."""
    return f"{value:.0f}°F"


class TempUnit(str, Enum):
    """Which of a record's two temperatures to display."""

    CELSIUS = "celsius"
    FAHRENHEIT = "fahrenheit"

    def pick(self, record):
        """Return ``record.celsius`` or ``record.fahrenheit``.

        Works for any record carrying both fields (Forecast, CurrentForecast).
        """
        if self is TempUnit.FAHRENHEIT:
            return record.fahrenheit
        return record.celsius
