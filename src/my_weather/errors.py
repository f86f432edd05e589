"""Exception types for feed parsing and fetching.

Parser functions raise these to their direct caller. The grouping engine
catches ParseError per entry, so a malformed title never aborts a pass.
"""

from __future__ import annotations


class WeatherError(Exception):
    """Base exception for the my_weather package."""


class ParseError(WeatherError):
    """Base for all grammar failures on a single feed title."""


class NumberParseError(ParseError):
    """Raised when no numeric magnitude can be read at the current position."""


class TemperaturePhraseError(ParseError):
    """Raised when no High/Low lead-in phrase starts at the current position."""


class TitleParseError(ParseError):
    """Raised when a forecast title does not match the title grammar.

    The underlying grammar failure is chained as ``__cause__``.
    """

    def __init__(self, title: str, reason: str) -> None:
        super().__init__(f"{reason}: {title!r}")
        self.title = title
        self.reason = reason


class CurrentForecastError(ParseError):
    """Raised when a current-conditions title is malformed."""


class UnrecognizedDayKey(ParseError):
    """Raised when a forecast title does not start with a weekday name."""


class FeedError(WeatherError):
    """Raised when the feed cannot be fetched or deserialized."""
