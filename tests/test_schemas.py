"""Unit conversion, temperature typing, and summary markup tests."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from my_weather.parsers import parse_current_conditions, parse_forecast_title
from my_weather.schemas import (
    Category,
    CelsiusTemperature,
    CurrentEntry,
    DayNight,
    DayOfWeek,
    FahrenheitTemperature,
    Forecast,
    ForecastWithEntry,
    FutureEntry,
    RawEntry,
    TemperatureKind,
    WarningEntry,
    remap_html,
)
from my_weather.units import TempUnit, celsius_to_fahrenheit

# ── Conversion ─────────────────────────────────────────────────────────

class TestConversion:
    @pytest.mark.parametrize("c", [-40.0, -12.0, -9.0, -3.4, 0.0, 2.5, 31.0])
    def test_linear_approximation(self, c):
        """Fahrenheit is always c*2+30."""
        assert celsius_to_fahrenheit(c) == c * 2 + 30

    def test_not_the_exact_formula(self):
        """The exact 9/5+32 formula is not used."""
        assert celsius_to_fahrenheit(-9.0) == 12.0
        assert celsius_to_fahrenheit(-9.0) != pytest.approx(-9.0 * 9 / 5 + 32)

    def test_to_fahrenheit_keeps_kind(self):
        f = CelsiusTemperature(kind=TemperatureKind.LOW, value=-9.0).to_fahrenheit()
        assert isinstance(f, FahrenheitTemperature)
        assert f.kind == TemperatureKind.LOW
        assert f.value == 12.0


# ── Display ────────────────────────────────────────────────────────────

class TestDisplay:
    def test_celsius_full_precision(self):
        """Celsius prints at full precision without a trailing .0."""
        assert str(CelsiusTemperature(kind=TemperatureKind.CURRENT, value=-3.4)) == "-3.4°C"
        assert str(CelsiusTemperature(kind=TemperatureKind.LOW, value=-9.0)) == "-9°C"
        assert str(CelsiusTemperature(kind=TemperatureKind.HIGH, value=-3.1234567)) == "-3.1234567°C"

    def test_fahrenheit_rounded(self):
        """Fahrenheit rounds to whole degrees."""
        assert str(FahrenheitTemperature(kind=TemperatureKind.CURRENT, value=23.2)) == "23°F"
        assert str(FahrenheitTemperature(kind=TemperatureKind.HIGH, value=30.0)) == "30°F"

    def test_temp_unit_pick(self):
        cur = parse_current_conditions("Current Conditions: Light Snow, -3.4°C")
        assert TempUnit.CELSIUS.pick(cur) is cur.celsius
        assert TempUnit.FAHRENHEIT.pick(cur) is cur.fahrenheit


# ── Unit typing ────────────────────────────────────────────────────────

class TestUnitTyping:
    def test_fahrenheit_rejected_as_celsius(self):
        """A Fahrenheit value cannot fill a Celsius field."""
        f = FahrenheitTemperature(kind=TemperatureKind.HIGH, value=30.0)
        with pytest.raises(ValidationError):
            Forecast(
                celsius=f,
                fahrenheit=f,
                description="Sunny.",
                day=DayNight.DAY,
                day_of_week=DayOfWeek.MONDAY,
            )

    def test_celsius_rejected_as_fahrenheit(self):
        """A Celsius value cannot fill a Fahrenheit field."""
        c = CelsiusTemperature(kind=TemperatureKind.HIGH, value=0.0)
        with pytest.raises(ValidationError):
            Forecast(
                celsius=c,
                fahrenheit=c,
                description="Sunny.",
                day=DayNight.DAY,
                day_of_week=DayOfWeek.MONDAY,
            )

    def test_temperature_frozen(self):
        c = CelsiusTemperature(kind=TemperatureKind.HIGH, value=0.0)
        with pytest.raises(ValidationError):
            c.value = 5.0


# ── Summaries ──────────────────────────────────────────────────────────

def _with_entry(title: str, summary: str) -> ForecastWithEntry:
    entry = RawEntry(title=title, category=Category.FORECAST, summary=summary)
    return ForecastWithEntry(forecast=parse_forecast_title(title), entry=entry)


DAY = _with_entry("Monday: Sunny. High zero.", "Sunny. High zero.")
NIGHT = _with_entry("Monday night: Clear. Low minus 9.", "Clear. Low minus 9.")


class TestSummary:
    def test_remap_html(self):
        """&deg; becomes a degree sign and <br/> tags are removed."""
        text = "<b>Temperature:</b> -3.4&deg;C<br/> <b>Wind:</b> W 13 km/h<br />"
        assert remap_html(text) == "<b>Temperature:</b> -3.4°C <b>Wind:</b> W 13 km/h"

    def test_sentences_and_sign_words(self):
        """Sentences break onto lines; sign words collapse."""
        assert remap_html("Cloudy. Low minus 9. High plus 2.") == "Cloudy.\nLow -9.\nHigh 2."

    def test_warning(self):
        entry = RawEntry(
            title="SNOWFALL WARNING", category=Category.WARNING,
            summary="Snow. Total amounts of 15 cm.",
        )
        assert WarningEntry(entry=entry).summary() == "Snow.\nTotal amounts of 15 cm."

    def test_current(self):
        title = "Current Conditions: Light Snow, -3.4°C"
        entry = RawEntry(
            title=title, category=Category.CURRENT,
            summary="<b>Temperature:</b> -3.4&deg;C<br/>",
        )
        cur = CurrentEntry(current=parse_current_conditions(title), entry=entry)
        assert cur.summary() == "<b>Temperature:</b> -3.4°C"

    def test_future_day_and_night(self):
        """Day and night summaries are joined under headings."""
        fut = FutureEntry(sequence=0, day=DAY, night=NIGHT)
        assert fut.summary() == (
            "<b>Day:</b>\nSunny.\nHigh zero.\n\n<b>Night:</b>\nClear.\nLow -9."
        )

    def test_future_day_only(self):
        assert FutureEntry(sequence=0, day=DAY).summary() == "<b>Day:</b>\nSunny.\nHigh zero."

    def test_future_night_only(self):
        assert FutureEntry(sequence=0, night=NIGHT).summary() == "<b>Night:</b>\nClear.\nLow -9."

    def test_future_empty(self):
        """An empty record has no summary and no weekday."""
        fut = FutureEntry(sequence=3)
        assert fut.summary() == ""
        assert fut.day_of_week is None
