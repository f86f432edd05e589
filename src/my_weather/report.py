"""Output layer: plain-text forecast listing and JSON snapshot."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

from jinja2 import Template

from my_weather.schemas import (
    CurrentEntry,
    ForecastEntry,
    ForecastWithEntry,
    FutureEntry,
    WarningEntry,
    WeatherResponse,
)
from my_weather.units import TempUnit

logger = logging.getLogger(__name__)

FETCHED_FORMAT = "%x %X"


# ── Text listing ───────────────────────────────────────────────────────

_TEXT_TEMPLATE = Template("""\
{% for fc in forecasts -%}
{{ line(fc) }}
{% endfor -%}
""", keep_trailing_newline=True)


def _slot(label: str, slot: ForecastWithEntry, unit: TempUnit) -> str:
    fc = slot.forecast
    return f"{label}: {fc.description} {unit.pick(fc)}"


def _line(entry: ForecastEntry, unit: TempUnit) -> str:
    if isinstance(entry, WarningEntry):
        return f"WARNING: {entry.entry.title}"
    if isinstance(entry, CurrentEntry):
        return f"Now: {entry.current.description}, {unit.pick(entry.current)}"
    if isinstance(entry, FutureEntry):
        parts = []
        if entry.day is not None:
            parts.append(_slot(entry.day_of_week.value, entry.day, unit))
        if entry.night is not None:
            label = "Night" if parts else f"{entry.day_of_week.value} night"
            parts.append(_slot(label, entry.night, unit))
        return " | ".join(parts)
    raise TypeError(f"unhandled forecast entry {entry!r}")


def render_forecast_text(
    forecasts: Sequence[ForecastEntry], unit: TempUnit = TempUnit.CELSIUS,
) -> str:
    """One line per grouped entry, temperatures in the chosen unit."""
    return _TEXT_TEMPLATE.render(
        forecasts=forecasts,
        line=lambda fc: _line(fc, unit),
    )


# ── JSON snapshot ──────────────────────────────────────────────────────

def build_response(
    forecasts: Sequence[ForecastEntry], fetched: Optional[datetime] = None,
) -> WeatherResponse:
    """Wrap grouped entries with a local fetch timestamp."""
    stamp = (fetched or datetime.now()).strftime(FETCHED_FORMAT)
    return WeatherResponse(forecasts=list(forecasts), fetched=stamp)


def write_forecast_json(response: WeatherResponse, path: Path) -> Path:
    """Serialize a WeatherResponse to JSON and write it to ``path``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(response.model_dump(mode="json"), indent=2, ensure_ascii=False),
        encoding="utf-8",
    )
    logger.info("Wrote %d forecast entries to %s", len(response.forecasts), path)
    return path
