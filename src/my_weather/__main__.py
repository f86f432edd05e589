"""CLI entry point: run via `python -m my_weather`.

Fetches the city feed, groups it, and prints one line per day.

  -c / --current   print only current conditions and warnings (titles)
  --unit           celsius (default) or fahrenheit
  --json PATH      also write the grouped snapshot as JSON
  --watch          refetch every --interval seconds
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
import time
from pathlib import Path

from dotenv import load_dotenv

from my_weather.config import DEFAULT_CONFIG
from my_weather.errors import FeedError
from my_weather.feed import FeedClient, current_entries
from my_weather.grouping import to_forecast
from my_weather.report import build_response, render_forecast_text, write_forecast_json
from my_weather.units import TempUnit

load_dotenv(".env.local")

logger = logging.getLogger("my_weather")


def _output(text: str) -> None:
    """Write text to stdout (avoids bare print() for lint compliance)."""
    sys.stdout.write(text + "\n")


def _run_once(client: FeedClient, args) -> int:
    """Fetch, group and display one feed snapshot."""
    try:
        entries = client.fetch_entries()
    except FeedError:
        logger.exception("Fetching the forecast failed")
        return 1

    if args.current:
        for entry in current_entries(entries):
            _output(str(entry))
        return 0

    forecasts = to_forecast(entries)
    _output(render_forecast_text(forecasts, TempUnit(args.unit)).rstrip("\n"))

    if args.json:
        write_forecast_json(build_response(forecasts), Path(args.json))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Parse arguments and run one fetch, or keep refetching with --watch.

    Parameters
    ----------
    argv : list of CLI args. Defaults to [] (one fetch, Celsius).
           Pass sys.argv[1:] for real CLI usage.
    """
    if argv is None:
        argv = []
    log_level = os.environ.get("LOGLEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stdout,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    parser = argparse.ArgumentParser(
        prog="my_weather",
        description="Environment Canada city forecast reader",
    )
    parser.add_argument(
        "-c", "--current", action="store_true",
        help="Only show current conditions and warnings",
    )
    parser.add_argument(
        "--unit", choices=[u.value for u in TempUnit],
        default=DEFAULT_CONFIG.display.unit.value,
        help="Temperature unit to display (default: celsius)",
    )
    parser.add_argument(
        "--json", type=str, default=None,
        help="Write the grouped forecast snapshot to this JSON file",
    )
    parser.add_argument(
        "--url", type=str,
        default=os.environ.get("WEATHER_FEED_URL") or DEFAULT_CONFIG.feed.url,
        help="Feed URL (env: WEATHER_FEED_URL)",
    )
    parser.add_argument(
        "--watch", action="store_true",
        help="Refetch continuously at --interval seconds",
    )
    parser.add_argument(
        "--interval", type=int, default=DEFAULT_CONFIG.refresh.interval_seconds,
        help="Refresh interval in seconds (default: 900)",
    )

    args = parser.parse_args(argv)

    with FeedClient(url=args.url) as client:
        while True:
            status = _run_once(client, args)
            if not args.watch:
                return status

            logger.info("Watching; next update in %d seconds", args.interval)
            time.sleep(args.interval)


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
