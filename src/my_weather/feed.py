"""Environment Canada city feed: fetch and deserialize into RawEntry records.

The feed is Atom (despite the ``/rss/`` path). Each ``<entry>`` carries a
title, a category term and an HTML summary ending in a
"Forecast issued ..." timestamp that is cut off here.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Union

import feedparser
import httpx

from my_weather.config import DEFAULT_CONFIG, Config
from my_weather.errors import FeedError
from my_weather.schemas import Category, RawEntry

logger = logging.getLogger(__name__)

NO_WARNINGS_PREFIX = "No watches or warnings in effect"
ISSUED_MARKER = "Forecast issued"


# ── Deserialization ──────────────────────────────────────────────────


def truncate_summary(summary: str) -> str:
    """Drop everything from the last "Forecast issued" marker on."""
    index = summary.rfind(ISSUED_MARKER)
    if index == -1:
        return summary
    return summary[:index].strip()


def _category_of(item) -> Optional[Category]:
    tags = item.get("tags") or []
    if not tags:
        return None
    term = tags[0].get("term")
    try:
        return Category(term)
    except ValueError:
        return None


def parse_feed(content: Union[bytes, str]) -> list[RawEntry]:
    """Parse Atom feed content into RawEntry records in feed order.

    Entries with an unknown category are skipped. The "no watches or
    warnings in effect" placeholder is not a warning and is skipped too.
    """
    parsed = feedparser.parse(content)
    if parsed.get("bozo") and not parsed.entries:
        raise FeedError(f"Unreadable feed: {parsed.get('bozo_exception')}")

    entries: list[RawEntry] = []
    for item in parsed.entries:
        title = item.get("title", "")
        category = _category_of(item)
        if category is None:
            logger.warning("Skipping feed entry with unknown category: %r", title)
            continue
        if category is Category.WARNING and title.startswith(NO_WARNINGS_PREFIX):
            continue

        entries.append(
            RawEntry(
                title=title,
                category=category,
                summary=truncate_summary(item.get("summary", "")),
            )
        )

    logger.info("Parsed %d entries from feed", len(entries))
    return entries


def current_entries(entries: Iterable[RawEntry]) -> list[RawEntry]:
    """Only current conditions and warnings."""
    return [
        e for e in entries
        if e.category in (Category.CURRENT, Category.WARNING)
    ]


# ── Client ───────────────────────────────────────────────────────────


class FeedClient:
    """Fetches the city feed over HTTP.

    A failed request is raised as FeedError; there is no retry.
    """

    def __init__(
        self, url: Optional[str] = None, config: Config = DEFAULT_CONFIG,
    ) -> None:
        self.url = url or config.feed.url
        self._client = httpx.Client(
            timeout=config.feed.timeout_seconds,
            headers={
                "User-Agent": config.feed.user_agent,
                "Accept": "application/atom+xml, application/xml, */*",
            },
            follow_redirects=True,
        )
        logger.info("FeedClient initialized for %s", self.url)

    def close(self) -> None:
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def fetch_entries(self) -> list[RawEntry]:
        """GET the feed and deserialize it."""
        try:
            resp = self._client.get(self.url)
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            raise FeedError(f"Feed request to {self.url} failed: {exc}") from exc

        return parse_feed(resp.content)
