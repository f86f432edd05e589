"""Central configuration for the weather feed reader."""

from __future__ import annotations

from dataclasses import dataclass, field

from my_weather.units import TempUnit


@dataclass(frozen=True)
class FeedConfig:
    """Where and how the Atom feed is fetched."""

    url: str = "https://weather.gc.ca/rss/city/qc-58_e.xml"
    timeout_seconds: float = 15.0
    user_agent: str = "(my-weather, contact@example.com)"


@dataclass(frozen=True)
class RefreshConfig:
    """Watch-mode polling (the desktop shell refreshed every 15 minutes)."""

    interval_seconds: int = 15 * 60


@dataclass(frozen=True)
class DisplayConfig:
    unit: TempUnit = TempUnit.CELSIUS


@dataclass(frozen=True)
class Config:
    """Top-level configuration aggregating all sub-configs."""

    feed: FeedConfig = field(default_factory=FeedConfig)
    refresh: RefreshConfig = field(default_factory=RefreshConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)


# Singleton default config; import this throughout the project.
DEFAULT_CONFIG = Config()
