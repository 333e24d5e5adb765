"""Environment-driven configuration for the feed."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .clock import MarketHours

ENV_PREFIX = "TICKFEED_"


def _env(name: str) -> str:
    return os.environ.get(ENV_PREFIX + name, "").strip()


def _int(name: str, default: int) -> int:
    raw = _env(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from None


def _float(name: str, default: float) -> float:
    raw = _env(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name} must be a number, got {raw!r}") from None


def _minutes(name: str, default: int) -> int:
    """Parse HH:MM into minutes since midnight."""
    raw = _env(name)
    if not raw:
        return default
    try:
        hours, minutes = raw.split(":")
        value = int(hours) * 60 + int(minutes)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name} must be HH:MM, got {raw!r}") from None
    if not 0 <= value <= 24 * 60:
        raise ValueError(f"{ENV_PREFIX}{name} out of range: {raw!r}")
    return value


@dataclass(frozen=True)
class FeedConfig:
    """Runtime options. Defaults reproduce the reference simulator."""

    broadcast_interval_ms: int = 800
    closed_poll_seconds: float = 30.0
    send_timeout_seconds: float = 1.0
    max_rate_per_second: int = 50
    market_open_minute: int = 10 * 60
    market_close_minute: int = 19 * 60
    utc_offset_minutes: int = 330
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"

    @property
    def broadcast_interval(self) -> float:
        """Broadcast period in seconds."""
        return self.broadcast_interval_ms / 1000.0

    @property
    def market_hours(self) -> MarketHours:
        return MarketHours(
            open_minute=self.market_open_minute,
            close_minute=self.market_close_minute,
            utc_offset_minutes=self.utc_offset_minutes,
        )

    @classmethod
    def from_env(cls) -> FeedConfig:
        """Build from TICKFEED_* environment variables. Blank values mean default.

        Raises ValueError naming the variable when a value cannot be parsed.
        """
        defaults = cls()
        return cls(
            broadcast_interval_ms=_int("BROADCAST_INTERVAL_MS", defaults.broadcast_interval_ms),
            closed_poll_seconds=_float("CLOSED_POLL_SECONDS", defaults.closed_poll_seconds),
            send_timeout_seconds=_float("SEND_TIMEOUT_SECONDS", defaults.send_timeout_seconds),
            max_rate_per_second=_int("MAX_RATE_PER_SECOND", defaults.max_rate_per_second),
            market_open_minute=_minutes("MARKET_OPEN", defaults.market_open_minute),
            market_close_minute=_minutes("MARKET_CLOSE", defaults.market_close_minute),
            utc_offset_minutes=_int("UTC_OFFSET_MINUTES", defaults.utc_offset_minutes),
            host=_env("HOST") or defaults.host,
            port=_int("PORT", defaults.port),
            log_level=(_env("LOG_LEVEL") or defaults.log_level).upper(),
        )
