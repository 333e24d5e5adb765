"""Data models for the simulated market feed."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from .seed_ohlc import QUOTE_CURRENCY, QUOTE_SOURCE


def format_timestamp(ts: datetime) -> str:
    """ISO-8601 UTC with millisecond precision, e.g. 2024-05-01T10:15:00.123Z."""
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True, slots=True)
class Instrument:
    """Immutable snapshot of one instrument's session state.

    The InstrumentStore swaps in a new snapshot on every tick, so a reference
    handed out to a reader never changes underneath it.
    """

    symbol: str
    date: str  # Trading date, YYYY-MM-DD
    open: float
    high: float
    low: float
    close: float
    volume: int
    timestamp: datetime


@dataclass(frozen=True, slots=True)
class Quote:
    """Outbound quote derived from an Instrument snapshot."""

    symbol: str
    last: float
    open: float
    high: float
    low: float
    volume: int
    event_ts: str
    currency: str = QUOTE_CURRENCY
    source: str = QUOTE_SOURCE

    @classmethod
    def from_instrument(cls, instrument: Instrument) -> Quote:
        return cls(
            symbol=instrument.symbol,
            last=instrument.close,
            open=instrument.open,
            high=instrument.high,
            low=instrument.low,
            volume=instrument.volume,
            event_ts=format_timestamp(instrument.timestamp),
        )

    @property
    def day_change(self) -> float:
        """Absolute change from the session open."""
        return round(self.last - self.open, 4)

    @property
    def day_change_percent(self) -> float:
        """Percentage change from the session open."""
        if self.open == 0:
            return 0.0
        return round(self.day_change / self.open * 100, 4)

    def to_dict(self) -> dict:
        """Serialize for JSON / WebSocket transmission."""
        return {
            "symbol": self.symbol,
            "last": self.last,
            "open": self.open,
            "high": self.high,
            "low": self.low,
            "volume": self.volume,
            "day_change": self.day_change,
            "day_change_percent": self.day_change_percent,
            "event_ts": self.event_ts,
            "currency": self.currency,
            "source": self.source,
        }
