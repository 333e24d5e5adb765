"""Thread-safe in-memory instrument store."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import replace
from datetime import datetime, timezone
from threading import Lock

from .models import Instrument


class InstrumentStore:
    """Owns the current OHLC/volume state for a fixed universe of symbols.

    Writer: TickGenerator (driven by the BroadcastLoop).
    Readers: FeedHub snapshots, BroadcastLoop fan-out.

    Every accessor returns immutable Instrument snapshots; apply_tick() swaps
    in a new snapshot rather than mutating the old one.
    """

    def __init__(
        self,
        seed: Mapping[str, Mapping[str, float]],
        *,
        trading_date: str | None = None,
        now: datetime | None = None,
    ) -> None:
        ts = now or datetime.now(timezone.utc)
        date = trading_date or ts.date().isoformat()
        self._lock = Lock()
        self._instruments: dict[str, Instrument] = {
            symbol: Instrument(
                symbol=symbol,
                date=date,
                open=float(row["open"]),
                high=float(row["high"]),
                low=float(row["low"]),
                close=float(row["close"]),
                volume=int(row["volume"]),
                timestamp=ts,
            )
            for symbol, row in seed.items()
        }
        self._symbols: tuple[str, ...] = tuple(self._instruments)

    @property
    def symbols(self) -> tuple[str, ...]:
        """The fixed symbol universe, in seed order."""
        return self._symbols

    def get(self, symbol: str) -> Instrument:
        """Snapshot for a symbol. Raises KeyError for symbols outside the universe."""
        with self._lock:
            return self._instruments[symbol]

    def get_all(self) -> dict[str, Instrument]:
        """Snapshot of every instrument. Returns a shallow copy."""
        with self._lock:
            return dict(self._instruments)

    def get_many(self, symbols: Iterable[str]) -> list[Instrument]:
        """Snapshots for the given symbols in the given order; unknown symbols are skipped."""
        with self._lock:
            return [self._instruments[s] for s in symbols if s in self._instruments]

    def apply_tick(
        self,
        symbol: str,
        close: float,
        volume_increment: int,
        timestamp: datetime,
    ) -> Instrument:
        """Record a new last price for a symbol. Returns the updated snapshot.

        High and low are widened to contain the new close, so the
        low <= close <= high invariant always holds.
        """
        with self._lock:
            current = self._instruments[symbol]
            updated = replace(
                current,
                close=close,
                high=max(current.high, close),
                low=min(current.low, close),
                volume=current.volume + int(volume_increment),
                timestamp=timestamp,
            )
            self._instruments[symbol] = updated
            return updated

    def __len__(self) -> int:
        return len(self._symbols)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._instruments
