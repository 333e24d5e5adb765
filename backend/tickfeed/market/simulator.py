"""Bounded random-walk tick generator."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

import numpy as np

from .models import Instrument
from .store import InstrumentStore

logger = logging.getLogger(__name__)


class TickGenerator:
    """Advances a random subset of instruments by one tick per cycle.

    Per cycle:
        k       ~ U_int[min_batch, max_batch]   (capped at the universe size)
        symbols = k distinct symbols drawn uniformly
        delta   ~ U[-max_move_pct, +max_move_pct]
        close'  = round(close * (1 + delta), 4)
        volume' = volume + U_int[volume_range)

    Selection goes through Generator.choice(replace=False), which is bounded
    regardless of universe size.
    """

    def __init__(
        self,
        store: InstrumentStore,
        rng: np.random.Generator | None = None,
        min_batch: int = 3,
        max_batch: int = 6,
        max_move_pct: float = 0.004,
        volume_range: tuple[int, int] = (5_000, 25_000),
    ) -> None:
        if min_batch < 0 or max_batch < min_batch:
            raise ValueError(f"Invalid batch range [{min_batch}, {max_batch}]")
        self._store = store
        self._rng = rng if rng is not None else np.random.default_rng()
        self._min_batch = min_batch
        self._max_batch = max_batch
        self._max_move = max_move_pct
        self._volume_low, self._volume_high = volume_range

    @property
    def store(self) -> InstrumentStore:
        return self._store

    def select_symbols(self) -> list[str]:
        """Pick this cycle's symbols: distinct, uniformly chosen."""
        universe = self._store.symbols
        if not universe:
            return []
        count = int(self._rng.integers(self._min_batch, self._max_batch + 1))
        count = min(count, len(universe))
        picks = self._rng.choice(len(universe), size=count, replace=False)
        return [universe[i] for i in picks]

    def generate(self, now: datetime | None = None) -> list[Instrument]:
        """Advance one batch of instruments. Returns post-tick snapshots in selection order.

        This is the hot path, called every broadcast cycle.
        """
        ts = now or datetime.now(timezone.utc)
        batch: list[Instrument] = []
        for symbol in self.select_symbols():
            current = self._store.get(symbol)
            delta = float(self._rng.uniform(-self._max_move, self._max_move))
            new_price = round(current.close * (1 + delta), 4)
            volume_increment = int(self._rng.integers(self._volume_low, self._volume_high))
            batch.append(
                self._store.apply_tick(
                    symbol,
                    close=new_price,
                    volume_increment=volume_increment,
                    timestamp=ts,
                )
            )
        logger.debug("Generated %d ticks: %s", len(batch), [i.symbol for i in batch])
        return batch
