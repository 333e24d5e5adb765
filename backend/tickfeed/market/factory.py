"""Factory for wiring the market feed components together."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass

import numpy as np

from .broadcaster import BroadcastLoop
from .config import FeedConfig
from .hub import FeedHub
from .registry import SubscriptionRegistry
from .seed_ohlc import BASE_OHLC
from .simulator import TickGenerator
from .store import InstrumentStore

logger = logging.getLogger(__name__)


@dataclass
class MarketFeed:
    """Every component of one running feed, sharing a single InstrumentStore."""

    config: FeedConfig
    store: InstrumentStore
    generator: TickGenerator
    registry: SubscriptionRegistry
    hub: FeedHub
    broadcaster: BroadcastLoop


def create_market_feed(
    config: FeedConfig | None = None,
    seed: Mapping[str, Mapping[str, float]] | None = None,
    rng: np.random.Generator | None = None,
) -> MarketFeed:
    """Build a feed from config (defaults to FeedConfig.from_env()).

    Returns an unstarted feed. Caller must await feed.broadcaster.start().
    """
    config = config or FeedConfig.from_env()
    store = InstrumentStore(seed if seed is not None else BASE_OHLC)
    generator = TickGenerator(store, rng=rng)
    registry = SubscriptionRegistry(store.symbols, max_rate_per_second=config.max_rate_per_second)
    broadcaster = BroadcastLoop(
        generator,
        registry,
        hours=config.market_hours,
        interval=config.broadcast_interval,
        closed_interval=config.closed_poll_seconds,
        send_timeout=config.send_timeout_seconds,
    )
    logger.info(
        "Market feed: %d instruments, %dms period, %d msg/s per client",
        len(store),
        config.broadcast_interval_ms,
        config.max_rate_per_second,
    )
    return MarketFeed(
        config=config,
        store=store,
        generator=generator,
        registry=registry,
        hub=FeedHub(store, registry),
        broadcaster=broadcaster,
    )
