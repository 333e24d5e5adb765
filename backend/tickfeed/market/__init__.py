"""Simulated market feed subsystem for tickfeed.

Public API:
    Instrument          - Immutable OHLC/volume snapshot dataclass
    Quote               - Outbound quote derived from an Instrument
    InstrumentStore     - Thread-safe store of the instrument universe
    TickGenerator       - Bounded random-walk tick generator
    MarketHours         - Fixed-offset trading-hours gate
    RateLimiter         - Per-connection fixed-window send cap
    SubscriptionRegistry - Per-connection subscription sets
    MessageChannel      - Abstract outbound channel for one client
    FeedHub             - Inbound client event handling
    BroadcastLoop       - Periodic tick + fan-out scheduler
    FeedConfig          - Environment-driven configuration
    create_market_feed  - Factory wiring all of the above
    create_stream_router - FastAPI router factory for the WebSocket endpoint
"""

from .broadcaster import BroadcastLoop
from .clock import MarketHours, is_market_open
from .config import FeedConfig
from .factory import MarketFeed, create_market_feed
from .hub import FeedHub
from .interface import MessageChannel
from .models import Instrument, Quote
from .rate_limit import RateLimiter
from .registry import ConnectionState, SubscriptionRegistry
from .simulator import TickGenerator
from .store import InstrumentStore
from .stream import create_stream_router

__all__ = [
    "BroadcastLoop",
    "ConnectionState",
    "FeedConfig",
    "FeedHub",
    "Instrument",
    "InstrumentStore",
    "MarketFeed",
    "MarketHours",
    "MessageChannel",
    "Quote",
    "RateLimiter",
    "SubscriptionRegistry",
    "TickGenerator",
    "create_market_feed",
    "create_stream_router",
    "is_market_open",
]
