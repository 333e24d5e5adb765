"""Per-connection subscription registry."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from threading import Lock
from typing import Any

from .interface import MessageChannel
from .rate_limit import RateLimiter

logger = logging.getLogger(__name__)


class ConnectionState:
    """Core-side record for one live client connection.

    Holds the channel reference (valid until disconnect), the subscription
    set and the connection's rate window. The subscription set has its own
    lock so client events can replace it while the BroadcastLoop reads it.
    """

    def __init__(self, connection_id: str, channel: MessageChannel, limiter: RateLimiter) -> None:
        self.connection_id = connection_id
        self.channel = channel
        self.limiter = limiter
        self._subscriptions: set[str] = set()
        self._lock = Lock()

    def replace(self, symbols: Iterable[str]) -> set[str]:
        with self._lock:
            self._subscriptions = set(symbols)
            return set(self._subscriptions)

    def discard(self, symbols: Iterable[str]) -> None:
        with self._lock:
            self._subscriptions.difference_update(symbols)

    def subscriptions(self) -> set[str]:
        with self._lock:
            return set(self._subscriptions)

    def is_subscribed(self, symbol: str) -> bool:
        with self._lock:
            return symbol in self._subscriptions

    def __repr__(self) -> str:
        return f"ConnectionState({self.connection_id!r}, subscriptions={len(self.subscriptions())})"


class SubscriptionRegistry:
    """Keyed store of ConnectionState records (connection id -> record).

    Malformed client input is tolerated, never rejected:
      - replace(): empty/None/non-list -> whole universe; unknown symbols dropped
      - remove():  non-list -> no-op; symbols not subscribed are ignored
    """

    def __init__(
        self,
        universe: Iterable[str],
        max_rate_per_second: int = 50,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self._universe: tuple[str, ...] = tuple(universe)
        self._known = frozenset(self._universe)
        self._max_rate = max_rate_per_second
        self._clock = clock
        self._connections: dict[str, ConnectionState] = {}
        self._lock = Lock()

    @property
    def universe(self) -> tuple[str, ...]:
        return self._universe

    def connect(self, connection_id: str, channel: MessageChannel) -> ConnectionState:
        """Register a new connection with an empty subscription set and a fresh rate window."""
        state = ConnectionState(
            connection_id,
            channel,
            RateLimiter(max_per_second=self._max_rate, clock=self._clock),
        )
        with self._lock:
            if connection_id in self._connections:
                logger.warning("Connection %s re-registered; previous state discarded", connection_id)
            self._connections[connection_id] = state
        return state

    def disconnect(self, connection_id: str) -> ConnectionState | None:
        """Discard a connection's record. No-op if unknown."""
        with self._lock:
            return self._connections.pop(connection_id, None)

    def get(self, connection_id: str) -> ConnectionState | None:
        with self._lock:
            return self._connections.get(connection_id)

    def connections(self) -> list[ConnectionState]:
        """Copy of the live records, safe to iterate while clients come and go."""
        with self._lock:
            return list(self._connections.values())

    def replace(self, connection_id: str, symbols: Any = None) -> set[str]:
        """Replace a connection's subscriptions. Returns the resulting set."""
        state = self.get(connection_id)
        if state is None:
            return set()
        if not isinstance(symbols, list) or not symbols:
            return state.replace(self._universe)
        return state.replace(s for s in symbols if isinstance(s, str) and s in self._known)

    def remove(self, connection_id: str, symbols: Any) -> list[str]:
        """Drop the listed symbols from a connection's subscriptions.

        Returns the list as received, or [] when the payload was not a list.
        """
        state = self.get(connection_id)
        if state is None or not isinstance(symbols, list):
            return []
        state.discard(s for s in symbols if isinstance(s, str))
        return symbols

    def snapshot(self, connection_id: str) -> set[str]:
        """Current subscription set for a connection (empty if unknown)."""
        state = self.get(connection_id)
        return state.subscriptions() if state else set()

    def __len__(self) -> int:
        with self._lock:
            return len(self._connections)

    def __contains__(self, connection_id: object) -> bool:
        with self._lock:
            return connection_id in self._connections
