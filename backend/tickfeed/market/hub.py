"""Inbound client event handling."""

from __future__ import annotations

import logging
from typing import Any

from .interface import MessageChannel
from .models import Quote
from .rate_limit import now_ms
from .registry import SubscriptionRegistry
from .store import InstrumentStore

logger = logging.getLogger(__name__)

WELCOME_TEXT = "Connected! Subscribe with a 'subscribe' event, e.g. ['AAPL', 'TSLA']"


class FeedHub:
    """Turns client events into registry changes and direct replies.

    Replies (info, snapshot, pong) go only to the requesting connection and
    are not rate limited; the BroadcastLoop owns all "update" traffic.
    Events for connection ids that are not registered are ignored.
    """

    def __init__(self, store: InstrumentStore, registry: SubscriptionRegistry) -> None:
        self._store = store
        self._registry = registry

    @property
    def registry(self) -> SubscriptionRegistry:
        return self._registry

    async def on_connect(self, connection_id: str, channel: MessageChannel) -> None:
        self._registry.connect(connection_id, channel)
        logger.info("Client connected: %s (%d live)", connection_id, len(self._registry))
        await channel.send("info", WELCOME_TEXT)

    async def on_disconnect(self, connection_id: str) -> None:
        if self._registry.disconnect(connection_id) is not None:
            logger.info("Client disconnected: %s (%d live)", connection_id, len(self._registry))

    async def on_subscribe(self, connection_id: str, symbols: Any = None) -> None:
        """Replace the subscription set, then push a full snapshot of it."""
        state = self._registry.get(connection_id)
        if state is None:
            return
        subscribed = self._registry.replace(connection_id, symbols)
        ordered = [s for s in self._registry.universe if s in subscribed]
        snapshot = [Quote.from_instrument(i).to_dict() for i in self._store.get_many(ordered)]
        logger.debug("Client %s subscribed to %d symbols", connection_id, len(subscribed))
        await state.channel.send("snapshot", snapshot)

    async def on_unsubscribe(self, connection_id: str, symbols: Any) -> None:
        state = self._registry.get(connection_id)
        if state is None or not isinstance(symbols, list):
            return
        removed = self._registry.remove(connection_id, symbols)
        await state.channel.send("info", f"Unsubscribed from: {', '.join(str(s) for s in removed)}")

    async def on_ping(self, connection_id: str, now: int | None = None) -> None:
        state = self._registry.get(connection_id)
        if state is None:
            return
        await state.channel.send("pong", now_ms() if now is None else now)

    async def dispatch(self, connection_id: str, event: str, data: Any = None) -> None:
        """Route one inbound named event. Unknown events are ignored."""
        if event == "subscribe":
            await self.on_subscribe(connection_id, data)
        elif event == "unsubscribe":
            await self.on_unsubscribe(connection_id, data)
        elif event == "ping":
            await self.on_ping(connection_id)
        else:
            logger.debug("Ignoring unknown event %r from %s", event, connection_id)
