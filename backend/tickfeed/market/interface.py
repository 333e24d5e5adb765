"""Abstract interface for client message channels."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class MessageChannel(ABC):
    """Contract for one client's outbound, named-event message channel.

    The transport layer owns the connection lifecycle and hands the core a
    channel on connect. The core only ever sends on it; inbound events are
    routed to FeedHub by the transport.

    Lifecycle:
        await hub.on_connect(connection_id, channel)
        await hub.dispatch(connection_id, "subscribe", ["AAPL", "TSLA"])
        # ... BroadcastLoop sends "update" events ...
        await hub.on_disconnect(connection_id)
    """

    @abstractmethod
    async def send(self, event: str, data: Any) -> None:
        """Deliver one named event with a JSON-serializable payload.

        Raises whatever the underlying transport raises on failure; callers
        log and carry on.
        """
