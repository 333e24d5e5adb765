"""WebSocket endpoint carrying the named-event feed protocol."""

from __future__ import annotations

import json
import logging
import uuid
from typing import Any

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from .hub import FeedHub
from .interface import MessageChannel

logger = logging.getLogger(__name__)


class WebSocketChannel(MessageChannel):
    """MessageChannel over a FastAPI WebSocket.

    Frames are JSON objects of the form {"event": <name>, "data": <payload>}.
    """

    def __init__(self, websocket: WebSocket) -> None:
        self._ws = websocket

    async def send(self, event: str, data: Any) -> None:
        await self._ws.send_text(json.dumps({"event": event, "data": data}))


def parse_frame(text: str) -> tuple[str, Any] | None:
    """Decode an inbound frame into (event, data). Returns None for anything malformed."""
    try:
        message = json.loads(text)
    except ValueError:
        return None
    if not isinstance(message, dict) or not isinstance(message.get("event"), str):
        return None
    return message["event"], message.get("data")


def create_stream_router(hub: FeedHub) -> APIRouter:
    """Create the WebSocket router with a reference to the feed hub.

    This factory pattern lets us inject the hub without globals.
    """
    router = APIRouter(tags=["streaming"])

    @router.websocket("/ws/quotes")
    async def stream_quotes(websocket: WebSocket) -> None:
        """Feed endpoint. Clients send subscribe/unsubscribe/ping events and
        receive info, snapshot, pong and update events.
        """
        await websocket.accept()
        connection_id = uuid.uuid4().hex
        await hub.on_connect(connection_id, WebSocketChannel(websocket))
        try:
            while True:
                message = await websocket.receive()
                if message["type"] == "websocket.disconnect":
                    break
                text = message.get("text")
                if text is None:
                    logger.debug("Ignoring non-text frame from %s", connection_id)
                    continue
                frame = parse_frame(text)
                if frame is None:
                    logger.debug("Ignoring malformed frame from %s", connection_id)
                    continue
                await hub.dispatch(connection_id, *frame)
        except WebSocketDisconnect:
            pass
        finally:
            await hub.on_disconnect(connection_id)

    return router
