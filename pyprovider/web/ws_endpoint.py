from __future__ import annotations

import asyncio
import json
from enum import StrEnum
from typing import Awaitable, Callable, Iterable, Optional

from fastapi import FastAPI, WebSocket
from starlette.endpoints import WebSocketEndpoint
from .broadcast import InMemoryBroadcast


class ChannelName(StrEnum):
    HTML = "html"


def register_ws_routes(
    app: FastAPI,
    *,
    broadcast: InMemoryBroadcast,
    channels_to_forward: Iterable[str],
    handle_message: Callable[[dict], Awaitable[Optional[dict]]],
    initial_message: Optional[Callable[[], Awaitable[Optional[dict]]]] = None,
) -> None:
    """
    Register a WebSocket route that bridges pub/sub channels to the socket.
    - broadcast: object with publish(channel, message) and subscribe(channel) async context manager
    - channels_to_forward: channel names to forward from pub/sub to this socket
    - handle_message: called with every decoded client message; a returned dict is sent back
    - initial_message: optional message sent right after the socket is accepted
    """
    channels = list(channels_to_forward)

    class AppWS(WebSocketEndpoint):
        encoding = "text"

        async def on_connect(self, ws: WebSocket):
            await ws.accept()

            if initial_message is not None:
                first = await initial_message()
                if first is not None:
                    await ws.send_text(json.dumps(first))

            self._forward_tasks = [
                asyncio.create_task(self._forward(ws, channel)) for channel in channels
            ]

        async def on_receive(self, ws: WebSocket, data: str):
            try:
                msg = json.loads(data)
            except json.JSONDecodeError:
                await ws.send_text(json.dumps({"type": "error", "error": "invalid json"}))
                return
            if not isinstance(msg, dict):
                await ws.send_text(json.dumps({"type": "error", "error": "expected a json object"}))
                return
            reply = await handle_message(msg)
            if reply is not None:
                await ws.send_text(json.dumps(reply))

        async def on_disconnect(self, ws: WebSocket, close_code: int):
            for t in getattr(self, "_forward_tasks", []):
                t.cancel()

        async def _forward(self, ws: WebSocket, channel: str):
            async with broadcast.subscribe(channel) as subscriber:
                async for event in subscriber:
                    await ws.send_text(event.message)

    app.add_websocket_route("/ws", AppWS)
