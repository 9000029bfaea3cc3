from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from collections import defaultdict
import json
from typing import AsyncIterator, Dict, Set, Union


class BroadcastEvent:
    def __init__(self, message: str):
        self.message = message


class _Subscriber:
    def __init__(self, queue: asyncio.Queue[BroadcastEvent]):
        self._queue = queue

    def __aiter__(self) -> "_Subscriber":
        return self

    async def __anext__(self) -> BroadcastEvent:
        return await self._queue.get()


class InMemoryBroadcast:
    """Fan-out of JSON messages to every subscriber of a channel (one process only)."""

    def __init__(self, *, maxsize: int = 1024) -> None:
        self._channels: Dict[str, Set[asyncio.Queue[BroadcastEvent]]] = defaultdict(set)
        self._maxsize = maxsize

    async def publish(self, channel: str, message: Union[dict, str]) -> None:
        payload = message if isinstance(message, str) else json.dumps(message)
        event = BroadcastEvent(payload)
        for q in list(self._channels.get(channel, ())):
            if q.full():
                # slow subscriber: keep the newest state, drop the oldest
                q.get_nowait()
            q.put_nowait(event)

    @asynccontextmanager
    async def subscribe(self, channel: str) -> AsyncIterator[_Subscriber]:
        queue: asyncio.Queue[BroadcastEvent] = asyncio.Queue(maxsize=self._maxsize)
        self._channels[channel].add(queue)
        try:
            yield _Subscriber(queue)
        finally:
            self._channels[channel].discard(queue)
