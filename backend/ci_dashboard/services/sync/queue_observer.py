"""
Queue-backed observer implementation.

Bridges the controller with a render loop running on the same event loop.
"""

import asyncio
from typing import Any

from .events import SyncEvent


class QueueObserver:
    """
    Observer that pushes state-change events to an asyncio.Queue.

    Usage:
        queue = asyncio.Queue()
        controller = SyncController(state, clients, gate, navigator, observer=QueueObserver(queue))

        # In the render loop:
        while True:
            item = await queue.get()
            render(item["event"], item["data"])
    """

    def __init__(self, queue: asyncio.Queue):
        self.queue = queue

    async def state_changed(self, event: SyncEvent, **data: Any) -> None:
        await self.queue.put({
            "event": event.value,
            "data": data,
        })
