# -*- coding: utf-8 -*-
"""In-process job queue over asyncio.Queue."""

from __future__ import annotations

import asyncio

from tron_wallet_monitor.exceptions import QueueFull, QueueShutdown
from tron_wallet_monitor.queue.base import IJobQueue


class InMemoryJobQueue[T](IJobQueue[T]):
    """IJobQueue backed by asyncio.Queue. Tracks the deepest backlog seen."""

    def __init__(self, capacity: int = 0) -> None:
        """Args:
            capacity: Maximum number of queued jobs; 0 means unbounded.
        """
        self._queue: asyncio.Queue[T] = asyncio.Queue(maxsize=capacity)
        self._peak = 0

    @property
    def peak(self) -> int:
        return self._peak

    def __len__(self) -> int:
        return self._queue.qsize()

    def enqueue(self, job: T) -> None:
        try:
            self._queue.put_nowait(job)
        except asyncio.QueueFull as e:
            raise QueueFull(f"job queue at capacity ({self._queue.maxsize})") from e
        except asyncio.QueueShutDown as e:
            raise QueueShutdown("job queue closed") from e
        self._peak = max(self._peak, self._queue.qsize())

    async def take(self) -> T:
        try:
            return await self._queue.get()
        except asyncio.QueueShutDown as e:
            raise QueueShutdown("job queue closed") from e

    def done(self) -> None:
        self._queue.task_done()

    def close(self) -> None:
        self._queue.shutdown()

    async def drain(self) -> None:
        await self._queue.join()
