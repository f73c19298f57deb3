# -*- coding: utf-8 -*-
"""Job queue interface used by the notification dispatcher."""

from __future__ import annotations

from abc import ABC, abstractmethod


class IJobQueue[T](ABC):
    """Bounded FIFO of jobs with one consumer.

    Producers never block: enqueue() either accepts the job or raises.
    The consumer takes jobs with take() and acknowledges each with done().
    """

    @abstractmethod
    def enqueue(self, job: T) -> None:
        """Append job. Raises QueueFull at capacity, QueueShutdown once closed."""
        ...

    @abstractmethod
    async def take(self) -> T:
        """Wait for the oldest job. Raises QueueShutdown once closed and empty."""
        ...

    @abstractmethod
    def done(self) -> None:
        ...

    @abstractmethod
    def close(self) -> None:
        """Refuse new jobs; queued jobs stay available to take()."""
        ...

    @abstractmethod
    async def drain(self) -> None:
        """Wait until every queued job has been taken and acknowledged."""
        ...

    @abstractmethod
    def __len__(self) -> int:
        ...
