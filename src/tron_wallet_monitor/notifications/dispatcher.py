"""Notification dispatcher: one FIFO queue, one worker, one message in flight."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

import structlog

from tron_wallet_monitor.exceptions import NotificationThrottledError, QueueFull, QueueShutdown
from tron_wallet_monitor.notifications.strategies import BaseNotificationStrategy
from tron_wallet_monitor.notifications.types import NotificationMessage
from tron_wallet_monitor.queue import InMemoryJobQueue, QueuedJob


@dataclass
class NotificationDispatcher:
    """Serialize notification jobs to a single channel with pacing.

    - at least min_send_interval seconds between a successful send and the next attempt
    - throttled (NotificationThrottledError): wait retry_after and retry once, then drop
    - any other failure: log, wait failure_cooldown seconds, move on to the next job
    """

    notifier: BaseNotificationStrategy
    queue_size: int = 1000
    min_send_interval: float = 3.0
    failure_cooldown: float = 5.0
    sleep: Callable[[float], Awaitable[Any]] = field(default=asyncio.sleep)
    clock: Callable[[], float] = field(default=time.monotonic)
    get_logger: Callable[[str], Any] = field(default=structlog.get_logger)
    _queue: InMemoryJobQueue[QueuedJob[NotificationMessage]] | None = field(init=False, default=None)
    _worker_task: asyncio.Task[None] | None = field(init=False, default=None)
    _last_success_at: float | None = field(init=False, default=None)
    _busy: bool = field(init=False, default=False)
    _sent_count: int = field(init=False, default=0)
    _dropped_count: int = field(init=False, default=0)
    _logger: Any = field(init=False)

    def __post_init__(self) -> None:
        self._logger = self.get_logger("NotificationDispatcher")

    @property
    def is_busy(self) -> bool:
        return self._busy

    @property
    def pending(self) -> int:
        return len(self._queue) if self._queue is not None else 0

    @property
    def sent_count(self) -> int:
        return self._sent_count

    @property
    def dropped_count(self) -> int:
        return self._dropped_count

    async def initialize(self) -> None:
        """Initialize the channel and start the worker."""
        if self._worker_task is not None:
            return
        await self.notifier.initialize()
        self._queue = InMemoryJobQueue[QueuedJob[NotificationMessage]](capacity=self.queue_size)
        self._worker_task = asyncio.create_task(self._worker_loop())
        self._logger.debug(
            "notification_init_complete",
            notification_channel=self.notifier.name,
            notification_queue_size=self.queue_size,
        )

    async def shutdown(self) -> None:
        """Stop accepting jobs, deliver what is queued, then close the channel."""
        self._logger.debug("notification_shutdown_started", notification_pending=self.pending)
        if self._queue is not None:
            self._queue.close()
            await self._queue.drain()
            peak = self._queue.peak
        else:
            peak = 0
        if self._worker_task is not None:
            await self._worker_task
            self._worker_task = None
        self._queue = None
        await self.notifier.shutdown()
        self._logger.debug(
            "notification_shutdown_complete",
            notification_sent_count=self._sent_count,
            notification_dropped_count=self._dropped_count,
            notification_queue_peak=peak,
        )

    def submit(self, message: NotificationMessage) -> bool:
        """Enqueue a job (non-blocking for callers). Returns False if it was not accepted."""
        queue = self._queue
        if queue is None:
            raise RuntimeError("NotificationDispatcher not initialized")
        try:
            queue.enqueue(QueuedJob(payload=message, destination=self.notifier.name))
        except QueueFull:
            self._dropped_count += 1
            self._logger.warning("notification_queue_full_dropped", notification_event_type=message.event_type)
            return False
        except QueueShutdown:
            self._logger.warning("notification_queue_closed_dropped", notification_event_type=message.event_type)
            return False
        return True

    async def _worker_loop(self) -> None:
        queue = self._queue
        if queue is None:
            return
        while True:
            try:
                job = await queue.take()
            except QueueShutdown:
                self._logger.debug("notification_worker_shutting_down")
                break
            self._logger.debug(
                "notification_job_dequeued",
                notification_job_seq=job.seq,
                notification_channel=job.destination,
                notification_wait_seconds=round(job.waited(), 3),
            )
            try:
                await self._deliver(job.payload)
            finally:
                queue.done()

    async def _wait_min_interval(self) -> None:
        if self._last_success_at is None:
            return
        remaining = self._last_success_at + self.min_send_interval - self.clock()
        if remaining > 0:
            await self.sleep(remaining)

    async def _deliver(self, message: NotificationMessage) -> None:
        self._busy = True
        try:
            await self._wait_min_interval()
            try:
                await self.notifier.send_notification(message)
            except NotificationThrottledError as e:
                self._logger.warning(
                    "notification_throttled_retrying",
                    notification_event_type=message.event_type,
                    retry_seconds=e.retry_after,
                )
                await self.sleep(e.retry_after)
                try:
                    await self.notifier.send_notification(message)
                except Exception as retry_exc:
                    self._dropped_count += 1
                    self._logger.error(
                        "notification_dropped_after_retry",
                        notification_event_type=message.event_type,
                        error_type=type(retry_exc).__name__,
                        error_message=str(retry_exc),
                    )
                    return
            except Exception as e:
                self._dropped_count += 1
                self._logger.error(
                    "notification_send_failed",
                    notification_event_type=message.event_type,
                    error_type=type(e).__name__,
                    error_message=str(e),
                    cooldown_seconds=self.failure_cooldown,
                )
                await self.sleep(self.failure_cooldown)
                return
            self._last_success_at = self.clock()
            self._sent_count += 1
        finally:
            self._busy = False
