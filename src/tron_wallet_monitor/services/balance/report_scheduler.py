# -*- coding: utf-8 -*-
"""Balance report triggers: once at start, then daily at HH:MM local time."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, Optional
from zoneinfo import ZoneInfo

import structlog

if TYPE_CHECKING:
    from tron_wallet_monitor.config import Settings


class ReportScheduler:
    """Runs the startup report, then checks the clock on a fixed check_seconds cadence.

    Check deadlines are spaced from the loop start, not from the end of the
    previous check, so a slow report run does not shift later checks. The
    daily report fires at most once per calendar minute.
    """

    def __init__(
        self,
        settings: "Settings",
        run_report: Callable[[], Awaitable[Any]],
        *,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        now: Callable[[], datetime] = lambda: datetime.now(UTC),
        clock: Callable[[], float] = time.monotonic,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._settings = settings
        self._run_report = run_report
        self._sleep = sleep
        self._now = now
        self._clock = clock
        self._tz = ZoneInfo(settings.report.timezone)
        self._logger = get_logger(logger_name or self.__class__.__name__)
        self._last_fired_minute: str | None = None
        self._task: asyncio.Task[None] | None = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def due(self, moment: datetime | None = None) -> bool:
        """True if moment (default now) is the configured minute and it has not fired yet.

        Marks the minute as fired when returning True.
        """
        local = (moment or self._now()).astimezone(self._tz)
        if local.strftime("%H:%M") != self._settings.report.time:
            return False
        minute_key = local.strftime("%Y-%m-%d %H:%M")
        if minute_key == self._last_fired_minute:
            return False
        self._last_fired_minute = minute_key
        return True

    async def start(self, *, daily: bool = True) -> None:
        """Start the trigger task. With daily=False only the startup report (if enabled) runs."""
        if self.is_running:
            return
        self._task = asyncio.create_task(self._loop(daily))
        self._logger.info(
            "report_scheduler_started",
            report_daily=daily,
            report_time=self._settings.report.time,
            report_timezone=self._settings.report.timezone,
        )

    async def stop(self) -> None:
        task = self._task
        self._task = None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        self._logger.debug("report_scheduler_stopped")

    async def _loop(self, daily: bool) -> None:
        cfg = self._settings.report
        deadline = self._clock()
        if cfg.run_on_start:
            await self._fire("startup")
        if not daily:
            return
        while True:
            deadline += cfg.check_seconds
            delay = deadline - self._clock()
            if delay > 0:
                await self._sleep(delay)
            if self.due():
                await self._fire("schedule")

    async def _fire(self, trigger: str) -> None:
        self._logger.info("report_scheduler_firing", report_trigger=trigger)
        try:
            await self._run_report()
        except Exception as e:
            self._logger.exception(
                "report_scheduler_run_failed",
                report_trigger=trigger,
                error_type=type(e).__name__,
            )
