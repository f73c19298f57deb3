# -*- coding: utf-8 -*-
"""Unit tests for ReportScheduler timing."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterator
from datetime import UTC, datetime
from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock

from tron_wallet_monitor.services.balance import ReportScheduler


def _settings(*, time: str = "09:00", run_on_start: bool = True) -> Any:
    return SimpleNamespace(
        report=SimpleNamespace(
            time=time,
            timezone="Asia/Ho_Chi_Minh",
            check_seconds=60.0,
            run_on_start=run_on_start,
        )
    )


class _FakeTime:
    """Sleep double on a fake monotonic clock; blocks for good after max_sleeps calls."""

    def __init__(self, max_sleeps: int = 3) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []
        self._max_sleeps = max_sleeps

    async def sleep(self, seconds: float) -> None:
        if len(self.sleeps) >= self._max_sleeps:
            await asyncio.Event().wait()
        self.sleeps.append(seconds)
        self.now += seconds

    def clock(self) -> float:
        return self.now


async def _block_forever(_: float) -> None:
    await asyncio.Event().wait()


def _moments(*values: datetime) -> Callable[[], datetime]:
    it: Iterator[datetime] = iter(values)
    return lambda: next(it)


def test_due_fires_once_per_local_minute() -> None:
    scheduler = ReportScheduler(_settings(), AsyncMock())

    # 02:00 UTC is 09:00 in Ho Chi Minh City (UTC+7).
    assert scheduler.due(datetime(2026, 3, 1, 2, 0, 5, tzinfo=UTC)) is True
    assert scheduler.due(datetime(2026, 3, 1, 2, 0, 45, tzinfo=UTC)) is False
    assert scheduler.due(datetime(2026, 3, 1, 2, 1, 0, tzinfo=UTC)) is False
    assert scheduler.due(datetime(2026, 3, 1, 9, 0, 0, tzinfo=UTC)) is False
    assert scheduler.due(datetime(2026, 3, 2, 2, 0, 0, tzinfo=UTC)) is True


async def test_runs_on_start_then_on_schedule(settle_tasks: Callable[..., Any]) -> None:
    fake = _FakeTime()
    run_report = AsyncMock()
    scheduler = ReportScheduler(
        _settings(),
        run_report,
        sleep=fake.sleep,
        clock=fake.clock,
        now=_moments(
            datetime(2026, 3, 1, 1, 59, tzinfo=UTC),
            datetime(2026, 3, 1, 2, 0, tzinfo=UTC),
            datetime(2026, 3, 1, 2, 0, 30, tzinfo=UTC),
        ),
    )

    await scheduler.start()
    await settle_tasks()
    assert scheduler.is_running is True
    await scheduler.stop()

    # startup + the single 09:00 hit
    assert run_report.await_count == 2
    assert fake.sleeps == [60.0, 60.0, 60.0]
    assert scheduler.is_running is False


async def test_slow_report_does_not_shift_later_checks(settle_tasks: Callable[..., Any]) -> None:
    fake = _FakeTime()

    async def _slow_report() -> None:
        fake.now += 25.0

    scheduler = ReportScheduler(
        _settings(run_on_start=False),
        _slow_report,
        sleep=fake.sleep,
        clock=fake.clock,
        now=_moments(
            datetime(2026, 3, 1, 2, 0, tzinfo=UTC),
            datetime(2026, 3, 1, 2, 1, tzinfo=UTC),
            datetime(2026, 3, 1, 2, 2, tzinfo=UTC),
        ),
    )

    await scheduler.start()
    await settle_tasks()
    await scheduler.stop()

    # Checks stay on the 60 s grid: 60, then 120 after a 25 s report, then 180.
    assert fake.sleeps == [60.0, 35.0, 60.0]


async def test_startup_report_runs_without_daily_schedule(settle_tasks: Callable[..., Any]) -> None:
    run_report = AsyncMock()
    scheduler = ReportScheduler(_settings(), run_report, sleep=_block_forever)

    await scheduler.start(daily=False)
    await settle_tasks()

    run_report.assert_awaited_once()
    assert scheduler.is_running is False
    await scheduler.stop()


async def test_failing_report_does_not_stop_scheduler(settle_tasks: Callable[..., Any]) -> None:
    run_report = AsyncMock(side_effect=RuntimeError("boom"))
    scheduler = ReportScheduler(_settings(), run_report, sleep=_block_forever)

    await scheduler.start()
    await settle_tasks()

    assert run_report.await_count == 1
    assert scheduler.is_running is True
    await scheduler.stop()


async def test_run_on_start_can_be_disabled(settle_tasks: Callable[..., Any]) -> None:
    run_report = AsyncMock()
    scheduler = ReportScheduler(_settings(run_on_start=False), run_report, sleep=_block_forever)

    await scheduler.start()
    await settle_tasks()
    await scheduler.stop()

    run_report.assert_not_awaited()
