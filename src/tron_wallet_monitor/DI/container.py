# -*- coding: utf-8 -*-
"""Dependency injection container (dependency-injector)."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any
from zoneinfo import ZoneInfo

from dependency_injector import containers, providers

from tron_wallet_monitor.config import Settings, get_settings
from tron_wallet_monitor.events.bus import get_event_bus
from tron_wallet_monitor.clients.http import AsyncHttpClient
from tron_wallet_monitor.clients.tronscan import PushFeedClient, TronscanClient
from tron_wallet_monitor.notifications.dispatcher import NotificationDispatcher
from tron_wallet_monitor.notifications.strategies.base import BaseNotificationStrategy
from tron_wallet_monitor.notifications.strategies.console import ConsoleNotifier
from tron_wallet_monitor.notifications.strategies.telegram import TelegramNotifier
from tron_wallet_monitor.notifications.stylers.notification_styler import EventNotificationStyler
from tron_wallet_monitor.persistence.repositories.json_file import (
    JsonSeenHashRepository,
    JsonWalletRepository,
    JsonWatermarkRepository,
)
from tron_wallet_monitor.services.activity_source import (
    BaseActivitySource,
    PollingActivitySource,
    StreamingActivitySource,
)
from tron_wallet_monitor.services.balance import BalanceAggregator, ReportScheduler
from tron_wallet_monitor.services.credentials import ApiKeyAllocator
from tron_wallet_monitor.services.pipeline import MonitorPipeline


def _build_styler(settings: Settings) -> EventNotificationStyler:
    return EventNotificationStyler(tz=ZoneInfo(settings.report.timezone))


def _build_notifier(
    settings: Settings,
    styler: EventNotificationStyler,
) -> BaseNotificationStrategy:
    """Exactly one channel: Telegram when enabled, otherwise the console."""
    if settings.telegram.enabled:
        return TelegramNotifier(settings=settings, styler=styler)
    return ConsoleNotifier(settings=settings, styler=styler)


def _build_dispatcher(settings: Settings, notifier: BaseNotificationStrategy) -> NotificationDispatcher:
    tg = settings.telegram
    return NotificationDispatcher(
        notifier=notifier,
        queue_size=tg.queue_size,
        min_send_interval=tg.min_send_interval_seconds,
        failure_cooldown=tg.failure_cooldown_seconds,
    )


def _build_activity_source(
    settings: Settings,
    event_bus: Any,
    key_allocator: ApiKeyAllocator,
    tronscan: TronscanClient,
    push_feed: PushFeedClient,
) -> BaseActivitySource:
    state_dir = settings.monitoring.state_dir
    if settings.monitoring.mode == "streaming":
        return StreamingActivitySource(
            settings,
            event_bus,
            key_allocator,
            push_feed,
            JsonSeenHashRepository.in_dir(state_dir),
        )
    return PollingActivitySource(
        settings,
        event_bus,
        key_allocator,
        tronscan,
        JsonWatermarkRepository.in_dir(state_dir),
    )


def _build_report_runner(
    aggregator: BalanceAggregator,
    source: BaseActivitySource,
) -> Callable[[], Awaitable[Any]]:
    """Report over whatever wallet list the source holds at fire time."""

    async def run_report() -> Any:
        return await aggregator.run(source.wallets)

    return run_report


class Container(containers.DeclarativeContainer):
    """Application container. Wires settings, clients, activity source, notifications and reports."""

    config = providers.Callable(get_settings)

    http_client = providers.Singleton(
        AsyncHttpClient,
        settings=config,
    )

    tronscan_client = providers.Singleton(
        TronscanClient,
        http_client=http_client,
        settings=config,
    )

    push_feed_client = providers.Singleton(
        PushFeedClient,
        settings=config,
    )

    key_allocator = providers.Singleton(
        ApiKeyAllocator,
        keys=providers.Callable(lambda s: s.api.api_keys, config),
    )

    event_bus = providers.Callable(get_event_bus)

    wallet_repository = providers.Singleton(
        JsonWalletRepository,
        path=providers.Callable(lambda s: s.wallets.store_path, config),
    )

    activity_source = providers.Singleton(
        _build_activity_source,
        config,
        event_bus,
        key_allocator,
        tronscan_client,
        push_feed_client,
    )

    notification_styler = providers.Singleton(_build_styler, config)

    notifier = providers.Singleton(_build_notifier, config, notification_styler)

    notification_dispatcher = providers.Singleton(_build_dispatcher, config, notifier)

    balance_aggregator = providers.Singleton(
        BalanceAggregator,
        settings=config,
        tronscan=tronscan_client,
        key_allocator=key_allocator,
        dispatcher=notification_dispatcher,
    )

    report_scheduler = providers.Singleton(
        ReportScheduler,
        settings=config,
        run_report=providers.Callable(_build_report_runner, balance_aggregator, activity_source),
    )

    pipeline = providers.Singleton(
        MonitorPipeline,
        settings=config,
        source=activity_source,
        dispatcher=notification_dispatcher,
        aggregator=balance_aggregator,
        scheduler=report_scheduler,
        wallet_repository=wallet_repository,
    )
