# -*- coding: utf-8 -*-
"""Monitor pipeline: activity source -> enrichment -> notification dispatcher, plus balance reports."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any, Optional

import structlog

from tron_wallet_monitor.events.monitor_events import (
    SourceConnectedEvent,
    SourceDisconnectedEvent,
    SourceErrorEvent,
    TransactionDetectedEvent,
)
from tron_wallet_monitor.models.balance import BalanceReport
from tron_wallet_monitor.models.wallet import Wallet
from tron_wallet_monitor.notifications.types import NotificationMessage
from tron_wallet_monitor.services.activity_source.base import SourceStatus
from tron_wallet_monitor.utils.validation import is_tron_address, mask_address

if TYPE_CHECKING:
    from tron_wallet_monitor.config import Settings
    from tron_wallet_monitor.notifications.dispatcher import NotificationDispatcher
    from tron_wallet_monitor.persistence.repositories.interfaces import IWalletRepository
    from tron_wallet_monitor.services.activity_source.base import BaseActivitySource
    from tron_wallet_monitor.services.balance import BalanceAggregator, ReportScheduler


class MonitorPipeline:
    """Owns the running system: one activity source, the dispatcher and the report scheduler.

    Every TransactionDetectedEvent becomes one notification job. Connection
    lifecycle events are only logged.
    """

    def __init__(
        self,
        settings: "Settings",
        source: "BaseActivitySource",
        dispatcher: "NotificationDispatcher",
        aggregator: "BalanceAggregator",
        scheduler: "ReportScheduler",
        wallet_repository: "IWalletRepository",
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._settings = settings
        self._source = source
        self._dispatcher = dispatcher
        self._aggregator = aggregator
        self._scheduler = scheduler
        self._wallet_repo = wallet_repository
        self._logger = get_logger(logger_name or self.__class__.__name__)
        self._subscribed = False
        self._started = False

    @property
    def source(self) -> "BaseActivitySource":
        return self._source

    def _subscribe(self) -> None:
        if self._subscribed:
            return
        self._source.subscribe(TransactionDetectedEvent, self._on_transaction)
        self._source.subscribe(SourceConnectedEvent, self._on_connected)
        self._source.subscribe(SourceDisconnectedEvent, self._on_disconnected)
        self._source.subscribe(SourceErrorEvent, self._on_error)
        self._subscribed = True

    async def start(self) -> None:
        """Load wallets, start the dispatcher, announce start, then start source and scheduler."""
        if self._started:
            return
        self._started = True
        self._subscribe()
        await self.reload_wallets()
        await self._dispatcher.initialize()
        status = self._source.status()
        self._dispatcher.submit(
            NotificationMessage(
                event_type="system_started",
                message="Wallet monitor started",
                payload={
                    "mode": self._source.kind,
                    "wallets_count": status.wallet_count,
                    "keys_count": status.credential_count,
                },
            )
        )
        if self._settings.monitoring.enabled:
            await self._source.start()
        else:
            self._logger.info("pipeline_monitoring_disabled")
        await self._scheduler.start(daily=self._settings.report.enabled)
        self._logger.info(
            "pipeline_started",
            pipeline_mode=self._source.kind,
            source_wallets_count=status.wallet_count,
        )

    async def stop(self) -> None:
        """Stop scheduler and source, announce stop and drain the dispatcher."""
        if not self._started:
            return
        self._started = False
        await self._scheduler.stop()
        await self._source.stop()
        await self._source.wait_closed()
        self._dispatcher.submit(
            NotificationMessage(event_type="system_stopped", message="Wallet monitor stopped")
        )
        await self._dispatcher.shutdown()
        self._logger.info("pipeline_stopped")

    def status(self) -> SourceStatus:
        return self._source.status()

    async def reload_wallets(self) -> list[Wallet]:
        """Read the wallet store and hand the list to the source."""
        wallets = await self._wallet_repo.list_wallets()
        self._source.update_wallets(wallets)
        return wallets

    def update_wallets(self, wallets: Iterable[Wallet]) -> None:
        self._source.update_wallets(wallets)

    def update_keys(self, keys: Iterable[str]) -> None:
        self._source.update_keys(keys)

    async def add_wallet(self, wallet: Wallet) -> bool:
        """Persist a new wallet and start tracking it. False if malformed or already present."""
        if not is_tron_address(wallet.address):
            self._logger.warning("pipeline_wallet_rejected", wallet_masked=mask_address(wallet.address))
            return False
        added = await self._wallet_repo.add_wallet(wallet)
        if added:
            await self.reload_wallets()
        return added

    async def remove_wallet(self, address: str) -> bool:
        removed = await self._wallet_repo.remove_wallet(address)
        if removed:
            await self.reload_wallets()
        return removed

    async def rename_wallet(self, address: str, name: str | None) -> bool:
        updated = await self._wallet_repo.update_wallet(address, name=name)
        if updated:
            await self.reload_wallets()
        return updated

    def send_test_message(self, text: str = "Test message from wallet monitor") -> bool:
        """Queue a test notification on the active channel."""
        return self._dispatcher.submit(NotificationMessage(event_type="test_message", message=text))

    async def run_balance_report_now(self) -> BalanceReport | None:
        """Collect balances for the current wallets and queue the report."""
        return await self._aggregator.run(self._source.wallets)

    def _on_transaction(self, event: TransactionDetectedEvent) -> None:
        self._dispatcher.submit(
            NotificationMessage(
                event_type="transaction_detected",
                message=f"{event.transfer.amount} {event.transfer.token.abbreviation}".strip(),
                payload={"transfer": event.transfer},
            )
        )

    def _on_connected(self, event: SourceConnectedEvent) -> None:
        self._logger.info("pipeline_source_connected", source=event.source)

    def _on_disconnected(self, event: SourceDisconnectedEvent) -> None:
        self._logger.info("pipeline_source_disconnected", source=event.source, reason=event.reason)

    def _on_error(self, event: SourceErrorEvent) -> None:
        self._logger.warning(
            "pipeline_source_error",
            source=event.source,
            error_type=event.error_type,
            error_message=event.detail,
        )
