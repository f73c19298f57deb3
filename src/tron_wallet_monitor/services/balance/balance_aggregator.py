# -*- coding: utf-8 -*-
"""Balance aggregation: one USD snapshot per wallet, summarized into one notification."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterable
from typing import TYPE_CHECKING, Any, Optional

import structlog

from tron_wallet_monitor.exceptions import TronscanAPIError
from tron_wallet_monitor.models.balance import BalanceReport, BalanceSnapshot
from tron_wallet_monitor.models.wallet import Wallet
from tron_wallet_monitor.notifications.types import NotificationMessage
from tron_wallet_monitor.utils.validation import mask_address

if TYPE_CHECKING:
    from tron_wallet_monitor.clients.tronscan import TronscanClient
    from tron_wallet_monitor.config import Settings
    from tron_wallet_monitor.notifications.dispatcher import NotificationDispatcher
    from tron_wallet_monitor.services.credentials import ApiKeyAllocator


class BalanceAggregator:
    """Fetch every wallet's asset overview sequentially and submit one report job."""

    def __init__(
        self,
        settings: "Settings",
        tronscan: "TronscanClient",
        key_allocator: "ApiKeyAllocator",
        dispatcher: "NotificationDispatcher",
        *,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._settings = settings
        self._tronscan = tronscan
        self._keys = key_allocator
        self._dispatcher = dispatcher
        self._sleep = sleep
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def collect(self, wallets: Iterable[Wallet]) -> BalanceReport:
        """Return one snapshot per wallet, in order. A failed wallet gets usd 0 and its error."""
        delay = self._settings.report.wallet_delay_seconds
        snapshots: list[BalanceSnapshot] = []
        for index, wallet in enumerate(wallets):
            if index > 0 and delay > 0:
                await self._sleep(delay)
            snapshots.append(await self._snapshot(wallet))
        return BalanceReport(snapshots=tuple(snapshots))

    async def _snapshot(self, wallet: Wallet) -> BalanceSnapshot:
        try:
            overview = await self._tronscan.get_asset_overview(
                wallet.address, api_key=self._keys.next()
            )
            usd = float(overview.get("totalAssetInUsd") or 0)
        except (TronscanAPIError, TypeError, ValueError) as e:
            self._logger.warning(
                "balance_wallet_failed",
                wallet_masked=mask_address(wallet.address),
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return BalanceSnapshot(wallet=wallet, usd_value=0.0, error=str(e) or type(e).__name__)
        return BalanceSnapshot(wallet=wallet, usd_value=usd)

    async def run(self, wallets: Iterable[Wallet]) -> BalanceReport | None:
        """Collect and submit the report. Returns None when there is no wallet to report."""
        wallet_list = list(wallets)
        if not wallet_list:
            self._logger.warning("balance_report_skipped_no_wallets")
            return None
        self._logger.info("balance_report_started", balance_wallets_count=len(wallet_list))
        report = await self.collect(wallet_list)
        self._dispatcher.submit(
            NotificationMessage(
                event_type="balance_report",
                message=f"Total {report.total_usd:,.2f} USD ({report.summary_line})",
                payload={"report": report},
            )
        )
        self._logger.info(
            "balance_report_submitted",
            balance_total_usd=round(report.total_usd, 2),
            balance_summary=report.summary_line,
        )
        return report
