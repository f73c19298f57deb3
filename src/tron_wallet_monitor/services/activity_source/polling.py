# -*- coding: utf-8 -*-
"""Polling activity source: sweeps every wallet's latest transfers on a fixed tick."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any, Optional

import structlog
from structlog.contextvars import bound_contextvars

from tron_wallet_monitor.events.monitor_events import SourceKind
from tron_wallet_monitor.exceptions import StatePersistenceError, TronscanAPIError
from tron_wallet_monitor.models.progress import Watermark
from tron_wallet_monitor.models.wallet import Wallet, WalletRegistry
from tron_wallet_monitor.services.activity_source.base import BaseActivitySource
from tron_wallet_monitor.services.enrichment import classify_direction
from tron_wallet_monitor.utils.dedupe import transfer_hash, transfer_timestamp
from tron_wallet_monitor.utils.validation import mask_address

if TYPE_CHECKING:
    from tron_wallet_monitor.clients.tronscan import TronscanClient
    from tron_wallet_monitor.config import Settings
    from tron_wallet_monitor.persistence.repositories.interfaces import IWatermarkRepository
    from tron_wallet_monitor.services.credentials import ApiKeyAllocator


class PollingActivitySource(BaseActivitySource):
    """Tracks wallets by polling the Tronscan transfer list.

    One tick is one sweep over all wallets in list order. The next tick is
    scheduled poll_seconds after the sweep completes, so sweeps never overlap.
    """

    kind: SourceKind = "polling"

    def __init__(
        self,
        settings: "Settings",
        event_bus: Any,
        key_allocator: "ApiKeyAllocator",
        tronscan: "TronscanClient",
        watermark_repository: "IWatermarkRepository",
        *,
        wallets: Iterable[Wallet] = (),
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the source.

        Args:
            settings: Application settings (uses settings.monitoring).
            event_bus: Bus receiving the source events (bubus EventBus or compatible).
            key_allocator: Rotates API keys across requests.
            tronscan: Tronscan API client (injected).
            watermark_repository: Where the per-wallet watermark is persisted.
            wallets: Initial wallet list.
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        super().__init__(
            settings,
            event_bus,
            key_allocator,
            wallets=wallets,
            get_logger=get_logger,
            logger_name=logger_name,
        )
        self._tronscan = tronscan
        self._watermark_repo = watermark_repository
        self._watermark = Watermark()

    @property
    def watermark(self) -> Watermark:
        return self._watermark

    async def _load_state(self) -> None:
        try:
            stored = await self._watermark_repo.load()
        except StatePersistenceError as e:
            self._logger.error("polling_watermark_load_failed", error_message=str(e))
            return
        for address, ts in stored.items():
            self._watermark.advance(address, ts)

    async def _flush_state(self) -> None:
        try:
            await self._watermark_repo.save(self._watermark.to_dict())
        except StatePersistenceError as e:
            self._logger.error("polling_watermark_save_failed", error_message=str(e))

    async def _run(self, stop: asyncio.Event) -> None:
        mon = self._settings.monitoring
        while not stop.is_set():
            try:
                await self._sweep(stop)
            except Exception as e:
                self._logger.exception(
                    "polling_sweep_failed",
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
                self._emit_error(e)
            if await self._sleep_unless_stopped(mon.poll_seconds, stop):
                break
        self._logger.debug("polling_loop_exited")

    async def sweep(self) -> bool:
        """Visit every wallet once, sequentially. Returns True if any wallet had new transfers.

        A failing wallet is logged and skipped. The watermark file is written
        once at the end, and only when something new was delivered.
        """
        return await self._sweep(self._stop_event)

    async def _sweep(self, stop: asyncio.Event) -> bool:
        mon = self._settings.monitoring
        registry = self._registry
        any_new = False
        for index, wallet in enumerate(registry):
            if stop.is_set():
                break
            if index > 0 and await self._sleep_unless_stopped(mon.wallet_delay_seconds, stop):
                break
            try:
                if await self._poll_wallet(wallet, registry):
                    any_new = True
            except TronscanAPIError as e:
                self._logger.warning(
                    "polling_wallet_failed",
                    wallet_masked=mask_address(wallet.address),
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
        if any_new:
            await self._flush_state()
        else:
            self._logger.debug("polling_sweep_no_new_transfers", source_wallets_count=len(registry))
        return any_new

    async def _poll_wallet(self, wallet: Wallet, registry: WalletRegistry) -> bool:
        mon = self._settings.monitoring
        with bound_contextvars(wallet_masked=mask_address(wallet.address)):
            transfers = await self._tronscan.get_trc20_transfers(
                wallet.address,
                api_key=self._keys.next(),
                limit=mon.page_size,
            )
            if not transfers:
                return False
            last_seen = self._watermark.get(wallet.address)
            fresh = [t for t in transfers if transfer_timestamp(dict(t)) > last_seen]
            if not fresh:
                return False

            # Wire order is newest first.
            for t in reversed(fresh):
                record = dict(t)
                if transfer_hash(record) is None:
                    continue
                direction, matched = classify_direction(record, registry, focus=wallet)
                self._emit_transfer(record, registry, direction, matched)

            # Max of the whole page, not only the fresh part, in case the server reorders.
            newest = max(transfer_timestamp(dict(t)) for t in transfers)
            self._watermark.advance(wallet.address, newest)
            self._logger.debug(
                "polling_wallet_new_transfers",
                polling_new_count=len(fresh),
                polling_watermark=self._watermark.get(wallet.address),
            )
            return True
