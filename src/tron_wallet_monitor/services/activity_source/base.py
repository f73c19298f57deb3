# -*- coding: utf-8 -*-
"""Common lifecycle of the activity sources (polling and streaming).

Both sources follow Stopped -> Running -> Stopped, own their wallet registry,
key allocator and progress state, and publish SourceConnectedEvent,
SourceDisconnectedEvent, SourceErrorEvent and TransactionDetectedEvent on the
event bus.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

import structlog

from tron_wallet_monitor.events.monitor_events import (
    SourceConnectedEvent,
    SourceDisconnectedEvent,
    SourceErrorEvent,
    SourceKind,
    TransactionDetectedEvent,
)
from tron_wallet_monitor.models.transfer import Direction
from tron_wallet_monitor.models.wallet import Wallet, WalletRegistry
from tron_wallet_monitor.services.enrichment import enrich_transfer
from tron_wallet_monitor.utils.validation import mask_address

if TYPE_CHECKING:
    from tron_wallet_monitor.config import Settings
    from tron_wallet_monitor.services.credentials import ApiKeyAllocator


@dataclass(frozen=True, slots=True)
class SourceStatus:
    """Answer of BaseActivitySource.status()."""

    running: bool
    connected: bool
    wallet_count: int
    credential_count: int


class BaseActivitySource(ABC):
    """Start/stop state machine shared by PollingActivitySource and StreamingActivitySource."""

    kind: SourceKind

    def __init__(
        self,
        settings: "Settings",
        event_bus: Any,
        key_allocator: "ApiKeyAllocator",
        *,
        wallets: Iterable[Wallet] = (),
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._settings = settings
        self._event_bus = event_bus
        self._keys = key_allocator
        self._registry = WalletRegistry.of(wallets)
        self._logger = get_logger(logger_name or self.__class__.__name__)
        self._running = False
        self._connected = False
        self._stop_event = asyncio.Event()
        self._task: Optional[asyncio.Task[None]] = None

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def wallets(self) -> WalletRegistry:
        return self._registry

    def subscribe(self, event_type: type[Any], handler: Callable[[Any], Any]) -> None:
        """Register handler for one of the source event types."""
        self._event_bus.on(event_type, handler)

    async def start(self) -> None:
        """Load progress state, emit connected and start the loop task. No-op if running.

        A run left over from a previous stop() is awaited first, so two loops
        never overlap. Each run watches its own stop event.
        """
        if self._running:
            self._logger.debug("activity_source_already_running", source=self.kind)
            return
        self._running = True
        stop = asyncio.Event()
        self._stop_event = stop
        await self.wait_closed()
        if stop.is_set():
            return
        await self._load_state()
        self._connected = self._connected_on_start()
        self._logger.info(
            "activity_source_started",
            source=self.kind,
            source_wallets_count=len(self._registry),
            source_keys_count=self._keys.count(),
        )
        self._emit(SourceConnectedEvent(source=self.kind))
        self._task = asyncio.create_task(self._run(stop))

    async def stop(self) -> None:
        """Stop the loop, cancel pending waits, flush state and emit disconnected. No-op if stopped."""
        if not self._running:
            return
        self._running = False
        self._stop_event.set()
        await self._halt()
        await self._flush_state()
        self._connected = False
        self._logger.info("activity_source_stopped", source=self.kind)
        self._emit(SourceDisconnectedEvent(source=self.kind, reason="stopped"))

    async def wait_closed(self) -> None:
        """Wait for the loop task to finish (after stop())."""
        task = self._task
        if task is None:
            return
        try:
            await task
        except asyncio.CancelledError:
            pass
        finally:
            if self._task is task:
                self._task = None

    def update_wallets(self, wallets: Iterable[Wallet]) -> None:
        """Swap the wallet registry. A cycle already in flight keeps its old snapshot."""
        self._registry = WalletRegistry.of(wallets)
        self._logger.info("activity_source_wallets_updated", source_wallets_count=len(self._registry))

    def update_keys(self, keys: Iterable[str]) -> None:
        self._keys.update(keys)
        self._logger.info("activity_source_keys_updated", source_keys_count=self._keys.count())

    def status(self) -> SourceStatus:
        return SourceStatus(
            running=self._running,
            connected=self._connected,
            wallet_count=len(self._registry),
            credential_count=self._keys.count(),
        )

    def _emit(self, event: Any) -> None:
        self._event_bus.dispatch(event)

    def _emit_error(self, error: BaseException) -> None:
        self._emit(
            SourceErrorEvent(
                source=self.kind,
                detail=str(error) or type(error).__name__,
                error_type=type(error).__name__,
            )
        )

    def _emit_transfer(
        self,
        record: dict[str, Any],
        registry: WalletRegistry,
        direction: Direction | None,
        matched: tuple[Wallet, ...],
    ) -> bool:
        """Enrich and publish one record. Returns False if the record was unusable."""
        try:
            transfer = enrich_transfer(
                record, registry, direction=direction, matched_wallets=matched
            )
        except ValueError as e:
            self._logger.warning(
                "activity_source_record_skipped",
                source=self.kind,
                error_message=str(e),
            )
            return False
        self._logger.info(
            "activity_source_new_transfer",
            source=self.kind,
            transfer_hash=transfer.hash,
            transfer_direction=transfer.direction.value if transfer.direction else None,
            transfer_amount=transfer.amount,
            transfer_token=transfer.token.abbreviation,
            transfer_from_masked=mask_address(transfer.from_party.address),
            transfer_to_masked=mask_address(transfer.to_party.address),
            transfer_timestamp=transfer.timestamp,
        )
        self._emit(TransactionDetectedEvent(source=self.kind, transfer=transfer))
        return True

    async def _sleep_unless_stopped(self, seconds: float, stop: asyncio.Event) -> bool:
        """Wait seconds or until stop is set. Returns True if stopped meanwhile."""
        if seconds > 0:
            try:
                await asyncio.wait_for(stop.wait(), timeout=seconds)
            except asyncio.TimeoutError:
                pass
        return stop.is_set()

    def _connected_on_start(self) -> bool:
        return True

    async def _halt(self) -> None:
        """Interrupt the loop task on stop(). Default: let in-flight work finish."""
        return None

    @abstractmethod
    async def _run(self, stop: asyncio.Event) -> None:
        """Operating loop; returns once stop is set."""
        ...

    @abstractmethod
    async def _load_state(self) -> None:
        ...

    @abstractmethod
    async def _flush_state(self) -> None:
        """Persist progress state. Must log, not raise, on failure."""
        ...
