# -*- coding: utf-8 -*-
"""Unit tests for PollingActivitySource sweeps, watermarks and lifecycle."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock

from tron_wallet_monitor.events.monitor_events import (
    SourceConnectedEvent,
    SourceDisconnectedEvent,
    TransactionDetectedEvent,
)
from tron_wallet_monitor.exceptions import RequestTimeoutError, StatePersistenceError
from tron_wallet_monitor.models.transfer import Direction
from tron_wallet_monitor.models.wallet import Wallet
from tron_wallet_monitor.persistence.repositories.in_memory import InMemoryWatermarkRepository
from tron_wallet_monitor.services.activity_source import PollingActivitySource
from tron_wallet_monitor.services.credentials import ApiKeyAllocator


def _settings(**overrides: Any) -> Any:
    monitoring = SimpleNamespace(
        poll_seconds=overrides.pop("poll_seconds", 60.0),
        wallet_delay_seconds=overrides.pop("wallet_delay_seconds", 0.0),
        page_size=overrides.pop("page_size", 20),
    )
    return SimpleNamespace(monitoring=monitoring)


def _source(
    *,
    event_bus: Any,
    tronscan: Any,
    repo: Any,
    wallets: list[Wallet],
    keys: list[str] | None = None,
) -> PollingActivitySource:
    return PollingActivitySource(
        _settings(),
        event_bus,
        ApiKeyAllocator(keys or ["k1", "k2"]),
        tronscan,
        repo,
        wallets=wallets,
    )


async def test_only_transfers_newer_than_watermark_are_emitted_oldest_first(
    event_bus: Any,
    wallet_a: Wallet,
    outsider: str,
    polling_record_factory: Callable[..., dict[str, Any]],
    settle_tasks: Callable[..., Any],
) -> None:
    # Wire order is newest first.
    page = [
        polling_record_factory("h120", 120, from_address=outsider, to_address=wallet_a.address),
        polling_record_factory("h110", 110, from_address=wallet_a.address, to_address=outsider),
        polling_record_factory("h90", 90, from_address=outsider, to_address=wallet_a.address),
    ]
    tronscan = SimpleNamespace(get_trc20_transfers=AsyncMock(return_value=page))
    repo = InMemoryWatermarkRepository({wallet_a.address.lower(): 100})
    source = _source(event_bus=event_bus, tronscan=tronscan, repo=repo, wallets=[wallet_a])

    await source.start()
    await settle_tasks()
    await source.stop()
    await source.wait_closed()

    detected = event_bus.of_type(TransactionDetectedEvent)
    assert [e.transfer.hash for e in detected] == ["h110", "h120"]
    assert detected[0].transfer.direction is Direction.OUT
    assert detected[1].transfer.direction is Direction.IN
    assert detected[1].transfer.to_party.name == "Treasury"
    assert detected[1].transfer.amount == "1.500000"
    assert source.watermark.get(wallet_a.address) == 120
    assert (await repo.load()) == {wallet_a.address.lower(): 120}


async def test_sweep_persists_once_and_only_when_new_transfers(
    event_bus: Any,
    wallet_a: Wallet,
    wallet_b: Wallet,
    outsider: str,
    polling_record_factory: Callable[..., dict[str, Any]],
    settle_tasks: Callable[..., Any],
) -> None:
    pages = {
        wallet_a.address: [polling_record_factory("a1", 500, from_address=outsider, to_address=wallet_a.address)],
        wallet_b.address: [polling_record_factory("b1", 600, from_address=outsider, to_address=wallet_b.address)],
    }

    async def _transfers(address: str, **_: Any) -> list[dict[str, Any]]:
        return pages[address]

    tronscan = SimpleNamespace(get_trc20_transfers=AsyncMock(side_effect=_transfers))
    repo = InMemoryWatermarkRepository()
    source = _source(event_bus=event_bus, tronscan=tronscan, repo=repo, wallets=[wallet_a, wallet_b])

    await source.start()
    await settle_tasks()
    assert repo.save_count == 1

    # Second sweep over the same pages finds nothing new and writes nothing.
    assert await source.sweep() is False
    assert repo.save_count == 1

    await source.stop()
    await source.wait_closed()


async def test_failing_wallet_is_skipped_and_sweep_continues(
    event_bus: Any,
    wallet_a: Wallet,
    wallet_b: Wallet,
    outsider: str,
    polling_record_factory: Callable[..., dict[str, Any]],
    settle_tasks: Callable[..., Any],
) -> None:
    ok_page = [polling_record_factory("b1", 10, from_address=wallet_b.address, to_address=outsider)]
    tronscan = SimpleNamespace(
        get_trc20_transfers=AsyncMock(side_effect=[RequestTimeoutError("timed out"), ok_page])
    )
    repo = InMemoryWatermarkRepository()
    source = _source(event_bus=event_bus, tronscan=tronscan, repo=repo, wallets=[wallet_a, wallet_b])

    await source.start()
    await settle_tasks()
    await source.stop()
    await source.wait_closed()

    detected = event_bus.of_type(TransactionDetectedEvent)
    assert [e.transfer.hash for e in detected] == ["b1"]
    assert source.watermark.get(wallet_a.address) == 0
    assert source.watermark.get(wallet_b.address) == 10


async def test_keys_rotate_across_wallet_requests(
    event_bus: Any,
    wallet_a: Wallet,
    wallet_b: Wallet,
    wallet_c: Wallet,
    settle_tasks: Callable[..., Any],
) -> None:
    tronscan = SimpleNamespace(get_trc20_transfers=AsyncMock(return_value=[]))
    source = _source(
        event_bus=event_bus,
        tronscan=tronscan,
        repo=InMemoryWatermarkRepository(),
        wallets=[wallet_a, wallet_b, wallet_c],
        keys=["k1", "k2"],
    )

    await source.start()
    await settle_tasks()
    await source.stop()
    await source.wait_closed()

    used = [call.kwargs["api_key"] for call in tronscan.get_trc20_transfers.await_args_list]
    addresses = [call.args[0] for call in tronscan.get_trc20_transfers.await_args_list]
    assert used == ["k1", "k2", "k1"]
    assert addresses == [wallet_a.address, wallet_b.address, wallet_c.address]


async def test_lifecycle_emits_connected_and_disconnected_and_flushes_on_stop(
    event_bus: Any,
    wallet_a: Wallet,
    settle_tasks: Callable[..., Any],
) -> None:
    tronscan = SimpleNamespace(get_trc20_transfers=AsyncMock(return_value=[]))
    repo = InMemoryWatermarkRepository()
    source = _source(event_bus=event_bus, tronscan=tronscan, repo=repo, wallets=[wallet_a])

    await source.start()
    await source.start()
    await settle_tasks()
    status = source.status()
    assert status.running is True
    assert status.connected is True
    assert status.wallet_count == 1
    assert status.credential_count == 2

    await source.stop()
    await source.stop()
    await source.wait_closed()

    assert len(event_bus.of_type(SourceConnectedEvent)) == 1
    disconnected = event_bus.of_type(SourceDisconnectedEvent)
    assert len(disconnected) == 1
    assert disconnected[0].source == "polling"
    assert repo.save_count == 1
    assert source.status().running is False


async def test_persistence_failure_is_not_fatal(
    event_bus: Any,
    wallet_a: Wallet,
    outsider: str,
    polling_record_factory: Callable[..., dict[str, Any]],
    settle_tasks: Callable[..., Any],
) -> None:
    page = [polling_record_factory("h1", 5, from_address=outsider, to_address=wallet_a.address)]
    tronscan = SimpleNamespace(get_trc20_transfers=AsyncMock(return_value=page))
    repo = SimpleNamespace(
        load=AsyncMock(side_effect=StatePersistenceError("corrupt")),
        save=AsyncMock(side_effect=StatePersistenceError("read-only")),
    )
    source = _source(event_bus=event_bus, tronscan=tronscan, repo=repo, wallets=[wallet_a])

    await source.start()
    await settle_tasks()
    await source.stop()
    await source.wait_closed()

    assert [e.transfer.hash for e in event_bus.of_type(TransactionDetectedEvent)] == ["h1"]
    assert source.watermark.get(wallet_a.address) == 5


async def test_update_wallets_applies_to_next_sweep(
    event_bus: Any,
    wallet_a: Wallet,
    wallet_b: Wallet,
    settle_tasks: Callable[..., Any],
) -> None:
    tronscan = SimpleNamespace(get_trc20_transfers=AsyncMock(return_value=[]))
    source = _source(
        event_bus=event_bus,
        tronscan=tronscan,
        repo=InMemoryWatermarkRepository(),
        wallets=[wallet_a],
    )
    await source.start()
    await settle_tasks()

    source.update_wallets([wallet_b])
    source.update_keys(["only"])
    await source.sweep()
    await source.stop()
    await source.wait_closed()

    last = tronscan.get_trc20_transfers.await_args_list[-1]
    assert last.args[0] == wallet_b.address
    assert last.kwargs["api_key"] == "only"
    assert source.status().credential_count == 1


class _GatedTransfers:
    """get_trc20_transfers double that holds every request until the gate opens."""

    def __init__(self) -> None:
        self.gate = asyncio.Event()
        self.calls: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def __call__(self, address: str, **_: Any) -> list[dict[str, Any]]:
        self.calls.append(address)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await self.gate.wait()
        finally:
            self.in_flight -= 1
        return []


async def test_stop_during_request_lets_it_finish_without_further_work(
    event_bus: Any,
    wallet_a: Wallet,
    wallet_b: Wallet,
    settle_tasks: Callable[..., Any],
) -> None:
    gated = _GatedTransfers()
    source = _source(
        event_bus=event_bus,
        tronscan=SimpleNamespace(get_trc20_transfers=gated),
        repo=InMemoryWatermarkRepository(),
        wallets=[wallet_a, wallet_b],
    )

    await source.start()
    await settle_tasks()
    assert gated.calls == [wallet_a.address]

    await source.stop()
    gated.gate.set()
    await source.wait_closed()
    await settle_tasks()

    # wallet_b is never visited and no second sweep starts.
    assert gated.calls == [wallet_a.address]
    assert source.status().running is False


async def test_restart_while_request_in_flight_never_runs_two_loops(
    event_bus: Any,
    wallet_a: Wallet,
    settle_tasks: Callable[..., Any],
) -> None:
    gated = _GatedTransfers()
    source = _source(
        event_bus=event_bus,
        tronscan=SimpleNamespace(get_trc20_transfers=gated),
        repo=InMemoryWatermarkRepository(),
        wallets=[wallet_a],
    )

    await source.start()
    await settle_tasks()
    await source.stop()

    restart = asyncio.create_task(source.start())
    await settle_tasks()
    # The new run waits for the old request before sweeping.
    assert restart.done() is False
    assert gated.calls == [wallet_a.address]

    gated.gate.set()
    await restart
    await settle_tasks()

    assert gated.max_in_flight == 1
    assert gated.calls == [wallet_a.address, wallet_a.address]
    assert source.status().running is True
    assert len(event_bus.of_type(SourceConnectedEvent)) == 2

    await source.stop()
    await source.wait_closed()
    leftovers = [t for t in asyncio.all_tasks() if t is not asyncio.current_task()]
    assert leftovers == []
