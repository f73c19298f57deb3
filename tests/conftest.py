# -*- coding: utf-8 -*-
"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any

import pytest

from tron_wallet_monitor.models.wallet import Wallet


class FakeEventBus:
    """Records dispatched events and calls handlers registered with on() synchronously."""

    def __init__(self) -> None:
        self.dispatched: list[Any] = []
        self.handlers: dict[type[Any], list[Callable[[Any], Any]]] = {}

    def on(self, event_type: type[Any], handler: Callable[[Any], Any]) -> None:
        self.handlers.setdefault(event_type, []).append(handler)

    def dispatch(self, event: Any) -> Any:
        self.dispatched.append(event)
        for handler in self.handlers.get(type(event), []):
            handler(event)
        return event

    def of_type(self, event_type: type[Any]) -> list[Any]:
        return [e for e in self.dispatched if isinstance(e, event_type)]


class RecordingSleep:
    """Async sleep double: records requested delays and advances a fake clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.calls: list[float] = []
        self.now = start

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)
        self.now += seconds
        await asyncio.sleep(0)

    def clock(self) -> float:
        return self.now


async def settle(rounds: int = 20) -> None:
    """Let scheduled tasks run until they block on something real."""
    for _ in range(rounds):
        await asyncio.sleep(0)


@pytest.fixture
def wallet_a() -> Wallet:
    return Wallet(address="TXYZopYRdj2D9XRtbG411XZZ3kM5VkAeBf", name="Treasury")


@pytest.fixture
def wallet_b() -> Wallet:
    return Wallet(address="TLa2f6VPqDgRE67v1736s7bJ8Ray5wYjU7", name="Hot wallet")


@pytest.fixture
def wallet_c() -> Wallet:
    return Wallet(address="TNPeeaaFB7K9cmo4uQpcU32zGK8G1NYqeL", name=None)


@pytest.fixture
def outsider() -> str:
    """An address that is not a watched wallet."""
    return "TR7NHqjeKQxGTCi8q8ZY4pL8otSzgjLj6t"


@pytest.fixture
def event_bus() -> FakeEventBus:
    return FakeEventBus()


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def polling_record_factory() -> Callable[..., dict[str, Any]]:
    """Build a filter-API transfer record (polling shape)."""

    def _build(
        tx_hash: str,
        block_ts: int,
        *,
        from_address: str,
        to_address: str,
        quant: str = "1500000",
        decimals: int | None = 6,
    ) -> dict[str, Any]:
        token: dict[str, Any] = {"tokenName": "Tether USD", "tokenAbbr": "USDT", "tokenType": "trc20"}
        if decimals is not None:
            token["tokenDecimal"] = decimals
        return {
            "transaction_id": tx_hash,
            "block_ts": block_ts,
            "block": 70_000_000,
            "from_address": from_address,
            "to_address": to_address,
            "quant": quant,
            "confirmed": True,
            "tokenInfo": token,
        }

    return _build


@pytest.fixture
def stream_record_factory() -> Callable[..., dict[str, Any]]:
    """Build a push-feed transfer record (streaming shape)."""

    def _build(
        tx_hash: str,
        *,
        owner: str,
        to: str,
        amount: str = "2500000",
        timestamp: int = 1_760_000_000_000,
    ) -> dict[str, Any]:
        return {
            "hash": tx_hash,
            "ownerAddress": owner,
            "toAddress": to,
            "amount": amount,
            "timestamp": timestamp,
            "block": 70_000_001,
            "contractType": 31,
            "tokenInfo": {"name": "Tether USD", "abbr": "USDT", "decimal": 6, "type": "trc20"},
        }

    return _build


@pytest.fixture
def settle_tasks() -> Callable[..., Any]:
    return settle
