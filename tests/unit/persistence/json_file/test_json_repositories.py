# -*- coding: utf-8 -*-
"""Unit tests for the JSON-file repositories (watermarks, seen hashes, wallet store)."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from tron_wallet_monitor.exceptions import StatePersistenceError
from tron_wallet_monitor.models.wallet import Wallet
from tron_wallet_monitor.persistence.repositories.json_file import (
    JsonSeenHashRepository,
    JsonWalletRepository,
    JsonWatermarkRepository,
)


async def test_watermark_file_round_trip_with_lowercased_keys(tmp_path: Path) -> None:
    repo = JsonWatermarkRepository.in_dir(tmp_path)
    assert await repo.load() == {}

    await repo.save({"txyz": 120, "tlab": 7})

    path = tmp_path / "wallet-timestamps.json"
    assert json.loads(path.read_text(encoding="utf-8")) == {"txyz": 120, "tlab": 7}
    path.write_text(json.dumps({"TXYZ": "130", "bad": "x"}), encoding="utf-8")
    assert await repo.load() == {"txyz": 130}


async def test_corrupt_watermark_file_raises_persistence_error(tmp_path: Path) -> None:
    path = tmp_path / "wallet-timestamps.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(StatePersistenceError):
        await JsonWatermarkRepository(path).load()


async def test_save_leaves_no_temp_files(tmp_path: Path) -> None:
    repo = JsonSeenHashRepository.in_dir(tmp_path / "state")
    await repo.save(["h1", "h2"])
    await repo.save(["h1", "h2", "h3"])

    assert sorted(p.name for p in (tmp_path / "state").iterdir()) == ["seen-hashes.json"]
    assert await repo.load() == ["h1", "h2", "h3"]


async def test_wallet_store_is_created_on_first_use(tmp_path: Path) -> None:
    path = tmp_path / "wallets.json"
    store = JsonWalletRepository(path)

    assert await store.list_wallets() == []
    assert json.loads(path.read_text(encoding="utf-8")) == {"wallets": []}


async def test_wallet_store_add_update_remove(tmp_path: Path, wallet_a: Wallet, wallet_b: Wallet) -> None:
    store = JsonWalletRepository(tmp_path / "wallets.json")

    assert await store.add_wallet(wallet_a) is True
    assert await store.add_wallet(Wallet(address=wallet_a.address.lower(), name="dup")) is False
    assert await store.add_wallet(wallet_b) is True
    assert await store.update_wallet(wallet_b.address.upper(), name="Cold") is True
    assert await store.update_wallet("TMissing", name="x") is False
    assert await store.remove_wallet(wallet_a.address.lower()) is True
    assert await store.remove_wallet(wallet_a.address) is False

    assert await store.list_wallets() == [Wallet(address=wallet_b.address, name="Cold")]


async def test_unreadable_wallet_store_reads_as_empty(tmp_path: Path) -> None:
    path = tmp_path / "wallets.json"
    path.write_text("[[[", encoding="utf-8")
    assert await JsonWalletRepository(path).list_wallets() == []
