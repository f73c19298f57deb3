# -*- coding: utf-8 -*-
"""Unit tests for transfer identity and address helpers."""

from __future__ import annotations

from typing import Any

from tron_wallet_monitor.utils import is_tron_address, mask_address, normalize_address, transfer_hash, transfer_timestamp


def test_transfer_hash_prefers_transaction_id() -> None:
    assert transfer_hash({"transaction_id": "aa", "hash": "bb"}) == "aa"


def test_transfer_hash_uses_hash_for_streamed_records() -> None:
    assert transfer_hash({"hash": "bb"}) == "bb"


def test_transfer_hash_treats_empty_as_missing() -> None:
    record: dict[str, Any] = {"transaction_id": "", "hash": ""}
    assert transfer_hash(record) is None


def test_transfer_timestamp_reads_block_ts_then_timestamp() -> None:
    assert transfer_timestamp({"block_ts": 10, "timestamp": 20}) == 10
    assert transfer_timestamp({"timestamp": "20"}) == 20
    assert transfer_timestamp({"block_ts": "bad"}) == 0
    assert transfer_timestamp({}) == 0


def test_address_helpers() -> None:
    assert is_tron_address("TXYZopYRdj2D9XRtbG411XZZ3kM5VkAeBf") is True
    assert is_tron_address("0x2d27b6e21b3d4d7c9a43fdf58f12345678907706") is False
    assert is_tron_address(None) is False
    assert normalize_address("  TAbC ") == "tabc"
    assert mask_address("TXYZopYRdj2D9XRtbG411XZZ3kM5VkAeBf") == "TXYZop...AeBf"
    assert mask_address("short") == "***"
