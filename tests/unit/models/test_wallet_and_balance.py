# -*- coding: utf-8 -*-
"""Unit tests for WalletRegistry lookups and BalanceReport aggregates."""

from __future__ import annotations

import pytest

from tron_wallet_monitor.models.balance import BalanceReport, BalanceSnapshot
from tron_wallet_monitor.models.wallet import Wallet, WalletRegistry


def test_registry_lookup_is_case_insensitive(wallet_a: Wallet, wallet_c: Wallet) -> None:
    registry = WalletRegistry.of([wallet_a, wallet_c])

    assert registry.find(wallet_a.address.upper()) == wallet_a
    assert wallet_a.address.lower() in registry
    assert registry.name_of(wallet_a.address.lower()) == "Treasury"
    assert registry.name_of(wallet_c.address) is None
    assert registry.find(None) is None
    assert list(registry) == [wallet_a, wallet_c]


def test_wallet_from_dict_requires_address() -> None:
    assert Wallet.from_dict({"address": " TAbc ", "name": ""}) == Wallet(address="TAbc", name=None)
    with pytest.raises(ValueError):
        Wallet.from_dict({"name": "no address"})


def test_balance_report_ignores_failed_snapshots_in_total(wallet_a: Wallet, wallet_b: Wallet) -> None:
    report = BalanceReport(
        snapshots=(
            BalanceSnapshot(wallet=wallet_a, usd_value=12.25),
            BalanceSnapshot(wallet=wallet_b, error="timeout"),
        )
    )
    assert report.total_usd == pytest.approx(12.25)
    assert report.success_count == 1
    assert report.summary_line == "1/2 succeeded"
