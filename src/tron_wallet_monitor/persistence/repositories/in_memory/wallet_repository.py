# -*- coding: utf-8 -*-
"""In-memory wallet registry store."""

from __future__ import annotations

from dataclasses import replace

from tron_wallet_monitor.models.wallet import Wallet
from tron_wallet_monitor.persistence.repositories.interfaces.wallet_repository import (
    IWalletRepository,
)
from tron_wallet_monitor.utils.validation import normalize_address


class InMemoryWalletRepository(IWalletRepository):
    """In-memory implementation of IWalletRepository."""

    def __init__(self, wallets: list[Wallet] | None = None) -> None:
        self._wallets: list[Wallet] = list(wallets or [])

    async def list_wallets(self) -> list[Wallet]:
        return list(self._wallets)

    async def add_wallet(self, wallet: Wallet) -> bool:
        if any(w.key == wallet.key for w in self._wallets):
            return False
        self._wallets.append(wallet)
        return True

    async def remove_wallet(self, address: str) -> bool:
        key = normalize_address(address)
        kept = [w for w in self._wallets if w.key != key]
        removed = len(kept) != len(self._wallets)
        self._wallets = kept
        return removed

    async def update_wallet(self, address: str, *, name: str | None) -> bool:
        key = normalize_address(address)
        for i, w in enumerate(self._wallets):
            if w.key == key:
                self._wallets[i] = replace(w, name=name)
                return True
        return False
