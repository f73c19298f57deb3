"""Abstract interface for the wallet registry store."""

from __future__ import annotations

from abc import ABC, abstractmethod

from tron_wallet_monitor.models.wallet import Wallet


class IWalletRepository(ABC):
    """Configured wallets. Reads return the last successfully written value."""

    @abstractmethod
    async def list_wallets(self) -> list[Wallet]:
        """Return wallets in configured order."""
        ...

    @abstractmethod
    async def add_wallet(self, wallet: Wallet) -> bool:
        """Append wallet. Returns False if the address (any case) is already present."""
        ...

    @abstractmethod
    async def remove_wallet(self, address: str) -> bool:
        """Remove the wallet with address (any case). Returns False if absent."""
        ...

    @abstractmethod
    async def update_wallet(self, address: str, *, name: str | None) -> bool:
        """Rename the wallet with address. Returns False if absent."""
        ...
