"""Wallet and WalletRegistry: the configured set of watched addresses.

Identity is the lowercased address. The registry is an immutable snapshot;
callers replace it wholesale instead of mutating it.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from tron_wallet_monitor.utils.validation import normalize_address


@dataclass(frozen=True, slots=True)
class Wallet:
    """A watched address with an optional display name."""

    address: str
    name: str | None = None

    @property
    def key(self) -> str:
        """Case-insensitive identity key."""
        return normalize_address(self.address)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Wallet:
        address = str(data.get("address") or "").strip()
        if not address:
            raise ValueError("wallet address must be non-empty")
        name = data.get("name")
        return cls(address=address, name=str(name) if name else None)

    def to_dict(self) -> dict[str, Any]:
        return {"address": self.address, "name": self.name}


@dataclass(frozen=True, slots=True)
class WalletRegistry:
    """Ordered, immutable set of wallets with case-insensitive lookup."""

    wallets: tuple[Wallet, ...] = ()
    _by_key: dict[str, Wallet] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        by_key: dict[str, Wallet] = {}
        for w in self.wallets:
            by_key.setdefault(w.key, w)
        object.__setattr__(self, "_by_key", by_key)

    @classmethod
    def of(cls, wallets: Iterable[Wallet]) -> WalletRegistry:
        return cls(wallets=tuple(wallets))

    def __iter__(self) -> Iterator[Wallet]:
        return iter(self.wallets)

    def __len__(self) -> int:
        return len(self.wallets)

    def __contains__(self, address: object) -> bool:
        return isinstance(address, str) and normalize_address(address) in self._by_key

    def find(self, address: str | None) -> Wallet | None:
        """Return the wallet for address (any case) or None."""
        if not address:
            return None
        return self._by_key.get(normalize_address(address))

    def name_of(self, address: str | None) -> str | None:
        wallet = self.find(address)
        return wallet.name if wallet else None
