"""Transfer domain types: token metadata, parties, direction and the enriched TransferEvent."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from tron_wallet_monitor.models.wallet import Wallet


class Direction(str, Enum):
    """Direction of a transfer relative to the watched wallets."""

    IN = "In"
    OUT = "Out"
    INTERNAL = "Internal"


@dataclass(frozen=True, slots=True)
class TokenInfo:
    """Token metadata attached to a transfer."""

    name: str = ""
    abbreviation: str = ""
    decimals: int | None = None
    """None when the record carries no decimals metadata."""
    logo_ref: str | None = None
    kind: str | None = None


@dataclass(frozen=True, slots=True)
class Party:
    """One side of a transfer. name is None when the address is not a watched wallet."""

    address: str
    name: str | None = None


@dataclass(frozen=True, slots=True)
class TransferEvent:
    """An enriched token transfer ready for presentation and notification.

    amount is a non-negative decimal string with exactly token.decimals
    fractional digits ("0" when decimals are unknown).
    """

    hash: str
    from_party: Party
    to_party: Party
    amount: str
    token: TokenInfo
    direction: Direction | None
    """None only for streamed records that matched no watched wallet."""
    timestamp: int
    """Epoch milliseconds."""
    block: int | None = None
    matched_wallets: tuple[Wallet, ...] = ()
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)
