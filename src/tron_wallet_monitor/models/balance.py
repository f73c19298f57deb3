"""Balance snapshots produced by one aggregation run."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

from tron_wallet_monitor.models.wallet import Wallet


@dataclass(frozen=True, slots=True)
class BalanceSnapshot:
    """USD value of one wallet at report time; error is set when the fetch failed."""

    wallet: Wallet
    usd_value: float = 0.0
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True, slots=True)
class BalanceReport:
    """All snapshots of one run. Never merged with a previous run."""

    snapshots: tuple[BalanceSnapshot, ...]
    generated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def total_usd(self) -> float:
        return sum(s.usd_value for s in self.snapshots if s.ok)

    @property
    def success_count(self) -> int:
        return sum(1 for s in self.snapshots if s.ok)

    @property
    def summary_line(self) -> str:
        """E.g. "2/3 succeeded"."""
        return f"{self.success_count}/{len(self.snapshots)} succeeded"
