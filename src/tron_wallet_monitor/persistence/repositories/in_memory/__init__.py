"""In-memory repository implementations."""

from tron_wallet_monitor.persistence.repositories.in_memory.progress_repository import (
    InMemorySeenHashRepository,
    InMemoryWatermarkRepository,
)
from tron_wallet_monitor.persistence.repositories.in_memory.wallet_repository import (
    InMemoryWalletRepository,
)

__all__ = [
    "InMemorySeenHashRepository",
    "InMemoryWalletRepository",
    "InMemoryWatermarkRepository",
]
