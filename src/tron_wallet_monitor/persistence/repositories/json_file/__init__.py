"""JSON-file repository implementations."""

from tron_wallet_monitor.persistence.repositories.json_file.progress_repository import (
    JsonSeenHashRepository,
    JsonWatermarkRepository,
)
from tron_wallet_monitor.persistence.repositories.json_file.wallet_repository import (
    JsonWalletRepository,
)

__all__ = [
    "JsonSeenHashRepository",
    "JsonWalletRepository",
    "JsonWatermarkRepository",
]
