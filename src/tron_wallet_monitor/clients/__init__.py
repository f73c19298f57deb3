"""HTTP and API clients."""

from tron_wallet_monitor.clients.http import AsyncHttpClient
from tron_wallet_monitor.clients.tronscan import PushFeedClient, TronscanClient

__all__ = [
    "AsyncHttpClient",
    "PushFeedClient",
    "TronscanClient",
]
