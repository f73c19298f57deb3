"""TRON wallet monitor: Tronscan clients, activity sources and notifications."""

from tron_wallet_monitor.clients import AsyncHttpClient, PushFeedClient, TronscanClient
from tron_wallet_monitor.config import get_settings
from tron_wallet_monitor.DI import Container
from tron_wallet_monitor.services import MonitorPipeline

__version__ = "0.1.0"
__all__ = [
    "AsyncHttpClient",
    "Container",
    "MonitorPipeline",
    "PushFeedClient",
    "TronscanClient",
    "get_settings",
]
