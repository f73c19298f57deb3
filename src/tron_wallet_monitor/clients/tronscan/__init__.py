"""Tronscan clients: REST API and push feed."""

from tron_wallet_monitor.clients.tronscan.push_feed import PushFeedClient, extract_transfers
from tron_wallet_monitor.clients.tronscan.tronscan import TronscanClient

__all__ = ["PushFeedClient", "TronscanClient", "extract_transfers"]
