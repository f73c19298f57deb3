"""Activity sources: polling and streaming."""

from tron_wallet_monitor.services.activity_source.base import BaseActivitySource, SourceStatus
from tron_wallet_monitor.services.activity_source.polling import PollingActivitySource
from tron_wallet_monitor.services.activity_source.streaming import StreamingActivitySource

__all__ = [
    "BaseActivitySource",
    "PollingActivitySource",
    "SourceStatus",
    "StreamingActivitySource",
]
