# -*- coding: utf-8 -*-
"""Application services."""

from tron_wallet_monitor.services.activity_source import (
    BaseActivitySource,
    PollingActivitySource,
    SourceStatus,
    StreamingActivitySource,
)
from tron_wallet_monitor.services.balance import BalanceAggregator, ReportScheduler
from tron_wallet_monitor.services.credentials import ApiKeyAllocator
from tron_wallet_monitor.services.pipeline import MonitorPipeline

__all__ = [
    "ApiKeyAllocator",
    "BalanceAggregator",
    "BaseActivitySource",
    "MonitorPipeline",
    "PollingActivitySource",
    "ReportScheduler",
    "SourceStatus",
    "StreamingActivitySource",
]
