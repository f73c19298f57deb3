"""Balance reporting."""

from tron_wallet_monitor.services.balance.balance_aggregator import BalanceAggregator
from tron_wallet_monitor.services.balance.report_scheduler import ReportScheduler

__all__ = ["BalanceAggregator", "ReportScheduler"]
