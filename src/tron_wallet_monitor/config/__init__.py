"""Configuration subpackage."""

from tron_wallet_monitor.config.config import (
    ApiSettings,
    AppSettings,
    ConsoleNotificationSettings,
    LoggingSettings,
    MonitoringSettings,
    ReportSettings,
    Settings,
    TelegramNotificationSettings,
    WalletStoreSettings,
    get_settings,
)

__all__ = [
    "ApiSettings",
    "AppSettings",
    "ConsoleNotificationSettings",
    "LoggingSettings",
    "MonitoringSettings",
    "ReportSettings",
    "Settings",
    "TelegramNotificationSettings",
    "WalletStoreSettings",
    "get_settings",
]
