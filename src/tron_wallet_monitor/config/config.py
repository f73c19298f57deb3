# -*- coding: utf-8 -*-
"""Configuration loaded from environment via Pydantic Settings.

Nested env vars use <section>__<key>, e.g. LOGGING__CONSOLE_LEVEL, API__TRONSCAN_HOST.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Literal, Optional

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """General application configuration."""

    model_config = SettingsConfigDict(extra="ignore")

    app_name: str = "tron-wallet-monitor"
    service_name: Optional[str] = None
    service_version: Optional[str] = None
    environment: Literal["development", "test", "production"] = "development"


class LoggingSettings(BaseSettings):
    """Structured logging configuration for structlog/stdlib/Logfire."""

    model_config = SettingsConfigDict(extra="ignore")

    console_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    logfire_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    log_to_console: bool = True
    log_to_file: bool = False
    log_file_path: str = "logs/wallet_monitor.log"
    # TimedRotatingFileHandler: when to rotate (S/M/H/D/W0–W6/midnight), interval, backups to keep
    log_file_when: Literal[
        "S", "M", "H", "D", "W0", "W1", "W2", "W3", "W4", "W5", "W6", "midnight"
    ] = "midnight"
    log_file_interval: int = 1
    log_file_backup_count: int = 30
    log_file_utc: bool = True

    # Main output format: JSONRenderer if True, ConsoleRenderer if False
    json_format: bool = False

    logfire_enabled: bool = False
    logfire_token: Optional[str] = None


class ApiSettings(BaseSettings):
    """Configuration for the Tronscan HTTP API."""

    model_config = SettingsConfigDict(extra="ignore")

    tronscan_host: str = Field(
        default="https://apilist.tronscanapi.com",
        description="Tronscan API base URL.",
    )
    api_key_header: str = Field(
        default="TRON-PRO-API-KEY",
        description="Header carrying the per-request API key.",
    )
    timeout_seconds: float = Field(
        default=15.0,
        ge=1.0,
        le=120.0,
        description="HTTP request timeout in seconds.",
    )
    max_retries: int = Field(
        default=1,
        ge=1,
        le=20,
        description="Attempts per request. 1 means a failure is reported to the caller at once.",
    )
    # Raw string from env so pydantic-settings does not try to JSON-decode it.
    api_keys_raw: str = Field(
        default="",
        description="Tronscan API keys, comma-separated. Env: API__API_KEYS.",
        validation_alias="api_keys",
    )

    @computed_field
    @property
    def api_keys(self) -> list[str]:
        """Parse comma-separated api_keys_raw into list of stripped strings."""
        if not self.api_keys_raw or not self.api_keys_raw.strip():
            return []
        return [s.strip() for s in self.api_keys_raw.split(",") if s.strip()]


class MonitoringSettings(BaseSettings):
    """Configuration for the activity source (polling or streaming)."""

    model_config = SettingsConfigDict(extra="ignore")

    enabled: bool = True
    mode: Literal["polling", "streaming"] = "polling"
    poll_seconds: float = Field(
        default=10.0,
        ge=0.5,
        le=600.0,
        description="Delay between the end of one sweep and the start of the next.",
    )
    wallet_delay_seconds: float = Field(
        default=0.3,
        ge=0.0,
        le=10.0,
        description="Pause between two wallets of the same sweep.",
    )
    page_size: int = Field(
        default=20,
        ge=1,
        le=50,
        description="Number of transfers requested per wallet (newest first).",
    )
    stream_url: str = Field(
        default="wss://apilist.tronscanapi.com/api/tronsocket/homepage",
        description="Push feed websocket URL.",
    )
    reconnect_seconds: float = Field(default=5.0, ge=0.1, le=300.0)
    seen_cache_size: int = Field(default=1000, ge=2, le=100_000)
    emit_unmatched: bool = Field(
        default=True,
        description="Emit streamed transfers that match no configured wallet.",
    )
    state_dir: str = Field(
        default="state",
        description="Directory holding wallet-timestamps.json and seen-hashes.json.",
    )


class ReportSettings(BaseSettings):
    """Daily balance report schedule."""

    model_config = SettingsConfigDict(extra="ignore")

    enabled: bool = False
    time: str = Field(default="09:00", description="Local time of day, HH:MM.")
    timezone: str = "Asia/Ho_Chi_Minh"
    wallet_delay_seconds: float = Field(default=0.5, ge=0.0, le=10.0)
    check_seconds: float = Field(default=60.0, ge=1.0, le=3600.0)
    run_on_start: bool = True

    @field_validator("time")
    @classmethod
    def _check_time(cls, value: str) -> str:
        hours, sep, minutes = value.strip().partition(":")
        if not sep or not hours.isdigit() or not minutes.isdigit():
            raise ValueError("report time must be HH:MM")
        if not (0 <= int(hours) <= 23 and 0 <= int(minutes) <= 59):
            raise ValueError("report time must be HH:MM")
        return f"{int(hours):02d}:{int(minutes):02d}"


class TelegramNotificationSettings(BaseSettings):
    """Telegram notifications (from env TELEGRAM__*)."""

    model_config = SettingsConfigDict(extra="ignore")

    enabled: bool = False
    api_key: Optional[str] = Field(default=None, description="Telegram bot API key.")
    chat_id: Optional[str] = Field(default=None, description="Telegram chat ID.")
    min_send_interval_seconds: float = Field(default=3.0, ge=0.0, le=60.0)
    failure_cooldown_seconds: float = Field(default=5.0, ge=0.0, le=300.0)
    queue_size: int = Field(default=1000, ge=1, le=10000)
    connect_timeout: float = Field(default=10.0, ge=0.1, le=60.0)
    read_timeout: float = Field(default=20.0, ge=0.1, le=120.0)
    write_timeout: float = Field(default=20.0, ge=0.1, le=120.0)
    pool_timeout: float = Field(default=10.0, ge=0.1, le=60.0)


class ConsoleNotificationSettings(BaseSettings):
    """Console notification settings."""

    model_config = SettingsConfigDict(extra="ignore")

    enabled: bool = True


class WalletStoreSettings(BaseSettings):
    """Where the wallet registry is kept."""

    model_config = SettingsConfigDict(extra="ignore")

    store_path: str = Field(default="state/wallets.json")


class Settings(BaseSettings):
    """Root application configuration.

    Groups all sub-configurations so the rest of the code does not
    read environment variables directly. Nested overrides use
    <section>__<key>, e.g. LOGGING__CONSOLE_LEVEL, MONITORING__MODE.
    """

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    app: AppSettings = Field(default_factory=AppSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    api: ApiSettings = Field(default_factory=ApiSettings)
    monitoring: MonitoringSettings = Field(default_factory=MonitoringSettings)
    report: ReportSettings = Field(default_factory=ReportSettings)
    telegram: TelegramNotificationSettings = Field(default_factory=TelegramNotificationSettings)
    console: ConsoleNotificationSettings = Field(default_factory=ConsoleNotificationSettings)
    wallets: WalletStoreSettings = Field(default_factory=WalletStoreSettings)

    @classmethod
    def from_env(cls, **overrides: Any) -> Settings:
        """Build settings from environment (and .env), with optional overrides.

        Nested overrides can be passed as nested dicts, e.g.
        from_env(monitoring={"mode": "streaming"}).
        """
        return cls(**overrides)


@lru_cache
def get_settings() -> Settings:
    """Return a single cached instance of Settings.

    Typical usage:

        from tron_wallet_monitor.config import get_settings

        settings = get_settings()
        timeout = settings.api.timeout_seconds
    """
    return Settings()
