# -*- coding: utf-8 -*-
"""Event-based notification styler with emoji separators (Telegram-style)."""

from __future__ import annotations

import html
import re
from datetime import datetime, timezone, tzinfo
from typing import Any

from tron_wallet_monitor.models.balance import BalanceReport
from tron_wallet_monitor.models.transfer import Direction, Party, TransferEvent
from tron_wallet_monitor.notifications.types import NotificationMessage, NotificationStyler
from tron_wallet_monitor.utils.validation import mask_address

TRONSCAN_TX_URL = "https://tronscan.org/#/transaction/{hash}"

_TAG_RE = re.compile(r"<[^>]+>")

_DIRECTION_TITLES: dict[Direction | None, tuple[str, str]] = {
    Direction.INTERNAL: ("🔄", "Internal Transfer"),
    Direction.OUT: ("📤", "Outgoing Transfer"),
    Direction.IN: ("📥", "Incoming Transfer"),
    None: ("💸", "Transfer"),
}


def format_display_amount(amount: Any) -> str:
    """Shorten a decimal amount string for display.

    >>> format_display_amount("0")
    '0'
    >>> format_display_amount("0.123456789")
    '0.123457'
    >>> format_display_amount("12.5")
    '12.50'
    >>> format_display_amount("1234567.5")
    '1,234,567.5'
    """
    try:
        number = float(amount)
    except (TypeError, ValueError):
        return str(amount)
    if number == 0:
        return "0"
    if number < 0.000001:
        return f"{number:.2e}"
    if number < 1:
        return f"{number:.6f}"
    if number < 1000:
        return f"{number:.2f}"
    text = f"{number:,.2f}"
    return text.rstrip("0").rstrip(".")


def format_usd(value: float) -> str:
    return f"${value:,.2f}"


class EventNotificationStyler(NotificationStyler):
    """Render notifications by event_type with emojis, separators and formatted sections.

    Output is Telegram HTML; with parse_html=False tags are stripped and
    entities unescaped for the console.
    """

    def __init__(self, tz: tzinfo | None = None) -> None:
        """
        Args:
            tz: Timezone for displayed times (UTC when None).
        """
        self._tz = tz or timezone.utc

    def render(self, message: NotificationMessage, *, parse_html: bool = True) -> str:
        """Dispatch to the appropriate renderer based on event_type."""
        if message.event_type == "transaction_detected":
            text = self._render_transaction(message)
        elif message.event_type == "balance_report":
            text = self._render_balance_report(message)
        elif message.event_type == "system_started":
            text = self._render_system(message, "🚀 Status")
        elif message.event_type == "system_stopped":
            text = self._render_system(message, "🛑 Status")
        else:
            text = self._render_generic(message)
        if parse_html:
            return text
        return html.unescape(_TAG_RE.sub("", text))

    def _render_transaction(self, message: NotificationMessage) -> str:
        payload = message.payload or {}
        transfer = payload.get("transfer")
        if not isinstance(transfer, TransferEvent):
            return self._render_generic(message)

        emoji, title = _DIRECTION_TITLES.get(transfer.direction, _DIRECTION_TITLES[None])
        token = transfer.token
        symbol = (token.abbreviation or "").upper()
        token_line = ""
        if token.name and token.name.lower() != "trx":
            token_line = f"{html.escape(token.name)} ({html.escape(token.abbreviation)})"

        lines = [
            f"{emoji} <b>{title}</b>\n",
            self._section(
                "👛 Parties",
                [
                    ("📤 From", self._format_party(transfer.from_party)),
                    ("📥 To", self._format_party(transfer.to_party)),
                ],
            ),
            self._section(
                "💰 Details",
                [
                    ("💵 Amount", f"{format_display_amount(transfer.amount)} {html.escape(symbol)}".strip()),
                    ("🪙 Token", token_line),
                    ("🕒 Time", self._format_timestamp_ms(transfer.timestamp)),
                ],
            ),
            f'<a href="{TRONSCAN_TX_URL.format(hash=transfer.hash)}">View on Tronscan</a>',
        ]
        return "\n".join([line for line in lines if line]).strip()

    def _render_balance_report(self, message: NotificationMessage) -> str:
        payload = message.payload or {}
        report = payload.get("report")
        if not isinstance(report, BalanceReport):
            return self._render_generic(message)

        rows: list[tuple[str, Any]] = []
        for snap in report.snapshots:
            label = html.escape(snap.wallet.name or mask_address(snap.wallet.address))
            if snap.ok:
                rows.append(("", f"• {label}: {format_usd(snap.usd_value)}"))
            else:
                rows.append(("", f"• {label}: ❌ {html.escape(snap.error or 'error')}"))

        lines = [
            "📊 <b>Balance Report</b>\n",
            self._section(
                "💰 Total",
                [
                    ("💵 USD", format_usd(report.total_usd)),
                    ("🕒 Time", self._format_datetime(report.generated_at)),
                ],
            ),
            self._section("👛 Wallets", rows),
            f"✅ {report.summary_line}",
        ]
        return "\n".join([line for line in lines if line]).strip()

    def _render_system(self, message: NotificationMessage, status_header: str) -> str:
        emoji, title = self._title(message.event_type)
        payload = message.payload or {}
        lines = [f"{emoji} <b>{title}</b>\n", self._section(status_header, [("", html.escape(message.message))])]
        details = [
            ("⚙️ Mode", payload.get("mode")),
            ("👛 Wallets", payload.get("wallets_count")),
            ("🔑 API keys", payload.get("keys_count")),
        ]
        lines.append(self._section("📋 Details", [(k, v) for k, v in details if v is not None]))
        return "\n".join([line for line in lines if line]).strip()

    def _render_generic(self, message: NotificationMessage) -> str:
        """Render unknown event types using message and payload."""
        emoji, title = self._title(message.event_type)
        lines = [f"{emoji} <b>{html.escape(message.title or title)}</b>", html.escape(message.message)]
        if message.payload:
            for key in sorted(message.payload.keys()):
                value = message.payload.get(key)
                if value is not None:
                    lines.append(f"<b>{html.escape(key)}:</b> {html.escape(str(value))}")
        return "\n".join(lines).strip()

    @staticmethod
    def _title(event_type: str) -> tuple[str, str]:
        mapping = {
            "system_started": ("▶️", "Monitor Started"),
            "system_stopped": ("⏹️", "Monitor Stopped"),
            "test_message": ("🧪", "Test Message"),
        }
        return mapping.get(event_type, ("ℹ️", event_type.replace("_", " ").title()))

    def _section(self, header: str, rows: list[tuple[str, Any]]) -> str:
        """Format a section with a header and rows; empty rows are skipped."""
        content_lines: list[str] = []
        for label, value in rows:
            if value is None or value == "":
                continue
            if label:
                content_lines.append(f"{self._format_label(label)} {value}")
            else:
                content_lines.append(str(value))
        if not content_lines:
            return ""
        lines = [f"{self._format_heading(header)}\n{'─' * 12}"]
        lines.extend(content_lines)
        return "\n".join(lines) + "\n"

    @staticmethod
    def _format_party(party: Party) -> str:
        code = f"<code>{html.escape(party.address or 'Unknown')}</code>"
        if party.name:
            return f"{html.escape(party.name)} ({code})"
        return code

    def _format_timestamp_ms(self, value: int) -> str:
        if not value:
            return "N/A"
        try:
            moment = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OSError, OverflowError, ValueError):
            return str(value)
        return self._format_datetime(moment)

    def _format_datetime(self, moment: datetime) -> str:
        return moment.astimezone(self._tz).strftime("%Y-%m-%d %H:%M:%S %Z")

    @staticmethod
    def _format_heading(text: str) -> str:
        emoji, _, remainder = text.partition(" ")
        if remainder:
            return f"{emoji} <b>{remainder}</b>"
        return f"<b>{text}</b>"

    @staticmethod
    def _format_label(label: str) -> str:
        emoji, _, remainder = label.partition(" ")
        if remainder:
            return f"{emoji} <b>{remainder}:</b>"
        return f"<b>{label}:</b>"
