# -*- coding: utf-8 -*-
"""Tronscan API client (TRC-20 transfers and account asset overview)."""

from __future__ import annotations

import structlog
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, cast
from structlog.contextvars import bound_contextvars

from tron_wallet_monitor.clients.tronscan.schema import AssetOverviewSchema, Trc20TransferSchema
from tron_wallet_monitor.config import Settings
from tron_wallet_monitor.exceptions import ResponseParseError
from tron_wallet_monitor.utils.validation import mask_address

if TYPE_CHECKING:
    from tron_wallet_monitor.clients.http import AsyncHttpClient


class TronscanClient:
    """Client for the Tronscan indexing API. Every call takes the credential to use."""

    def __init__(
        self,
        http_client: "AsyncHttpClient",
        settings: Settings,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the client.

        Args:
            http_client: Async HTTP client (e.g. AsyncHttpClient).
            settings: Application settings (uses settings.api).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._http = http_client
        self._settings = settings
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def _base_url(self) -> str:
        return self._settings.api.tronscan_host.rstrip("/")

    def _headers(self, api_key: str) -> Dict[str, str]:
        # An empty key still sends the header; the API answers unauthenticated.
        return {self._settings.api.api_key_header: api_key}

    async def get_trc20_transfers(
        self,
        address: str,
        *,
        api_key: str,
        limit: int = 20,
    ) -> List[Trc20TransferSchema]:
        """Fetch the latest TRC-20 transfers touching address, newest first.

        API: GET /api/filter/trc20/transfers

        Raises:
            ResponseParseError: If the body has no token_transfers list.
            TronscanAPIError: On transport, timeout or HTTP failure.
        """
        with bound_contextvars(
            tronscan_address_masked=mask_address(address),
            tronscan_limit=limit,
        ):
            url = f"{self._base_url()}/api/filter/trc20/transfers"
            params: Dict[str, Any] = {
                "limit": limit,
                "start": 0,
                "sort": "-timestamp",
                "count": "true",
                "filterTokenValue": 0,
                "relatedAddress": address,
            }
            data = await self._http.get(url, params=params, headers=self._headers(api_key))
            transfers = data.get("token_transfers") if isinstance(data, dict) else None
            if not isinstance(transfers, list):
                self._logger.warning(
                    "tronscan_transfers_unexpected_shape",
                    tronscan_response_type=type(data).__name__,
                )
                raise ResponseParseError(
                    "Response has no token_transfers list",
                    url=url,
                )
            return [
                cast(Trc20TransferSchema, x)
                for x in cast(list[Any], transfers)
                if isinstance(x, dict)
            ]

    async def get_asset_overview(self, address: str, *, api_key: str) -> AssetOverviewSchema:
        """Fetch the aggregate asset overview of address.

        API: GET /api/account/token_asset_overview

        Raises:
            ResponseParseError: If the body is not a JSON object.
            TronscanAPIError: On transport, timeout or HTTP failure.
        """
        with bound_contextvars(tronscan_address_masked=mask_address(address)):
            url = f"{self._base_url()}/api/account/token_asset_overview"
            data = await self._http.get(
                url,
                params={"address": address},
                headers=self._headers(api_key),
            )
            if not isinstance(data, dict):
                raise ResponseParseError("Asset overview is not a JSON object", url=url)
            return cast(AssetOverviewSchema, data)
