# -*- coding: utf-8 -*-
"""Unit tests for AsyncHttpClient timeout, rate-limit and parse handling."""

from __future__ import annotations

import asyncio
import json
from types import SimpleNamespace
from typing import Any

import aiohttp
import pytest

from tron_wallet_monitor.clients.http import AsyncHttpClient
from tron_wallet_monitor.exceptions import (
    RateLimitError,
    RequestTimeoutError,
    ResponseParseError,
    TronscanAPIError,
)

URL = "https://apilist.tronscanapi.com/api/filter/trc20/transfers"


class _FakeResponse:
    def __init__(
        self,
        status: int = 200,
        *,
        body: Any = None,
        headers: dict[str, str] | None = None,
        json_error: Exception | None = None,
        hang: bool = False,
    ) -> None:
        self.status = status
        self.headers = headers or {}
        self._body = body
        self._json_error = json_error
        self._hang = hang

    async def __aenter__(self) -> _FakeResponse:
        if self._hang:
            await asyncio.Event().wait()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        return None

    def raise_for_status(self) -> None:
        if self.status >= 400:
            raise aiohttp.ClientResponseError(
                request_info=SimpleNamespace(real_url=URL),  # type: ignore[arg-type]
                history=(),
                status=self.status,
                message="error",
            )

    async def json(self, content_type: str | None = None) -> Any:
        if self._json_error is not None:
            raise self._json_error
        return self._body


class _FakeSession:
    """Stands in for aiohttp.ClientSession; hands out scripted responses in order."""

    closed = False

    def __init__(self, *responses: _FakeResponse) -> None:
        self._responses = list(responses)
        self.requests: list[dict[str, Any]] = []

    def get(self, url: str, *, params: dict[str, Any], headers: dict[str, str]) -> _FakeResponse:
        self.requests.append({"url": url, "params": params, "headers": headers})
        return self._responses.pop(0)


def _client(session: _FakeSession, *, timeout: float = 15.0, max_retries: int = 1) -> AsyncHttpClient:
    settings = SimpleNamespace(api=SimpleNamespace(timeout_seconds=timeout, max_retries=max_retries))
    return AsyncHttpClient(settings, session=session)  # type: ignore[arg-type]


async def test_json_body_is_returned_with_params_and_headers() -> None:
    session = _FakeSession(_FakeResponse(body={"token_transfers": []}))
    client = _client(session)

    data = await client.get(URL, params={"limit": 20}, headers={"TRON-PRO-API-KEY": "k1"})

    assert data == {"token_transfers": []}
    assert session.requests == [{"url": URL, "params": {"limit": 20}, "headers": {"TRON-PRO-API-KEY": "k1"}}]


async def test_no_response_within_timeout_raises_request_timeout() -> None:
    client = _client(_FakeSession(_FakeResponse(hang=True)), timeout=0.05)

    with pytest.raises(RequestTimeoutError) as exc_info:
        await client.get(URL)

    assert exc_info.value.url == URL
    assert isinstance(exc_info.value.cause, asyncio.TimeoutError)


async def test_429_raises_rate_limit_with_retry_after() -> None:
    client = _client(_FakeSession(_FakeResponse(429, headers={"Retry-After": "7"})))

    with pytest.raises(RateLimitError) as exc_info:
        await client.get(URL)

    assert exc_info.value.status_code == 429
    assert exc_info.value.retry_after == 7.0


async def test_429_is_retried_when_attempts_remain() -> None:
    session = _FakeSession(
        _FakeResponse(429, headers={"Retry-After": "0.01"}),
        _FakeResponse(body={"totalAssetInUsd": 3.5}),
    )
    client = _client(session, max_retries=2)

    assert await client.get(URL) == {"totalAssetInUsd": 3.5}
    assert len(session.requests) == 2


async def test_malformed_body_raises_parse_error_without_retry() -> None:
    session = _FakeSession(
        _FakeResponse(json_error=json.JSONDecodeError("Expecting value", "<html>", 0)),
        _FakeResponse(body={}),
    )
    client = _client(session, max_retries=2)

    with pytest.raises(ResponseParseError) as exc_info:
        await client.get(URL)

    assert exc_info.value.status_code == 200
    assert len(session.requests) == 1


async def test_server_error_becomes_api_error_with_status() -> None:
    client = _client(_FakeSession(_FakeResponse(503)))

    with pytest.raises(TronscanAPIError) as exc_info:
        await client.get(URL)

    assert type(exc_info.value) is TronscanAPIError
    assert exc_info.value.status_code == 503


async def test_zero_attempts_raise_api_error_without_request() -> None:
    session = _FakeSession()
    client = _client(session, max_retries=0)

    with pytest.raises(TronscanAPIError, match="made no attempts"):
        await client.get(URL)

    assert session.requests == []
