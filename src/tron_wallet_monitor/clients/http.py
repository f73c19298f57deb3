# -*- coding: utf-8 -*-
"""Async HTTP client with bounded attempts, timeouts and rate-limit handling."""

from __future__ import annotations

import asyncio
import random
import uuid
import aiohttp
import structlog
from typing import Any, Callable, Dict, Mapping, Optional
from structlog.contextvars import bound_contextvars

from tron_wallet_monitor.config import Settings
from tron_wallet_monitor.exceptions import (
    RateLimitError,
    RequestTimeoutError,
    ResponseParseError,
    TronscanAPIError,
)


class AsyncHttpClient:
    """Async HTTP client for the Tronscan API.

    Injects Settings and optionally an aiohttp.ClientSession. If no session
    is provided, one is created and must be closed via aclose() or used
    as an async context manager.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        session: Optional[aiohttp.ClientSession] = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Configuration (timeout, max_retries).
            session: Optional shared aiohttp session. If None, the client
                creates and owns a session (call aclose() when done).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._settings = settings
        self._session = session
        self._owns_session = session is None
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def get_session(self) -> aiohttp.ClientSession:
        """Return the shared session, creating it on first use."""
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self._settings.api.timeout_seconds)
            self._session = aiohttp.ClientSession(timeout=timeout)
            self._owns_session = True
        return self._session

    async def aclose(self) -> None:
        """Close the session if this client owns it."""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> AsyncHttpClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    def _backoff_delay(self, attempt: int) -> float:
        """Exponential backoff with jitter, capped at 4 seconds."""
        base = min(4.0, 0.25 * (2**attempt))
        return base + random.uniform(0.0, 0.15)

    async def get(
        self,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        """Perform a GET request and return decoded JSON.

        Each attempt is bounded by settings.api.timeout_seconds. With the
        default max_retries=1 the first failure is raised to the caller.

        Raises:
            RequestTimeoutError: No response within the timeout on the last attempt.
            ResponseParseError: Body is not valid JSON.
            RateLimitError: 429 on the last attempt.
            TronscanAPIError: Any other HTTP or transport failure.
        """
        params = params or {}
        request_id = uuid.uuid4().hex[:12]
        max_retries = self._settings.api.max_retries
        timeout = self._settings.api.timeout_seconds
        last_error: Optional[TronscanAPIError] = None

        with bound_contextvars(
            http_url=url,
            http_request_id=request_id,
            http_max_retries=max_retries,
        ):
            for attempt in range(max_retries):
                is_last = attempt == max_retries - 1
                with bound_contextvars(http_attempt=attempt + 1):
                    try:
                        return await asyncio.wait_for(
                            self._get_once(url, params=params, headers=headers),
                            timeout=timeout,
                        )
                    except RateLimitError as e:
                        last_error = e
                        self._logger.warning(
                            "http_get_rate_limited",
                            http_status_code=429,
                            http_retry_after_seconds=e.retry_after,
                        )
                        if not is_last:
                            await asyncio.sleep(
                                e.retry_after if e.retry_after else self._backoff_delay(attempt)
                            )
                    except ResponseParseError:
                        raise
                    except asyncio.TimeoutError as e:
                        last_error = RequestTimeoutError(
                            f"No response within {timeout}s: {url}",
                            url=url,
                            cause=e,
                        )
                        self._logger.debug("http_get_timeout", http_timeout_seconds=timeout)
                        if not is_last:
                            await asyncio.sleep(self._backoff_delay(attempt))
                    except aiohttp.ClientResponseError as e:
                        last_error = TronscanAPIError(
                            f"GET {url} returned {e.status}",
                            url=url,
                            status_code=e.status,
                            cause=e,
                        )
                        self._logger.debug(
                            "http_get_retry",
                            error_type=type(e).__name__,
                            error_message=str(e),
                            http_status_code=e.status,
                        )
                        if not is_last:
                            await asyncio.sleep(self._backoff_delay(attempt))
                    except aiohttp.ClientError as e:
                        last_error = TronscanAPIError(f"GET {url} failed: {e}", url=url, cause=e)
                        self._logger.debug(
                            "http_get_retry",
                            error_type=type(e).__name__,
                            error_message=str(e),
                        )
                        if not is_last:
                            await asyncio.sleep(self._backoff_delay(attempt))

            if last_error is None:
                last_error = TronscanAPIError(f"GET {url} made no attempts (max_retries={max_retries})", url=url)
            self._logger.warning(
                "http_get_failed",
                http_status_code=last_error.status_code,
                http_attempts=max_retries,
                error_type=type(last_error).__name__,
                error_message=str(last_error),
            )
            raise last_error

    async def _get_once(
        self,
        url: str,
        *,
        params: Dict[str, Any],
        headers: Optional[Mapping[str, str]],
    ) -> Any:
        session = await self.get_session()
        async with session.get(url, params=params, headers=dict(headers or {})) as response:
            if response.status == 429:
                retry_after: Optional[float] = None
                header = response.headers.get("Retry-After")
                if header:
                    try:
                        retry_after = float(header)
                    except ValueError:
                        pass
                raise RateLimitError(url=url, retry_after=retry_after)
            response.raise_for_status()
            try:
                return await response.json(content_type=None)
            except ValueError as e:
                raise ResponseParseError(
                    f"Malformed JSON body from {url}",
                    url=url,
                    status_code=response.status,
                    cause=e,
                ) from e
