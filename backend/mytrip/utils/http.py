"""Resilient GET for the tour data provider.

4xx responses are caller bugs and fail on the first attempt; retrying them
only burns quota on a rate-limited provider. 5xx responses and transport
failures are presumed transient and retried with exponential backoff
(1s, 2s, 4s for the default three retries).
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

import httpx
import structlog

from mytrip.errors import ClientError, NotFoundError, TransientError
from mytrip.logging import is_production

log = structlog.get_logger("mytrip.http")

DEFAULT_MAX_RETRIES = 3
BACKOFF_BASE_SECONDS = 1.0

SleepFn = Callable[[float], Awaitable[Any]]


def backoff_delay(attempt: int) -> float:
    """Seconds to wait after the zero-based ``attempt`` failed."""
    return (2**attempt) * BACKOFF_BASE_SECONDS


def _log_retry(event: str, **fields: Any) -> None:
    if not is_production():
        log.info(event, **fields)


def _strip_query(url: str) -> str:
    # never log the service key
    return url.split("?", 1)[0]


async def fetch_with_retry(
    client: httpx.AsyncClient,
    url: str,
    *,
    params: Mapping[str, str] | None = None,
    max_retries: int = DEFAULT_MAX_RETRIES,
    timeout: float | None = None,
    sleep: SleepFn = asyncio.sleep,
) -> httpx.Response:
    """GET ``url`` with bounded retry; raises a classified error on failure.

    Any response outside the 4xx/5xx ranges is returned as is.
    """
    if max_retries < 0:
        raise ValueError(f"max_retries must be >= 0, got {max_retries}")

    last_exc: httpx.RequestError | None = None
    for attempt in range(max_retries + 1):
        try:
            response = await client.get(url, params=params, timeout=timeout)
        except httpx.RequestError as exc:
            last_exc = exc
            if attempt < max_retries:
                delay = backoff_delay(attempt)
                _log_retry(
                    "tour_api_network_retry",
                    url=_strip_query(url),
                    error_type=type(exc).__name__,
                    delay_s=delay,
                    attempt=attempt + 1,
                    max_retries=max_retries,
                )
                await sleep(delay)
                continue
            break

        status = response.status_code
        if 400 <= status < 500:
            error_cls = NotFoundError if status == 404 else ClientError
            raise error_cls(f"API request failed with status {status}", status_code=status)

        if status >= 500:
            if attempt < max_retries:
                delay = backoff_delay(attempt)
                _log_retry(
                    "tour_api_retry",
                    url=_strip_query(url),
                    status=status,
                    delay_s=delay,
                    attempt=attempt + 1,
                    max_retries=max_retries,
                )
                await sleep(delay)
                continue
            raise TransientError(
                f"API request failed with status {status} after {max_retries} retries",
                status_code=status,
                attempts=attempt + 1,
            )

        return response

    raise TransientError(
        f"API request failed after {max_retries} retries: {type(last_exc).__name__}: {last_exc}",
        cause=last_exc,
        attempts=max_retries + 1,
    ) from last_exc
