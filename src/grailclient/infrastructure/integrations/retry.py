"""Backoff for rate-limited catalog requests (HTTP 429)."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

import httpx

logger = logging.getLogger(__name__)

DEFAULT_MAX_DELAY = 30.0


def _retry_after_seconds(response: httpx.Response) -> float | None:
    value = response.headers.get("Retry-After")
    if value is None:
        return None
    try:
        return max(0.0, float(value))
    except ValueError:
        # HTTP-date form - not worth parsing, fall back to our own backoff
        return None


# Hey future me - the catalog API (and the upstream data source behind it) answers 429 when we
# hammer it. Waiting and resending almost always works: 1s -> 2s -> 4s, unless the server tells
# us how long via Retry-After. ONLY 429 is retried here. Everything else (5xx, timeouts,
# connection errors) goes straight back to the caller, which keeps its state and shows a retry
# button - automatic retries of mutations would hide failures from the viewer.
async def send_with_backoff(
    send: Callable[[], Awaitable[httpx.Response]],
    max_attempts: int = 3,
    initial_delay: float = 1.0,
    max_delay: float = DEFAULT_MAX_DELAY,
    backoff_factor: float = 2.0,
) -> httpx.Response:
    """Send a request, resending while the server answers 429.

    Args:
        send: Zero-argument coroutine factory performing the request
        max_attempts: Total attempts including the first one
        initial_delay: Wait after the first 429 in seconds
        max_delay: Upper bound for any single wait
        backoff_factor: Multiply delay by this after each 429

    Returns:
        The first non-429 response, or the last 429 when attempts run out
    """
    delay = initial_delay
    attempt = 1
    while True:
        response = await send()
        if response.status_code != httpx.codes.TOO_MANY_REQUESTS or attempt >= max_attempts:
            if response.status_code == httpx.codes.TOO_MANY_REQUESTS:
                logger.error(
                    "Rate limited after %d attempts, giving up: %s %s",
                    attempt,
                    response.request.method,
                    response.request.url,
                )
            return response

        wait = _retry_after_seconds(response)
        wait = min(wait if wait is not None else delay, max_delay)
        logger.warning(
            "Rate limited (attempt %d/%d), retrying in %.1fs: %s",
            attempt,
            max_attempts,
            wait,
            response.request.url,
        )
        await asyncio.sleep(wait)
        delay = min(delay * backoff_factor, max_delay)
        attempt += 1
