"""Retry policy of the HTTP transport.

A retry check decides, after every attempt, whether the request should be
sent again; a backoff computes how long to wait before doing so.
"""

from __future__ import annotations

import random
from collections.abc import Callable

import httpx

from lakekeeper.context import Context

DEFAULT_RETRY_MAX = 5
DEFAULT_RETRY_WAIT_MIN = 0.1
DEFAULT_RETRY_WAIT_MAX = 0.4

CheckRetry = Callable[[Context, httpx.Response | None, Exception | None], bool]
Backoff = Callable[[float, float, int, httpx.Response | None], float]
ErrorHandler = Callable[[httpx.Response | None, Exception | None, int], httpx.Response]


class _CheckRetryKey:
    """Context key under which a per-request retry check is stored."""

    def __repr__(self) -> str:
        return "check_retry"


CHECK_RETRY_KEY = _CheckRetryKey()


def default_check_retry(
    ctx: Context,
    response: httpx.Response | None,
    exc: Exception | None,
) -> bool:
    """Retry on rate limiting and server errors.

    Args:
        ctx: Context of the request.
        response: Response of the last attempt, if one was received.
        exc: Error of the last attempt, if sending failed.

    Returns:
        True when the last attempt got a 429 or 5xx response.

    Raises:
        ContextCancelledError: If the context was cancelled.
        ContextDeadlineExceededError: If the context deadline passed.
    """
    ctx.raise_if_done()

    if exc is not None or response is None:
        return False

    return response.status_code == 429 or response.status_code >= 500


def linear_jitter_backoff(
    wait_min: float,
    wait_max: float,
    attempt: int,
    response: httpx.Response | None = None,
) -> float:
    """Wait a random time between the bounds, scaled by the attempt number.

    Args:
        wait_min: Lower bound in seconds.
        wait_max: Upper bound in seconds.
        attempt: Zero-based number of the attempt that just failed.
        response: Response of that attempt; unused.

    Returns:
        Seconds to wait before the next attempt.
    """
    attempt += 1
    if wait_max <= wait_min:
        return wait_min * attempt

    jitter = random.uniform(0, wait_max - wait_min)
    return (wait_min + jitter) * attempt


def check_retry_from_context(ctx: Context) -> CheckRetry | None:
    return ctx.value(CHECK_RETRY_KEY)


def context_with_check_retry(ctx: Context, check_retry: CheckRetry) -> Context:
    return ctx.with_value(CHECK_RETRY_KEY, check_retry)
