"""Options customizing a new :class:`~lakekeeper.client.Client`.

Each option is a callable applied to the client during construction, in
the order given.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

import httpx

from lakekeeper.errors import UsageError
from lakekeeper.request_options import RequestOptionFunc
from lakekeeper.retry import Backoff, CheckRetry, ErrorHandler

if TYPE_CHECKING:
    from lakekeeper.client import Client

ClientOptionFunc = Callable[["Client"], None]


def with_custom_backoff(backoff: Backoff) -> ClientOptionFunc:
    """Replace the wait computed between retries."""

    def option(c: Client) -> None:
        c.backoff = backoff

    return option


def with_custom_retry(check_retry: CheckRetry) -> ClientOptionFunc:
    """Replace the check deciding whether an attempt is retried."""

    def option(c: Client) -> None:
        c.check_retry = check_retry

    return option


def with_custom_retry_max(retry_max: int) -> ClientOptionFunc:
    def option(c: Client) -> None:
        if retry_max < 0:
            raise UsageError("retry_max must not be negative", field="retry_max")
        c.retry_max = retry_max

    return option


def with_custom_retry_wait_min_max(wait_min: float, wait_max: float) -> ClientOptionFunc:
    """Set the bounds, in seconds, of the wait between retries."""

    def option(c: Client) -> None:
        if wait_min < 0 or wait_max < 0:
            raise UsageError("retry waits must not be negative")
        c.retry_wait_min = wait_min
        c.retry_wait_max = wait_max

    return option


def with_error_handler(handler: ErrorHandler) -> ClientOptionFunc:
    """Decide what a request returns once its retries are exhausted.

    The handler receives the last response (or None), the last send error
    (or None) and the number of attempts. It returns the response to use,
    or raises.
    """

    def option(c: Client) -> None:
        c.error_handler = handler

    return option


def without_retries() -> ClientOptionFunc:
    def option(c: Client) -> None:
        c.disable_retries = True

    return option


def with_request_options(*options: RequestOptionFunc) -> ClientOptionFunc:
    """Apply ``options`` to every request, before per-call options."""

    def option(c: Client) -> None:
        c.add_default_request_options(*options)

    return option


def with_user_agent(user_agent: str) -> ClientOptionFunc:
    def option(c: Client) -> None:
        c.user_agent = user_agent

    return option


def with_http_client(http_client: httpx.Client) -> ClientOptionFunc:
    """Send requests through ``http_client``; the caller keeps ownership."""

    def option(c: Client) -> None:
        c.set_http_client(http_client)

    return option


def with_initial_bootstrap_enabled() -> ClientOptionFunc:
    """Bootstrap the server, if needed, while the client is constructed."""

    def option(c: Client) -> None:
        c.bootstrap_enabled = True

    return option
