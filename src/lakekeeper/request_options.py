"""Per-request options.

A request option is a callable receiving the request under construction.
Options run in order (client defaults first), so later options win. An
option may raise to abort the request.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from lakekeeper.context import Context
from lakekeeper.errors import UsageError
from lakekeeper.models._base import WireModel
from lakekeeper.retry import (
    CheckRetry,
    check_retry_from_context,
    context_with_check_retry,
)

if TYPE_CHECKING:
    from lakekeeper.client import Request

HEADER_PROJECT_ID = "x-project-id"

RequestOptionFunc = Callable[["Request"], None]


def payload_to_dict(payload: Any) -> dict[str, Any]:
    """Serialize a request payload to its wire object.

    Raises:
        ValidationError: If the payload violates one of its invariants.
        UsageError: If the payload type is not supported.
    """
    if isinstance(payload, WireModel):
        payload.check_invariants()
        return payload.to_dict()
    if isinstance(payload, BaseModel):
        return payload.model_dump(by_alias=True, exclude_none=True, mode="json")
    if isinstance(payload, dict):
        return payload
    raise UsageError(f"unsupported payload type: {type(payload).__name__}")


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def query_items(data: dict[str, Any]) -> list[tuple[str, str]]:
    """Flatten a wire object into query parameters.

    Unset values are skipped and lists repeat their key once per item.
    """
    items: list[tuple[str, str]] = []
    for key, value in data.items():
        if value is None:
            continue
        values = value if isinstance(value, list | tuple) else [value]
        items.extend((key, _query_value(v)) for v in values)
    return items


def with_header(name: str, value: str) -> RequestOptionFunc:
    """Set a request header, replacing any previous value."""

    def option(req: Request) -> None:
        req.headers[name] = value

    return option


def with_headers(headers: dict[str, str]) -> RequestOptionFunc:
    def option(req: Request) -> None:
        for name, value in headers.items():
            req.headers[name] = value

    return option


def with_project(project_id: str) -> RequestOptionFunc:
    """Select the project the request applies to.

    Without it, the server uses the default project of the caller.
    """
    return with_header(HEADER_PROJECT_ID, project_id)


def with_context(ctx: Context) -> RequestOptionFunc:
    """Run the request under ``ctx``.

    A retry check attached to the previous context of the request is
    carried over to ``ctx``.
    """

    def option(req: Request) -> None:
        new_ctx = ctx
        check_retry = check_retry_from_context(req.ctx)
        if check_retry is not None:
            new_ctx = context_with_check_retry(new_ctx, check_retry)
        req.ctx = new_ctx

    return option


def with_request_retry(check_retry: CheckRetry) -> RequestOptionFunc:
    """Override the retry check of the client for this request only."""

    def option(req: Request) -> None:
        req.ctx = context_with_check_retry(req.ctx, check_retry)

    return option


def with_query_params(params: Any) -> RequestOptionFunc:
    """Add query parameters derived from a model or dict.

    Keys already present in the URL are overwritten. ``None`` does nothing.
    """

    def option(req: Request) -> None:
        if params is None:
            return
        req.set_params(query_items(payload_to_dict(params)))

    return option
