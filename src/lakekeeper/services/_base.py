"""Shared plumbing of the service objects."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from lakekeeper.errors import DecodeError, UsageError
from lakekeeper.request_options import RequestOptionFunc, with_project

if TYPE_CHECKING:
    from lakekeeper.client import Client

# Upper bound on pages followed by list operations.
MAX_PAGES = 1000


def path_escape(segment: str) -> str:
    """Escape one path segment, ``/`` included."""
    return quote(segment, safe="")


def require(value: str | None, field: str, what: str) -> str:
    if not value:
        raise UsageError(f"{what} must not be empty", field=field)
    return value


class BaseService:
    """Base class of the services; holds the client they send requests through."""

    def __init__(self, client: Client) -> None:
        self._client = client

    @staticmethod
    def _project_options(
        project_id: str | None,
        options: Sequence[RequestOptionFunc],
    ) -> list[RequestOptionFunc]:
        """Prepend the project header, if any, so explicit options still win."""
        if project_id:
            return [with_project(project_id), *options]
        return list(options)

    def _paginate(
        self,
        path: str,
        opts: Any,
        page_model: type[Any],
        items_field: str,
        options: Sequence[RequestOptionFunc],
    ) -> list[Any]:
        """Follow ``next-page-token`` until the server stops returning one.

        The caller's options are not modified; each page is requested with
        a copy carrying the current token.

        Raises:
            DecodeError: If the server repeats a token or the page limit is hit.
        """
        items: list[Any] = []
        token = opts.page_token
        for _ in range(MAX_PAGES):
            page_opts = opts.model_copy(update={"page_token": token})
            req = self._client.new_request("GET", path, page_opts, options)
            page, _ = self._client.do(req, page_model)
            items.extend(getattr(page, items_field))

            next_token = page.next_page_token
            if not next_token:
                return items
            if next_token == token:
                raise DecodeError(f"pagination of {path} did not advance past token {token}")
            token = next_token

        raise DecodeError(f"pagination of {path} exceeded {MAX_PAGES} pages")
