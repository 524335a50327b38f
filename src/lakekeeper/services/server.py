"""Server endpoints: information and bootstrap."""

from __future__ import annotations

import httpx

from lakekeeper.errors import ApiError, is_already_bootstrapped
from lakekeeper.models.server import BootstrapServerOptions, ServerInfo
from lakekeeper.request_options import RequestOptionFunc
from lakekeeper.services._base import BaseService


class ServerService(BaseService):
    """Operations on the Lakekeeper server itself."""

    def info(self, *options: RequestOptionFunc) -> ServerInfo:
        """Return the server configuration and status (``GET /info``)."""
        req = self._client.new_request("GET", "info", None, options)
        info, _ = self._client.do(req, ServerInfo)
        return info

    def bootstrap(
        self,
        opts: BootstrapServerOptions,
        *options: RequestOptionFunc,
    ) -> httpx.Response | None:
        """Bootstrap the server, making the caller its first administrator.

        A server that is already bootstrapped is not an error.

        Args:
            opts: Bootstrap options; terms of use must be accepted.
            *options: Request options.

        Returns:
            The response of the bootstrap request.

        Raises:
            ApiError: If the server refuses the bootstrap for another reason.
        """
        req = self._client.new_request("POST", "bootstrap", opts, options)
        try:
            _, resp = self._client.do(req)
        except ApiError as e:
            if is_already_bootstrapped(e):
                return e.response
            raise
        return resp
