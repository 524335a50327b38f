"""HTTP client for the Lakekeeper management API.

The client builds requests against ``<base>/management/v1``, injects the
authentication header, retries transient failures and decodes responses.
Service objects (``client.warehouse``, ``client.role``, ...) express every
API operation on top of :meth:`Client.new_request` and :meth:`Client.do`.
"""

from __future__ import annotations

import json
import threading
from collections.abc import Callable, Iterable, Sequence
from typing import Any
from urllib.parse import unquote

import httpx
import structlog
from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from lakekeeper.auth import AuthSource, StaticTokenSource
from lakekeeper.context import Context, background
from lakekeeper.errors import ApiError, DecodeError, TransportError, UsageError
from lakekeeper.models.server import BootstrapServerOptions
from lakekeeper.models.user import UserType
from lakekeeper.request_options import (
    RequestOptionFunc,
    payload_to_dict,
    query_items,
    with_context,
)
from lakekeeper.retry import (
    DEFAULT_RETRY_MAX,
    DEFAULT_RETRY_WAIT_MAX,
    DEFAULT_RETRY_WAIT_MIN,
    Backoff,
    CheckRetry,
    ErrorHandler,
    check_retry_from_context,
    default_check_retry,
    linear_jitter_backoff,
)
from lakekeeper.services import (
    PermissionService,
    ProjectService,
    RoleService,
    ServerService,
    UserService,
    WarehouseService,
)

logger = structlog.get_logger()

API_VERSION_PATH = "/management/v1"
DEFAULT_USER_AGENT = "go-lakekeeper"

SUCCESS_STATUSES = frozenset({200, 201, 202, 204, 304})
BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})

ClientOptionFunc = Callable[["Client"], None]


def management_url(base_url: str | httpx.URL) -> httpx.URL:
    """Return ``base_url`` suffixed with the management API path.

    Trailing slashes are stripped and the suffix is appended only when it
    is not already there, so applying this twice equals applying it once.
    """
    base = str(base_url).rstrip("/")
    if not base.endswith(API_VERSION_PATH):
        base += API_VERSION_PATH
    return httpx.URL(base)


class Request:
    """A request under construction, mutated by request options.

    Attributes:
        method: HTTP method, upper case.
        url: Full request URL, query included.
        path: Decoded path relative to the management API, for display.
        headers: Request headers.
        content: Encoded body, if any.
        ctx: Cancellation context of the request.
    """

    def __init__(
        self,
        method: str,
        url: httpx.URL,
        path: str,
        headers: httpx.Headers,
        content: bytes | None = None,
        ctx: Context | None = None,
    ) -> None:
        self.method = method
        self.url = url
        self.path = path
        self.headers = headers
        self.content = content
        self.ctx = ctx or background()

    @property
    def params(self) -> httpx.QueryParams:
        return self.url.params

    def set_params(self, items: Iterable[tuple[str, str]]) -> None:
        """Merge query parameters, replacing existing values of the same keys."""
        params = self.url.params
        new_items = list(items)
        for key in {key for key, _ in new_items}:
            params = params.remove(key)
        for key, value in new_items:
            params = params.add(key, value)
        self.url = self.url.copy_with(params=params)


class Client:
    """Client of the Lakekeeper management API.

    Safe to share between threads. Construct it with an auth source and the
    server base URL; :func:`new_client` covers the common bearer-token case.

    Usage:
        client = Client(StaticTokenSource(token), "https://lakekeeper.example.com")
        warehouse = client.warehouse.get_warehouse(warehouse_id, project_id)
    """

    def __init__(
        self,
        auth_source: AuthSource,
        base_url: str,
        *options: ClientOptionFunc,
    ) -> None:
        """Initialize the client.

        Args:
            auth_source: Source of the authentication header.
            base_url: Server URL, with or without the management API path.
            *options: Client options, applied in order.

        Raises:
            LakekeeperError: If an option fails, or the initial bootstrap
                (when enabled) fails.
        """
        self._base_url = management_url(base_url)
        self._auth_source = auth_source
        self._auth_lock = threading.Lock()
        self._auth_initialized = False
        self._bootstrap_lock = threading.Lock()
        self._bootstrap_attempted = False

        self._http = httpx.Client()
        self._owns_http = True
        self.user_agent = DEFAULT_USER_AGENT
        self.retry_max = DEFAULT_RETRY_MAX
        self.retry_wait_min = DEFAULT_RETRY_WAIT_MIN
        self.retry_wait_max = DEFAULT_RETRY_WAIT_MAX
        self.check_retry: CheckRetry = default_check_retry
        self.backoff: Backoff = linear_jitter_backoff
        self.error_handler: ErrorHandler | None = None
        self.disable_retries = False
        self.bootstrap_enabled = False
        self._default_request_options: list[RequestOptionFunc] = []

        try:
            for option in options:
                option(self)
        except Exception:
            self.close()
            raise
        self.default_request_options: tuple[RequestOptionFunc, ...] = tuple(
            self._default_request_options
        )

        self.server = ServerService(self)
        self.project = ProjectService(self)
        self.user = UserService(self)
        self.role = RoleService(self)
        self.warehouse = WarehouseService(self)
        self.permission = PermissionService(self)

        if self.bootstrap_enabled:
            try:
                self.ensure_bootstrapped()
            except Exception:
                self.close()
                raise

    @property
    def base_url(self) -> httpx.URL:
        """Management API base URL. ``httpx.URL`` is immutable."""
        return self._base_url

    @property
    def http_client(self) -> httpx.Client:
        return self._http

    def set_http_client(self, http_client: httpx.Client, owned: bool = False) -> None:
        """Use ``http_client`` for all requests.

        Args:
            http_client: The connection pool to send requests through.
            owned: Whether :meth:`close` should close it too.
        """
        if self._owns_http:
            self._http.close()
        self._http = http_client
        self._owns_http = owned

    def add_default_request_options(self, *options: RequestOptionFunc) -> None:
        self._default_request_options.extend(options)

    def close(self) -> None:
        """Close the auth source, and the connection pool if the client owns it."""
        self._auth_source.close()
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> Client:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def new_request(
        self,
        method: str,
        path: str,
        payload: Any = None,
        options: Sequence[RequestOptionFunc] = (),
    ) -> Request:
        """Build a request against the management API.

        Write methods (POST, PUT, PATCH) send the payload as a JSON body;
        other methods encode it as query parameters. Default request
        options run first, then ``options``; later options win.

        Args:
            method: HTTP method.
            path: Path relative to the management API; already-escaped
                segments are kept as they are.
            payload: Body or query model, dict, or None.
            options: Per-request options.

        Returns:
            The request, ready for :meth:`do`.

        Raises:
            ValidationError: If the payload violates one of its invariants.
            UsageError: If the payload type is not supported.
        """
        method = method.upper()
        relative = path.lstrip("/")
        url = httpx.URL(f"{self._base_url}/{relative}")

        headers = httpx.Headers(
            {
                "Accept": "application/json",
                "User-Agent": self.user_agent,
            }
        )

        content = None
        if payload is not None:
            data = payload_to_dict(payload)
            if method in BODY_METHODS:
                content = json.dumps(data).encode()
                headers["Content-Type"] = "application/json"
            else:
                url = url.copy_with(params=query_items(data))

        request = Request(
            method=method,
            url=url,
            path=unquote(relative),
            headers=headers,
            content=content,
        )

        for option in (*self.default_request_options, *options):
            option(request)

        return request

    def do(self, request: Request, result: Any = None) -> tuple[Any, httpx.Response]:
        """Send a request, retrying transient failures, and decode the response.

        Args:
            request: Request built by :meth:`new_request`.
            result: What to decode a successful body into: a pydantic model
                class, a ``TypeAdapter``, or a writable byte sink. None
                discards the body.

        Returns:
            The decoded value (None unless ``result`` is a model or
            adapter) and the consumed response.

        Raises:
            ApiError: If the server answers with a non-success status.
            TransportError: If the request can't be sent or the context ends.
            DecodeError: If the body can't be decoded into ``result``.
        """
        ctx = request.ctx
        self._init_auth(ctx)

        key, value = self._auth_source.header(ctx)
        if key not in request.headers:
            request.headers[key] = value

        response = self._send_with_retry(request)

        try:
            if response.status_code not in SUCCESS_STATUSES:
                raise ApiError.from_response(response)
            if result is None:
                return None, response
            if isinstance(result, TypeAdapter) or (
                isinstance(result, type) and issubclass(result, BaseModel)
            ):
                return self._decode(response, result), response
            if hasattr(result, "write"):
                result.write(response.content)
                return None, response
            raise UsageError(f"unsupported result type: {type(result).__name__}")
        finally:
            response.close()

    def _send_with_retry(self, request: Request) -> httpx.Response:
        ctx = request.ctx
        check_retry = check_retry_from_context(ctx) or self.check_retry
        retry_max = 0 if self.disable_retries else self.retry_max

        attempt = 0
        while True:
            ctx.raise_if_done()
            attempt += 1

            response: httpx.Response | None = None
            exc: Exception | None = None
            try:
                response = self._send(request)
            except httpx.HTTPError as e:
                exc = e

            logger.debug(
                "lakekeeper_request_sent",
                method=request.method,
                path=request.path,
                attempt=attempt,
                status=response.status_code if response is not None else None,
            )

            try:
                should_retry = check_retry(ctx, response, exc)
            except Exception:
                if response is not None:
                    response.close()
                raise

            if not should_retry:
                break

            if attempt > retry_max:
                logger.debug(
                    "lakekeeper_retries_exhausted",
                    method=request.method,
                    path=request.path,
                    attempts=attempt,
                )
                if self.error_handler is not None:
                    return self.error_handler(response, exc, attempt)
                break

            wait = self.backoff(self.retry_wait_min, self.retry_wait_max, attempt - 1, response)
            logger.debug(
                "lakekeeper_request_retry",
                method=request.method,
                path=request.path,
                attempt=attempt,
                status=response.status_code if response is not None else None,
                wait_seconds=wait,
            )
            if response is not None:
                response.close()
            ctx.wait(wait)

        if exc is not None:
            ctx_err = ctx.error()
            if ctx_err is not None:
                raise ctx_err from exc
            raise TransportError(f"{request.method} {request.path}: {exc}") from exc

        assert response is not None
        return response

    def _send(self, request: Request) -> httpx.Response:
        remaining = request.ctx.remaining()
        timeout: Any = httpx.USE_CLIENT_DEFAULT if remaining is None else remaining
        http_request = self._http.build_request(
            request.method,
            request.url,
            headers=request.headers,
            content=request.content,
            timeout=timeout,
        )
        return self._http.send(http_request)

    @staticmethod
    def _decode(response: httpx.Response, result: Any) -> Any:
        if not response.content:
            raise DecodeError("empty response body", response=response)
        try:
            if isinstance(result, TypeAdapter):
                return result.validate_json(response.content)
            return result.model_validate_json(response.content)
        except DecodeError as e:
            if e.response is None:
                e.response = response
            raise
        except PydanticValidationError as e:
            raise DecodeError(f"could not decode response: {e}", response=response) from e

    def _init_auth(self, ctx: Context) -> None:
        if self._auth_initialized:
            return
        with self._auth_lock:
            if self._auth_initialized:
                return
            self._auth_initialized = True
            self._auth_source.init(ctx, self)

    def ensure_bootstrapped(self, ctx: Context | None = None) -> None:
        """Bootstrap the server unless it already is; runs at most once.

        Reads ``GET /info`` and, when the server is not bootstrapped yet,
        sends ``POST /bootstrap`` accepting the terms of use as an operator
        application. Later calls return immediately, whatever the outcome
        of the first one.
        """
        if self._bootstrap_attempted:
            return
        with self._bootstrap_lock:
            if self._bootstrap_attempted:
                return
            self._bootstrap_attempted = True

            options: list[RequestOptionFunc] = []
            if ctx is not None:
                options.append(with_context(ctx))

            info = self.server.info(*options)
            if info.bootstrapped:
                logger.debug("lakekeeper_bootstrap_skipped", server_id=info.server_id)
                return

            self.server.bootstrap(
                BootstrapServerOptions(
                    accept_terms_of_use=True,
                    is_operator=True,
                    user_type=UserType.APPLICATION,
                ),
                *options,
            )
            logger.debug("lakekeeper_bootstrap_done", server_id=info.server_id)


def new_client(token: str, base_url: str, *options: ClientOptionFunc) -> Client:
    """Return a client authenticating with a static bearer token."""
    return Client(StaticTokenSource(token), base_url, *options)


def new_auth_source_client(
    auth_source: AuthSource, base_url: str, *options: ClientOptionFunc
) -> Client:
    """Return a client authenticating through ``auth_source``."""
    return Client(auth_source, base_url, *options)
