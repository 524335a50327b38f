"""Authentication sources for the Lakekeeper client.

An auth source produces the header added to every request. The client
calls :meth:`AuthSource.init` exactly once, before the first request, and
:meth:`AuthSource.header` on every request.
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Protocol

import httpx
import structlog

from lakekeeper.context import Context
from lakekeeper.errors import ApiError, DecodeError, TransportError

if TYPE_CHECKING:
    from lakekeeper.client import Client

logger = structlog.get_logger()

AUTHORIZATION_HEADER = "Authorization"

# Tokens are refreshed this long before they expire.
EXPIRY_DELTA = timedelta(seconds=10)


class AuthSource(ABC):
    """Source of the authentication header of every request."""

    @abstractmethod
    def init(self, ctx: Context, client: Client) -> None:
        """Prepare the source; called once before the first request.

        Sources that need the client to initialize themselves do it here.
        """
        ...

    @abstractmethod
    def header(self, ctx: Context) -> tuple[str, str]:
        """Return the header ``(key, value)`` to set on a request.

        Both parts are non-empty when no error is raised.
        """
        ...

    def close(self) -> None:
        """Release resources held by the source."""
        return None


class StaticTokenSource(AuthSource):
    """Send a fixed bearer token."""

    def __init__(self, token: str) -> None:
        self._token = token

    def init(self, ctx: Context, client: Client) -> None:
        return None

    def header(self, ctx: Context) -> tuple[str, str]:
        return AUTHORIZATION_HEADER, f"Bearer {self._token}"


@dataclass(frozen=True)
class Token:
    """An OAuth2 access token."""

    access_token: str
    token_type: str = "Bearer"
    expiry: datetime | None = None

    def valid(self, now: datetime | None = None) -> bool:
        """Report whether the token is set and not about to expire."""
        if not self.access_token:
            return False
        if self.expiry is None:
            return True
        now = now or datetime.now(UTC)
        return now + EXPIRY_DELTA < self.expiry


class TokenSource(Protocol):
    def token(self) -> Token: ...


class OAuthTokenSource(AuthSource):
    """Adapt any OAuth2 token source to an auth source.

    The header is ``Authorization: <token_type> <access_token>``.
    """

    def __init__(self, token_source: TokenSource) -> None:
        self.token_source = token_source

    def init(self, ctx: Context, client: Client) -> None:
        return None

    def header(self, ctx: Context) -> tuple[str, str]:
        token = self.token_source.token()
        return AUTHORIZATION_HEADER, f"{token.token_type} {token.access_token}"

    def close(self) -> None:
        close = getattr(self.token_source, "close", None)
        if callable(close):
            close()


class ClientCredentialsTokenSource:
    """OAuth2 client-credentials grant with token caching.

    The cached token is reused until shortly before it expires; safe to
    share between threads.
    """

    def __init__(
        self,
        token_url: str,
        client_id: str,
        client_secret: str,
        scopes: list[str] | None = None,
        http_client: httpx.Client | None = None,
        owns_http: bool = False,
    ) -> None:
        """Initialize the token source.

        Args:
            token_url: Token endpoint of the identity provider.
            client_id: OAuth2 client id.
            client_secret: OAuth2 client secret.
            scopes: Scopes to request; none by default.
            http_client: Client used to reach the identity provider.
            owns_http: Whether :meth:`close` closes ``http_client``. A client
                created here is always closed.
        """
        self.token_url = token_url
        self.client_id = client_id
        self.client_secret = client_secret
        self.scopes = scopes or []
        self._http = http_client or httpx.Client()
        self._owns_http = owns_http or http_client is None
        self._lock = threading.Lock()
        self._token: Token | None = None

    def token(self) -> Token:
        """Return a valid token, fetching a new one when needed.

        Raises:
            TransportError: If the identity provider can't be reached.
            ApiError: If the identity provider rejects the request.
            DecodeError: If the token response can't be read.
        """
        with self._lock:
            if self._token is not None and self._token.valid():
                return self._token
            self._token = self._fetch()
            return self._token

    def _fetch(self) -> Token:
        data = {
            "grant_type": "client_credentials",
            "client_id": self.client_id,
            "client_secret": self.client_secret,
        }
        if self.scopes:
            data["scope"] = " ".join(self.scopes)

        try:
            response = self._http.post(
                self.token_url,
                data=data,
                headers={"Accept": "application/json"},
            )
        except httpx.HTTPError as e:
            raise TransportError(f"token request to {self.token_url} failed: {e}") from e

        if response.status_code != 200:
            raise ApiError.from_response(response)

        try:
            payload = response.json()
            access_token = payload["access_token"]
        except (ValueError, KeyError) as e:
            raise DecodeError("could not read token response", response=response) from e

        expiry = None
        expires_in = payload.get("expires_in")
        if expires_in:
            expiry = datetime.now(UTC) + timedelta(seconds=int(expires_in))

        logger.debug("oauth_token_fetched", token_url=self.token_url, expires_in=expires_in)

        return Token(
            access_token=access_token,
            token_type=payload.get("token_type") or "Bearer",
            expiry=expiry,
        )

    def close(self) -> None:
        """Close the connection pool if the source owns it."""
        if self._owns_http:
            self._http.close()
