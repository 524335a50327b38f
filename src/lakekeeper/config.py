"""Environment-driven configuration of the Lakekeeper client."""

from __future__ import annotations

import os
import ssl
from dataclasses import dataclass, field
from typing import Any

import httpx
import structlog

from lakekeeper.auth import ClientCredentialsTokenSource, OAuthTokenSource
from lakekeeper.client import DEFAULT_USER_AGENT, Client, ClientOptionFunc
from lakekeeper.client_options import (
    with_initial_bootstrap_enabled,
    with_request_options,
    with_user_agent,
)
from lakekeeper.errors import UsageError
from lakekeeper.request_options import with_headers

logger = structlog.get_logger()

DEFAULT_TIMEOUT_SECONDS = 30.0

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in _TRUE_VALUES


@dataclass
class LakekeeperConfig:
    """Connection settings of a Lakekeeper client.

    Attributes:
        base_url: Lakekeeper server URL.
        auth_url: OAuth2 token endpoint used for the client-credentials grant.
        client_id: OAuth2 client id.
        client_secret: OAuth2 client secret.
        scopes: OAuth2 scopes to request.
        ca_cert_file: CA bundle (path or PEM text) trusted for TLS.
        insecure: Skip TLS certificate verification.
        timeout_seconds: Timeout of each HTTP request.
        user_agent: User agent sent with every request.
        initial_bootstrap: Bootstrap the server when the client is created.
        headers: Extra headers sent with every request.
        early_auth_fail: Call the server once at creation so bad credentials
            fail immediately.
    """

    base_url: str
    auth_url: str = ""
    client_id: str = ""
    client_secret: str = ""
    scopes: list[str] = field(default_factory=list)
    ca_cert_file: str | None = None
    insecure: bool = False
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    user_agent: str = DEFAULT_USER_AGENT
    initial_bootstrap: bool = False
    headers: dict[str, str] = field(default_factory=dict)
    early_auth_fail: bool = False

    @classmethod
    def from_env(cls) -> LakekeeperConfig:
        """Load the configuration from ``LAKEKEEPER_*`` environment variables."""
        scope = os.getenv("LAKEKEEPER_SCOPE", "")
        return cls(
            base_url=os.getenv("LAKEKEEPER_ENDPOINT", ""),
            auth_url=os.getenv("LAKEKEEPER_AUTH_URL", ""),
            client_id=os.getenv("LAKEKEEPER_CLIENT_ID", ""),
            client_secret=os.getenv("LAKEKEEPER_CLIENT_SECRET", ""),
            scopes=scope.replace(",", " ").split(),
            ca_cert_file=os.getenv("LAKEKEEPER_CACERT_FILE") or None,
            insecure=_env_bool("LAKEKEEPER_INSECURE"),
            timeout_seconds=float(
                os.getenv("LAKEKEEPER_CLIENT_TIMEOUT", str(DEFAULT_TIMEOUT_SECONDS))
            ),
            user_agent=os.getenv("LAKEKEEPER_USER_AGENT", DEFAULT_USER_AGENT),
            initial_bootstrap=_env_bool("LAKEKEEPER_INITIAL_BOOTSTRAP"),
        )

    def verify(self) -> Any:
        """Return the ``verify`` argument for ``httpx.Client``."""
        if self.insecure:
            return False
        if not self.ca_cert_file:
            return True
        if self.ca_cert_file.lstrip().startswith("-----BEGIN"):
            return ssl.create_default_context(cadata=self.ca_cert_file)
        return ssl.create_default_context(cafile=self.ca_cert_file)


def new_client_from_config(
    config: LakekeeperConfig,
    *options: ClientOptionFunc,
) -> Client:
    """Create a client authenticating with the OAuth2 client-credentials grant.

    Args:
        config: Connection settings.
        *options: Extra client options, applied after those derived from
            ``config``.

    Returns:
        A ready client.

    Raises:
        UsageError: If the endpoint or the token URL is missing.
        LakekeeperError: If bootstrap or the early credentials check fails.
    """
    if not config.base_url:
        raise UsageError("Lakekeeper endpoint must be set", field="base_url")
    if not config.auth_url:
        raise UsageError("Lakekeeper auth URL must be set", field="auth_url")

    verify = config.verify()
    token_source = ClientCredentialsTokenSource(
        token_url=config.auth_url,
        client_id=config.client_id,
        client_secret=config.client_secret,
        scopes=config.scopes,
        http_client=httpx.Client(verify=verify, timeout=config.timeout_seconds),
        owns_http=True,
    )
    http_client = httpx.Client(verify=verify, timeout=config.timeout_seconds)

    def use_http_client(c: Client) -> None:
        c.set_http_client(http_client, owned=True)

    client_options: list[ClientOptionFunc] = [
        use_http_client,
        with_user_agent(config.user_agent),
    ]
    if config.headers:
        client_options.append(with_request_options(with_headers(config.headers)))
    if config.initial_bootstrap:
        client_options.append(with_initial_bootstrap_enabled())
    client_options.extend(options)

    client = Client(OAuthTokenSource(token_source), config.base_url, *client_options)

    if config.early_auth_fail:
        try:
            client.server.info()
        except Exception:
            client.close()
            raise

    logger.debug("lakekeeper_client_created", base_url=str(client.base_url))
    return client
