"""Python client for the Lakekeeper management API."""

from lakekeeper.auth import (
    AuthSource,
    ClientCredentialsTokenSource,
    OAuthTokenSource,
    StaticTokenSource,
    Token,
)
from lakekeeper.client import Client, Request, management_url, new_auth_source_client, new_client
from lakekeeper.client_options import (
    with_custom_backoff,
    with_custom_retry,
    with_custom_retry_max,
    with_custom_retry_wait_min_max,
    with_error_handler,
    with_http_client,
    with_initial_bootstrap_enabled,
    with_request_options,
    with_user_agent,
    without_retries,
)
from lakekeeper.config import LakekeeperConfig, new_client_from_config
from lakekeeper.context import Context, background, with_cancel, with_timeout
from lakekeeper.errors import (
    ApiError,
    ContextCancelledError,
    ContextDeadlineExceededError,
    DecodeError,
    ErrorCode,
    InvalidPayloadError,
    LakekeeperError,
    TransportError,
    UnknownVariantError,
    UsageError,
    ValidationError,
    is_already_bootstrapped,
    is_auth_error,
    is_conflict,
    is_not_found,
)
from lakekeeper.request_options import (
    with_context,
    with_header,
    with_headers,
    with_project,
    with_query_params,
    with_request_retry,
)
from lakekeeper.retry import default_check_retry, linear_jitter_backoff

__version__ = "0.1.0"

__all__ = [
    # Client
    "Client",
    "Request",
    "management_url",
    "new_auth_source_client",
    "new_client",
    # Configuration
    "LakekeeperConfig",
    "new_client_from_config",
    # Authentication
    "AuthSource",
    "ClientCredentialsTokenSource",
    "OAuthTokenSource",
    "StaticTokenSource",
    "Token",
    # Context
    "Context",
    "background",
    "with_cancel",
    "with_timeout",
    # Client options
    "with_custom_backoff",
    "with_custom_retry",
    "with_custom_retry_max",
    "with_custom_retry_wait_min_max",
    "with_error_handler",
    "with_http_client",
    "with_initial_bootstrap_enabled",
    "with_request_options",
    "with_user_agent",
    "without_retries",
    # Request options
    "with_context",
    "with_header",
    "with_headers",
    "with_project",
    "with_query_params",
    "with_request_retry",
    # Retry
    "default_check_retry",
    "linear_jitter_backoff",
    # Errors
    "ApiError",
    "ContextCancelledError",
    "ContextDeadlineExceededError",
    "DecodeError",
    "ErrorCode",
    "InvalidPayloadError",
    "LakekeeperError",
    "TransportError",
    "UnknownVariantError",
    "UsageError",
    "ValidationError",
    "is_already_bootstrapped",
    "is_auth_error",
    "is_conflict",
    "is_not_found",
]
