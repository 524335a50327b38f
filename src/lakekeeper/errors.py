"""Error definitions for the Lakekeeper client.

This module defines every exception raised by the client with a
consistent error code, so callers can branch on failures without
matching on messages.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any

import httpx


class ErrorCode(str, Enum):
    """Standardized error codes for all client errors."""

    # Transport errors
    TRANSPORT_ERROR = "TRANSPORT_ERROR"
    CONTEXT_CANCELLED = "CONTEXT_CANCELLED"
    DEADLINE_EXCEEDED = "DEADLINE_EXCEEDED"

    # Server errors
    API_ERROR = "API_ERROR"

    # Payload errors
    DECODE_ERROR = "DECODE_ERROR"
    UNKNOWN_VARIANT = "UNKNOWN_VARIANT"
    INVALID_PAYLOAD = "INVALID_PAYLOAD"

    # Caller errors
    USAGE_ERROR = "USAGE_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"


class LakekeeperError(Exception):
    """Base exception for all client errors.

    Attributes:
        code: Standardized error code.
        message: Human-readable error message.
        details: Additional error details.
        retryable: Whether the operation can be retried.
        response: The raw HTTP response, when one was received.
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: dict[str, Any] | None = None,
        retryable: bool = False,
        response: httpx.Response | None = None,
    ) -> None:
        """Initialize the client error."""
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable
        self.response = response

    def to_dict(self) -> dict[str, Any]:
        """Convert error to a dictionary."""
        return {
            "error": {
                "code": self.code.value,
                "message": self.message,
                "details": self.details if self.details else None,
                "retryable": self.retryable,
            }
        }


class TransportError(LakekeeperError):
    """The request could not be sent or its response could not be read."""

    def __init__(
        self,
        message: str = "Failed to send request",
        details: dict[str, Any] | None = None,
        code: ErrorCode = ErrorCode.TRANSPORT_ERROR,
    ) -> None:
        """Initialize transport error."""
        super().__init__(
            code=code,
            message=message,
            details=details,
            retryable=True,
        )


class ContextCancelledError(TransportError):
    """The request context was cancelled."""

    def __init__(self, message: str = "context cancelled") -> None:
        """Initialize context cancelled error."""
        super().__init__(message=message, code=ErrorCode.CONTEXT_CANCELLED)
        self.retryable = False


class ContextDeadlineExceededError(TransportError):
    """The request context deadline passed."""

    def __init__(self, message: str = "context deadline exceeded") -> None:
        """Initialize deadline exceeded error."""
        super().__init__(message=message, code=ErrorCode.DEADLINE_EXCEEDED)
        self.retryable = False


class ApiError(LakekeeperError):
    """The server answered with a non-success HTTP status.

    Attributes:
        status_code: HTTP status of the response.
        error_type: Server-supplied error type, e.g. ``CatalogAlreadyBootstrapped``.
        stack: Server-supplied stack lines, if any.
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        error_type: str | None = None,
        stack: list[str] | None = None,
        response: httpx.Response | None = None,
    ) -> None:
        """Initialize API error."""
        details: dict[str, Any] = {"status_code": status_code}
        if error_type:
            details["type"] = error_type
        super().__init__(
            code=ErrorCode.API_ERROR,
            message=message,
            details=details,
            retryable=status_code == 429 or status_code >= 500,
            response=response,
        )
        self.status_code = status_code
        self.error_type = error_type
        self.stack = stack or []

    @property
    def type(self) -> str:
        """Server error type, or ``Unknown`` when the body carried none."""
        return self.error_type or "Unknown"

    def __str__(self) -> str:
        return (
            f"api error, code={self.status_code} message={self.message} "
            f"type={self.type}"
        )

    @classmethod
    def from_response(cls, response: httpx.Response) -> ApiError:
        """Build an API error from a failed response.

        The body is expected to be ``{"error": {code, message, type, stack}}``;
        a flat ``{code, message, type}`` object is accepted too, and any
        other body becomes the message verbatim.

        Args:
            response: A response whose body has already been read.

        Returns:
            The classified error.
        """
        text = response.text
        try:
            body = json.loads(text) if text else None
        except ValueError:
            body = None

        if isinstance(body, dict):
            envelope = body.get("error") if isinstance(body.get("error"), dict) else body
            message = envelope.get("message") or response.reason_phrase
            stack = envelope.get("stack")
            return cls(
                status_code=response.status_code,
                message=str(message),
                error_type=envelope.get("type"),
                stack=stack if isinstance(stack, list) else None,
                response=response,
            )

        return cls(
            status_code=response.status_code,
            message=text or response.reason_phrase,
            response=response,
        )


class DecodeError(LakekeeperError):
    """A response body could not be decoded."""

    def __init__(
        self,
        message: str = "Failed to decode response",
        details: dict[str, Any] | None = None,
        response: httpx.Response | None = None,
        code: ErrorCode = ErrorCode.DECODE_ERROR,
    ) -> None:
        """Initialize decode error."""
        super().__init__(
            code=code,
            message=message,
            details=details,
            retryable=False,
            response=response,
        )


class UnknownVariantError(DecodeError):
    """A tagged payload carried a discriminator no variant is registered for."""

    def __init__(self, family: str, discriminator: tuple[str | None, ...]) -> None:
        """Initialize unknown variant error.

        Args:
            family: The sum type being decoded, e.g. ``storage profile``.
            discriminator: The discriminator values found in the payload.
        """
        shown = " / ".join(str(part) for part in discriminator)
        super().__init__(
            message=f"unsupported {family} type: {shown}",
            details={"family": family, "discriminator": list(discriminator)},
            code=ErrorCode.UNKNOWN_VARIANT,
        )
        self.family = family
        self.discriminator = discriminator


class InvalidPayloadError(DecodeError):
    """A tagged payload is missing required fields or carries invalid ones."""

    def __init__(self, family: str, detail: str) -> None:
        """Initialize invalid payload error."""
        super().__init__(
            message=f"invalid {family} payload: {detail}",
            details={"family": family},
            code=ErrorCode.INVALID_PAYLOAD,
        )
        self.family = family


class UsageError(LakekeeperError):
    """The caller passed missing or inconsistent input."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize usage error."""
        super().__init__(
            code=ErrorCode.USAGE_ERROR,
            message=message,
            details={"field": field} if field else None,
            retryable=False,
        )


class ValidationError(LakekeeperError):
    """A value violates an invariant that must hold before it is sent."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize validation error."""
        super().__init__(
            code=ErrorCode.VALIDATION_ERROR,
            message=message,
            details={"field": field} if field else None,
            retryable=False,
        )
        self.field = field


ALREADY_BOOTSTRAPPED = "CatalogAlreadyBootstrapped"


def _status(err: BaseException | None) -> int | None:
    if isinstance(err, ApiError):
        return err.status_code
    return None


def is_not_found(err: BaseException | None) -> bool:
    """Report whether ``err`` is an API error with HTTP status 404."""
    return _status(err) == 404


def is_conflict(err: BaseException | None) -> bool:
    """Report whether ``err`` is an API error with HTTP status 409."""
    return _status(err) == 409


def is_auth_error(err: BaseException | None) -> bool:
    """Report whether ``err`` is an API error with HTTP status 401 or 403."""
    return _status(err) in (401, 403)


def is_already_bootstrapped(err: BaseException | None) -> bool:
    """Report whether the server refused a bootstrap because it already ran."""
    return isinstance(err, ApiError) and err.error_type == ALREADY_BOOTSTRAPPED
