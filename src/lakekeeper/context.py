"""Cancellation and deadline context carried by every request.

A :class:`Context` is shared between the caller and the transport: the
caller may cancel it from any thread, and the transport checks it before
each attempt and while sleeping between retries.
"""

from __future__ import annotations

import threading
import time
from typing import Any

from lakekeeper.errors import ContextCancelledError, ContextDeadlineExceededError


class Context:
    """Thread-safe cancellation signal with an optional deadline and values.

    Values are immutable: :meth:`with_value` returns a child context that
    shares the parent's cancellation signal.
    """

    def __init__(
        self,
        deadline: float | None = None,
        values: dict[Any, Any] | None = None,
        _cancelled: threading.Event | None = None,
    ) -> None:
        self._deadline = deadline
        self._values = dict(values or {})
        self._cancelled = _cancelled or threading.Event()

    @property
    def deadline(self) -> float | None:
        """Monotonic deadline in seconds, or None."""
        return self._deadline

    def cancel(self) -> None:
        """Cancel the context and wake any waiter."""
        self._cancelled.set()

    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def remaining(self) -> float | None:
        """Seconds left before the deadline, or None without a deadline."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def error(self) -> Exception | None:
        """Return the reason the context is done, or None while it is live."""
        if self._cancelled.is_set():
            return ContextCancelledError()
        if self._deadline is not None and time.monotonic() >= self._deadline:
            return ContextDeadlineExceededError()
        return None

    def raise_if_done(self) -> None:
        err = self.error()
        if err is not None:
            raise err

    def wait(self, seconds: float) -> None:
        """Sleep for ``seconds`` unless the context finishes first.

        Raises:
            ContextCancelledError: If the context is cancelled while waiting.
            ContextDeadlineExceededError: If the deadline passes while waiting.
        """
        remaining = self.remaining()
        timeout = seconds if remaining is None else min(seconds, remaining)
        self._cancelled.wait(max(0.0, timeout))
        self.raise_if_done()

    def value(self, key: Any, default: Any = None) -> Any:
        return self._values.get(key, default)

    def with_value(self, key: Any, value: Any) -> Context:
        """Return a child context carrying ``key`` in addition to the parent's values."""
        values = dict(self._values)
        values[key] = value
        return Context(deadline=self._deadline, values=values, _cancelled=self._cancelled)

    def with_timeout(self, seconds: float) -> Context:
        """Return a child context whose deadline is at most ``seconds`` away."""
        deadline = time.monotonic() + seconds
        if self._deadline is not None:
            deadline = min(deadline, self._deadline)
        return Context(deadline=deadline, values=self._values, _cancelled=self._cancelled)


def background() -> Context:
    """Return a fresh context that is never cancelled and has no deadline."""
    return Context()


def with_cancel() -> Context:
    """Return a fresh context that the caller cancels with ``ctx.cancel()``."""
    return Context()


def with_timeout(seconds: float) -> Context:
    """Return a fresh context that expires after ``seconds``."""
    return Context(deadline=time.monotonic() + seconds)
