# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Failure taxonomy for the autograder client.

This module defines the exception hierarchy raised by entity operations:
- AutograderError: Base exception for all client errors
- RemoteError: Any failure tied to a remote call
- RemoteRejected: The server refused the request (4xx)
- NotFound: The addressed resource does not exist (404)
- RemoteUnavailable: Server failure (5xx) or transport-level failure

No operation retries. Every failure propagates to the caller before any
local state is modified or any event is dispatched.
"""

from typing import Any


class AutograderError(Exception):
    """Base exception for all autograder client errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional error context.
    """

    def __init__(self, message: str, details: dict | None = None):
        """Initialize autograder error.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation with details if available."""
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class RemoteError(AutograderError):
    """Failure reported by, or on the way to, the autograder server.

    Attributes:
        status_code: HTTP status code, None for transport failures.
        response_body: Decoded response body if one was received.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: Any = None,
        details: dict | None = None,
    ):
        self.status_code = status_code
        self.response_body = response_body
        super().__init__(message, details)

    @property
    def status(self) -> int | None:
        """Alias of status_code."""
        return self.status_code

    def __str__(self) -> str:
        """Return string representation with status code."""
        base = self.message
        if self.status_code:
            base = f"[{self.status_code}] {base}"
        if self.details:
            base = f"{base} - Details: {self.details}"
        return base


class RemoteRejected(RemoteError):
    """The server rejected the request (4xx).

    Validation failures carry the per-field messages returned by the
    server in ``details``; permission failures carry ``{"detail": ...}``.
    """


class NotFound(RemoteRejected):
    """The addressed resource does not exist (404).

    Attributes:
        path: The request path that was not found.
    """

    def __init__(
        self,
        message: str,
        path: str | None = None,
        response_body: Any = None,
        details: dict | None = None,
    ):
        self.path = path
        super().__init__(
            message,
            status_code=404,
            response_body=response_body,
            details=details,
        )

    def __str__(self) -> str:
        """Return string representation with the missing path."""
        base = super().__str__()
        if self.path:
            base = f"{base} (path: {self.path})"
        return base


class RemoteUnavailable(RemoteError):
    """The server failed (5xx) or could not be reached at all."""
