"""Exceptions raised by the Lambda Runtime API client."""

from __future__ import annotations

from typing import Any


class RuntimeClientError(Exception):
    """Base error for all client failures."""

    def __init__(self, message: str, *, context: Any | None = None) -> None:
        super().__init__(message)
        self.context = context


class InvalidEndpoint(RuntimeClientError):
    """Raised when the runtime API address is not a usable ``host:port``."""


class MissingMetadata(RuntimeClientError):
    """Raised when a next-invocation response lacks a required header."""

    def __init__(self, field: str, *, context: Any | None = None) -> None:
        super().__init__(f"{field} absent from next invocation response", context=context)
        self.field = field


class TransportError(RuntimeClientError):
    """Raised when the HTTP exchange itself fails (refused, timed out, malformed)."""


class NextInvocationFailed(RuntimeClientError):
    """Raised when polling for the next invocation does not yield one."""

    def __init__(
        self,
        endpoint: str,
        *,
        status_code: int | None = None,
        context: Any | None = None,
    ) -> None:
        if status_code is None:
            message = f"Failed to get next invocation from {endpoint}"
        else:
            message = f"Failed to get next invocation from {endpoint}: status {status_code}"
        super().__init__(message, context=context)
        self.endpoint = endpoint
        self.status_code = status_code


class ReportFailed(RuntimeClientError):
    """Raised when the runtime API answers with an unexpected status code."""

    def __init__(self, endpoint: str, status_code: int, *, context: Any | None = None) -> None:
        super().__init__(f"{endpoint} Response code: '{status_code}'", context=context)
        self.endpoint = endpoint
        self.status_code = status_code


__all__ = [
    "InvalidEndpoint",
    "MissingMetadata",
    "NextInvocationFailed",
    "ReportFailed",
    "RuntimeClientError",
    "TransportError",
]
