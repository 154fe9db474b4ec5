"""Invocation records exchanged with the runtime API."""

from __future__ import annotations

import json
import time
import traceback
from dataclasses import dataclass

XRAY_ERROR_CAUSE_MAX_HEADER_SIZE = 1024 * 1024


@dataclass(frozen=True)
class InvocationRequest:
    """One unit of work handed out by ``/runtime/invocation/next``."""

    id: str
    invoked_function_arn: str
    deadline_epoch_ms: int = 0
    trace_id: str | None = None
    client_context: str | None = None
    cognito_identity: str | None = None
    content: bytes = b""

    def remaining_time_ms(self, now_ms: int | None = None) -> int:
        """Milliseconds left before the deadline; ``0`` once passed or when unknown."""
        if not self.deadline_epoch_ms:
            return 0
        if now_ms is None:
            now_ms = int(time.time() * 1000)
        return max(self.deadline_epoch_ms - now_ms, 0)


@dataclass(frozen=True)
class InvocationError:
    """A failure report for an invocation, or for init/restore when ``request_id`` is None."""

    error_payload: bytes
    request_id: str | None = None
    error_type: str | None = None
    error_cause: str | None = None

    @property
    def sendable_error_cause(self) -> str | None:
        """The X-Ray cause if it fits in a header, otherwise None."""
        if self.error_cause is None:
            return None
        if len(self.error_cause.encode("utf-8")) < XRAY_ERROR_CAUSE_MAX_HEADER_SIZE:
            return self.error_cause
        return None

    @classmethod
    def from_exception(cls, exc: BaseException, request_id: str | None = None) -> "InvocationError":
        error_type = type(exc).__name__
        stack = traceback.format_list(traceback.extract_tb(exc.__traceback__))
        document = {
            "errorMessage": str(exc),
            "errorType": error_type,
            "stackTrace": [frame.rstrip("\n") for frame in stack],
        }
        return cls(
            error_payload=json.dumps(document).encode("utf-8"),
            request_id=request_id,
            error_type=error_type,
        )


__all__ = ["InvocationError", "InvocationRequest", "XRAY_ERROR_CAUSE_MAX_HEADER_SIZE"]
