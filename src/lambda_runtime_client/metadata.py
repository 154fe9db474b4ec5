"""Maps next-invocation response headers onto an ``InvocationRequest``."""

from __future__ import annotations

import re
from typing import Iterable, Mapping, Union

from .errors import MissingMetadata
from .types import InvocationRequest

REQUEST_ID_HEADER = "Lambda-Runtime-Aws-Request-Id"
FUNCTION_ARN_HEADER = "Lambda-Runtime-Invoked-Function-Arn"
DEADLINE_MS_HEADER = "Lambda-Runtime-Deadline-Ms"
TRACE_ID_HEADER = "Lambda-Runtime-Trace-Id"
CLIENT_CONTEXT_HEADER = "Lambda-Runtime-Client-Context"
COGNITO_IDENTITY_HEADER = "Lambda-Runtime-Cognito-Identity"

HeaderSource = Union[Mapping[str, str], Iterable[tuple[str, str]]]

_DEADLINE_PATTERN = re.compile(r"[+-]?[0-9]+")

_FIELDS_BY_HEADER: dict[str, str] = {
    REQUEST_ID_HEADER.lower(): "id",
    FUNCTION_ARN_HEADER.lower(): "invoked_function_arn",
    DEADLINE_MS_HEADER.lower(): "deadline_epoch_ms",
    TRACE_ID_HEADER.lower(): "trace_id",
    CLIENT_CONTEXT_HEADER.lower(): "client_context",
    COGNITO_IDENTITY_HEADER.lower(): "cognito_identity",
}


def extract_invocation_request(headers: HeaderSource, body: bytes | None) -> InvocationRequest:
    """Build an ``InvocationRequest`` from response headers and body.

    Every header is scanned before the required fields are checked, so
    ordering is irrelevant and a repeated header keeps its last value.
    Raises ``MissingMetadata`` when the request id or function ARN is absent.
    """
    values: dict[str, str] = {}
    for name, value in _iter_pairs(headers):
        field = _FIELDS_BY_HEADER.get(name.lower())
        if field is not None:
            values[field] = value

    request_id = values.get("id")
    if request_id is None:
        raise MissingMetadata(REQUEST_ID_HEADER)
    function_arn = values.get("invoked_function_arn")
    if function_arn is None:
        raise MissingMetadata(FUNCTION_ARN_HEADER, context=request_id)

    return InvocationRequest(
        id=request_id,
        invoked_function_arn=function_arn,
        deadline_epoch_ms=parse_deadline(values.get("deadline_epoch_ms")),
        trace_id=values.get("trace_id"),
        client_context=values.get("client_context"),
        cognito_identity=values.get("cognito_identity"),
        content=bytes(body or b""),
    )


def parse_deadline(raw: str | None) -> int:
    """Epoch milliseconds from the deadline header, or 0 when it is not a plain integer."""
    if raw is None or not _DEADLINE_PATTERN.fullmatch(raw):
        return 0
    return int(raw, 10)


def _iter_pairs(headers: HeaderSource) -> Iterable[tuple[str, str]]:
    if isinstance(headers, Mapping):
        return headers.items()
    return headers


__all__ = [
    "CLIENT_CONTEXT_HEADER",
    "COGNITO_IDENTITY_HEADER",
    "DEADLINE_MS_HEADER",
    "FUNCTION_ARN_HEADER",
    "REQUEST_ID_HEADER",
    "TRACE_ID_HEADER",
    "extract_invocation_request",
    "parse_deadline",
]
