"""Public surface for the Lambda Runtime API client."""

from .client import ClientOptions, RuntimeClient, parse_endpoint
from .errors import (
    InvalidEndpoint,
    MissingMetadata,
    NextInvocationFailed,
    ReportFailed,
    RuntimeClientError,
    TransportError,
)
from .metadata import extract_invocation_request
from .transport import HttpTransport, Transport, TransportResponse
from .types import InvocationError, InvocationRequest
from .user_agent import default_user_agent
from .version import __version__

__all__ = [
    "__version__",
    "ClientOptions",
    "HttpTransport",
    "InvalidEndpoint",
    "InvocationError",
    "InvocationRequest",
    "MissingMetadata",
    "NextInvocationFailed",
    "ReportFailed",
    "RuntimeClient",
    "RuntimeClientError",
    "Transport",
    "TransportError",
    "TransportResponse",
    "default_user_agent",
    "extract_invocation_request",
    "parse_endpoint",
]
