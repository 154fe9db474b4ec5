"""Transport implementations exposed to users."""

from .base import HeaderPairs, Transport, TransportResponse
from .http import HttpTransport

__all__ = [
    "HeaderPairs",
    "HttpTransport",
    "Transport",
    "TransportResponse",
]
