"""Common transport abstractions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Protocol, Sequence, runtime_checkable

HeaderPairs = Sequence[tuple[str, str]]


@dataclass
class TransportResponse:
    status: int
    body: bytes = b""
    headers: HeaderPairs = field(default_factory=list)


@runtime_checkable
class Transport(Protocol):
    def execute(
        self,
        method: str,
        path: str,
        *,
        headers: Mapping[str, str] | None = None,
        body: bytes | None = None,
        timeout: float | None = None,
    ) -> TransportResponse: ...

    def close(self) -> None: ...


__all__ = ["HeaderPairs", "Transport", "TransportResponse"]
