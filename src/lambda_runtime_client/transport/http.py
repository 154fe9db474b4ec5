"""HTTP transport built on top of httpx."""

from __future__ import annotations

from typing import Mapping

import httpx

from ..errors import TransportError
from ..logger import BoundLogger, create_logger
from .base import TransportResponse


class HttpTransport:
    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 30.0,
        client: httpx.Client | None = None,
        logger: BoundLogger | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._client = client or httpx.Client(timeout=httpx.Timeout(timeout))
        self._owns_client = client is None
        self._logger = (logger or create_logger()).child("http")

    @property
    def base_url(self) -> str:
        return self._base_url

    def execute(
        self,
        method: str,
        path: str,
        *,
        headers: Mapping[str, str] | None = None,
        body: bytes | None = None,
        timeout: float | None = None,
    ) -> TransportResponse:
        url = self._base_url + path
        effective_timeout = self._timeout if timeout is None else timeout
        try:
            self._logger.debug("HTTP %s %s bytes=%d", method, url, len(body or b""))
            response = self._client.request(
                method,
                url,
                content=body,
                headers=_encode_headers(headers),
                timeout=httpx.Timeout(effective_timeout),
            )
            content = response.content
            self._logger.debug(
                "HTTP <- %s status=%s bytes=%d",
                url,
                response.status_code,
                len(content),
            )
            return TransportResponse(
                status=response.status_code,
                body=content,
                headers=list(response.headers.multi_items()),
            )
        except httpx.TimeoutException as exc:
            raise TransportError(
                f"HTTP {method} {url} timed out after {effective_timeout}s", context=url
            ) from exc
        except httpx.RequestError as exc:
            raise TransportError(f"Cannot reach {url}: {exc}", context=url) from exc

    def close(self) -> None:
        if self._owns_client:
            self._client.close()


def _encode_headers(headers: Mapping[str, str] | None) -> dict[str, bytes]:
    # httpx only accepts ASCII for str values; error causes may carry any text
    return {name: value.encode("utf-8") for name, value in (headers or {}).items()}


__all__ = ["HttpTransport"]
