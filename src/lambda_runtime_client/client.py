"""Client for the Lambda Runtime API served on ``AWS_LAMBDA_RUNTIME_API``."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping
from urllib.parse import quote

from .errors import InvalidEndpoint, NextInvocationFailed, ReportFailed, TransportError
from .logger import LogLevel, create_logger
from .metadata import extract_invocation_request
from .transport import HttpTransport, Transport, TransportResponse
from .types import InvocationError, InvocationRequest
from .user_agent import default_user_agent

RUNTIME_API_ENV = "AWS_LAMBDA_RUNTIME_API"

API_VERSION = "2018-06-01"
NEXT_INVOCATION_PATH = f"/{API_VERSION}/runtime/invocation/next"
INVOCATION_RESPONSE_PATH_TEMPLATE = f"/{API_VERSION}/runtime/invocation/{{}}/response"
INVOCATION_ERROR_PATH_TEMPLATE = f"/{API_VERSION}/runtime/invocation/{{}}/error"
INIT_ERROR_PATH = f"/{API_VERSION}/runtime/init/error"
RESTORE_NEXT_PATH = f"/{API_VERSION}/runtime/restore/next"
RESTORE_ERROR_PATH = f"/{API_VERSION}/runtime/restore/error"

DEFAULT_CONTENT_TYPE = "application/json"
ERROR_TYPE_HEADER = "Lambda-Runtime-Function-Error-Type"
XRAY_ERROR_CAUSE_HEADER = "Lambda-Runtime-Function-XRay-Error-Cause"

HTTP_OK = 200
HTTP_ACCEPTED = 202

DEFAULT_NEXT_INVOCATION_TIMEOUT = 3600.0
DEFAULT_REQUEST_TIMEOUT = 30.0


@dataclass
class ClientOptions:
    endpoint: str
    transport: Transport | None = None
    user_agent: str | None = None
    next_invocation_timeout: float = DEFAULT_NEXT_INVOCATION_TIMEOUT
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    logger: object | None = None
    log_level: LogLevel | None = None


def parse_endpoint(endpoint: str | None) -> tuple[str, int]:
    """Split ``host:port``; the port must be numeric and in range."""
    if not endpoint:
        raise InvalidEndpoint("Runtime API endpoint is not set", context=endpoint)
    host, sep, port_text = endpoint.strip().rpartition(":")
    if not sep or not host:
        raise InvalidEndpoint(f"Runtime API endpoint {endpoint!r} is not host:port", context=endpoint)
    if host.startswith("[") != host.endswith("]"):
        raise InvalidEndpoint(f"Runtime API host {host!r} has unbalanced brackets", context=endpoint)
    if not port_text.isascii() or not port_text.isdigit():
        raise InvalidEndpoint(f"Runtime API port {port_text!r} is not numeric", context=endpoint)
    port = int(port_text)
    if not 0 < port < 65536:
        raise InvalidEndpoint(f"Runtime API port {port} is out of range", context=endpoint)
    return host, port


class RuntimeClient:
    """Polls for invocations and reports their outcome to the runtime API.

    Calls are blocking and never retried. One invocation is expected to be in
    flight at a time: ``poll_next_invocation`` followed by exactly one of
    ``report_success`` or ``report_invocation_error``.
    """

    def __init__(
        self,
        endpoint: str,
        *,
        transport: Transport | None = None,
        user_agent: str | None = None,
        next_invocation_timeout: float = DEFAULT_NEXT_INVOCATION_TIMEOUT,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        logger: object | None = None,
        log_level: LogLevel | None = None,
    ) -> None:
        options = ClientOptions(
            endpoint=endpoint,
            transport=transport,
            user_agent=user_agent,
            next_invocation_timeout=next_invocation_timeout,
            request_timeout=request_timeout,
            logger=logger,
            log_level=log_level,
        )
        self.host, self.port = parse_endpoint(options.endpoint)
        self.base_url = f"http://{_url_host(self.host)}:{self.port}"
        self.user_agent = options.user_agent or default_user_agent()
        self.next_invocation_timeout = options.next_invocation_timeout
        self.request_timeout = options.request_timeout
        self._logger = create_logger(logger=options.logger, level=options.log_level)
        self._logger.info("Initializing RuntimeClient for %s", self.base_url)
        self._owns_transport = options.transport is None
        self._transport = options.transport or HttpTransport(
            self.base_url, timeout=options.request_timeout, logger=self._logger
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides: Any) -> "RuntimeClient":
        env = os.environ if environ is None else environ
        endpoint = env.get(RUNTIME_API_ENV)
        if not endpoint:
            raise InvalidEndpoint(f"{RUNTIME_API_ENV} is not set")
        return cls(endpoint, **overrides)

    def poll_next_invocation(self) -> InvocationRequest:
        endpoint = self.base_url + NEXT_INVOCATION_PATH
        try:
            response = self._transport.execute(
                "GET",
                NEXT_INVOCATION_PATH,
                headers=self._headers(),
                timeout=self.next_invocation_timeout,
            )
        except TransportError as exc:
            self._logger.error("Next invocation poll failed: %s", exc)
            raise NextInvocationFailed(endpoint, context=exc.context) from exc

        if response.status != HTTP_OK:
            self._logger.error("Next invocation poll returned status=%d", response.status)
            cause = ReportFailed(endpoint, response.status)
            raise NextInvocationFailed(endpoint, status_code=response.status) from cause

        request = extract_invocation_request(response.headers, response.body)
        self._logger.debug(
            "Received invocation id=%s bytes=%d deadline=%d",
            request.id,
            len(request.content),
            request.deadline_epoch_ms,
        )
        return request

    def report_success(self, request_id: str, payload: bytes) -> None:
        path = INVOCATION_RESPONSE_PATH_TEMPLATE.format(_quote_id(request_id))
        response = self._send("POST", path, headers=self._headers(), body=payload)
        self._expect(path, response, HTTP_OK)

    def report_invocation_error(self, error: InvocationError) -> None:
        if not error.request_id:
            raise ValueError("request_id is required to report an invocation error")
        path = INVOCATION_ERROR_PATH_TEMPLATE.format(_quote_id(error.request_id))
        response = self._post_error(path, error)
        self._expect(path, response, HTTP_ACCEPTED)

    def report_init_error(self, error_payload: bytes, error_type: str | None = None) -> None:
        error = InvocationError(error_payload=error_payload, error_type=error_type)
        response = self._post_error(INIT_ERROR_PATH, error)
        self._expect(INIT_ERROR_PATH, response, HTTP_ACCEPTED)

    def poll_restore_next(self) -> None:
        response = self._send("GET", RESTORE_NEXT_PATH, headers=self._headers())
        self._expect(RESTORE_NEXT_PATH, response, HTTP_OK)

    def report_restore_error(self, error_payload: bytes, error_type: str | None = None) -> int:
        """Post a restore failure and hand back the status for the caller to judge."""
        error = InvocationError(error_payload=error_payload, error_type=error_type)
        response = self._post_error(RESTORE_ERROR_PATH, error)
        if response.status != HTTP_ACCEPTED:
            self._logger.warn("Restore error report returned status=%d", response.status)
        return response.status

    def close(self) -> None:
        if self._owns_transport:
            self._transport.close()

    def __enter__(self) -> "RuntimeClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _headers(self, extra: Mapping[str, str] | None = None) -> dict[str, str]:
        headers = {"User-Agent": self.user_agent}
        if extra:
            headers.update(extra)
        return headers

    def _post_error(self, path: str, error: InvocationError) -> TransportResponse:
        extra = {"Content-Type": DEFAULT_CONTENT_TYPE}
        if error.error_type:
            extra[ERROR_TYPE_HEADER] = error.error_type
        cause = error.sendable_error_cause
        if cause is not None:
            extra[XRAY_ERROR_CAUSE_HEADER] = cause
        elif error.error_cause is not None:
            self._logger.debug("Dropping X-Ray error cause over header size limit")
        return self._send("POST", path, headers=self._headers(extra), body=error.error_payload)

    def _send(
        self,
        method: str,
        path: str,
        *,
        headers: Mapping[str, str],
        body: bytes | None = None,
    ) -> TransportResponse:
        try:
            return self._transport.execute(
                method,
                path,
                headers=headers,
                body=body,
                timeout=self.request_timeout,
            )
        except TransportError as exc:
            self._logger.error("%s %s failed: %s", method, path, exc)
            raise TransportError(
                f"{method} {self.base_url}{path} failed: {exc}", context=exc.context
            ) from exc

    def _expect(self, path: str, response: TransportResponse, expected: int) -> None:
        if response.status == expected:
            return
        endpoint = self.base_url + path
        self._logger.warn("%s returned status=%d, expected %d", endpoint, response.status, expected)
        raise ReportFailed(endpoint, response.status, context=response.body)


def _quote_id(request_id: str) -> str:
    return quote(request_id, safe="")


def _url_host(host: str) -> str:
    # bare IPv6 literals need brackets inside a URL
    if ":" in host and not host.startswith("["):
        return f"[{host}]"
    return host


__all__ = ["ClientOptions", "RuntimeClient", "parse_endpoint"]
