"""Minimal custom runtime loop built on the runtime API client.

Set ``_HANDLER`` to ``module.function`` to run your own handler; by default
each invocation payload is echoed back.
"""

from __future__ import annotations

import importlib
import json
import os
from typing import Callable

from lambda_runtime_client import (
    InvocationError,
    InvocationRequest,
    MissingMetadata,
    NextInvocationFailed,
    RuntimeClient,
)

Handler = Callable[[InvocationRequest], bytes]


def echo(request: InvocationRequest) -> bytes:
    event = json.loads(request.content or b"{}")
    return json.dumps({"echo": event, "remaining_ms": request.remaining_time_ms()}).encode("utf-8")


def load_handler(spec: str | None) -> Handler:
    if not spec:
        return echo
    module_name, _, attr = spec.rpartition(".")
    module = importlib.import_module(module_name)
    return getattr(module, attr)


def main() -> None:
    client = RuntimeClient.from_env()

    try:
        handler = load_handler(os.getenv("_HANDLER"))
    except Exception as exc:
        error = InvocationError.from_exception(exc)
        client.report_init_error(error.error_payload, error.error_type)
        client.close()
        raise

    while True:
        try:
            request = client.poll_next_invocation()
        except (NextInvocationFailed, MissingMetadata) as exc:
            print(f"→ Poll failed, exiting: {exc}")
            break

        try:
            payload = handler(request)
        except Exception as exc:
            client.report_invocation_error(InvocationError.from_exception(exc, request_id=request.id))
            continue
        client.report_success(request.id, payload)

    client.close()


if __name__ == "__main__":
    main()
