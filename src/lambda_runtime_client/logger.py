"""Logging for the runtime client, filtered before it reaches the sink."""

from __future__ import annotations

import logging
import os
from typing import Any, Literal, Mapping

LogLevel = Literal["debug", "info", "warn", "error"]

LOG_LEVEL_ENV = "AWS_LAMBDA_RUNTIME_CLIENT_LOG_LEVEL"
LOGGER_NAME = "lambda_runtime_client"

# method name looked up on duck-typed sinks, stdlib level
_LEVELS: dict[LogLevel, tuple[str, int]] = {
    "debug": ("debug", logging.DEBUG),
    "info": ("info", logging.INFO),
    "warn": ("warn", logging.WARNING),
    "error": ("error", logging.ERROR),
}


class BoundLogger:
    """Drops messages below ``level`` and forwards the rest to a sink.

    The sink is a ``logging.Logger`` by default; any object with ``log`` or
    per-level methods (``debug``, ``info``, ``warn``, ``error``) also works,
    so a runtime can route client logs into its own pipeline.
    """

    def __init__(self, sink: Any | None = None, *, level: LogLevel = "info") -> None:
        self._level = level
        self._sink = sink if sink is not None else _default_logger(level)

    @property
    def level(self) -> LogLevel:
        return self._level

    def debug(self, msg: str, *args: Any) -> None:
        self._emit("debug", msg, args)

    def info(self, msg: str, *args: Any) -> None:
        self._emit("info", msg, args)

    def warn(self, msg: str, *args: Any) -> None:
        self._emit("warn", msg, args)

    def error(self, msg: str, *args: Any) -> None:
        self._emit("error", msg, args)

    def child(self, name: str) -> "BoundLogger":
        sink = self._sink.getChild(name) if isinstance(self._sink, logging.Logger) else self._sink
        return BoundLogger(sink, level=self._level)

    def _emit(self, level: LogLevel, msg: str, args: tuple[Any, ...]) -> None:
        if _LEVELS[level][1] < _LEVELS[self._level][1]:
            return
        method_name, stdlib_level = _LEVELS[level]
        try:
            if hasattr(self._sink, "log"):
                self._sink.log(stdlib_level, msg, *args)
                return
            method = getattr(self._sink, method_name, None)
            if method is not None:
                method(msg, *args)
        except Exception:
            # A broken sink must not take down the invocation loop
            pass


def _default_logger(level: LogLevel) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(_LEVELS[level][1])
    return logger


def level_from_env(environ: Mapping[str, str] | None = None, default: LogLevel = "info") -> LogLevel:
    env = os.environ if environ is None else environ
    value = (env.get(LOG_LEVEL_ENV) or "").strip().lower()
    if value == "warning":
        value = "warn"
    if value in _LEVELS:
        return value  # type: ignore[return-value]
    return default


def create_logger(*, logger: Any | None = None, level: LogLevel | None = None) -> BoundLogger:
    """Wrap ``logger``; the level falls back to ``AWS_LAMBDA_RUNTIME_CLIENT_LOG_LEVEL``."""
    if isinstance(logger, BoundLogger):
        return logger
    return BoundLogger(logger, level=level or level_from_env())


__all__ = ["BoundLogger", "LOG_LEVEL_ENV", "LogLevel", "create_logger", "level_from_env"]
