import logging

from lambda_runtime_client.logger import LOGGER_NAME, BoundLogger, create_logger, level_from_env


class RecordingSink:
    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

    def debug(self, msg, *args) -> None:
        self.messages.append(("debug", msg % args))

    def warn(self, msg, *args) -> None:
        self.messages.append(("warn", msg % args))


def test_level_filters_messages() -> None:
    sink = RecordingSink()
    logger = BoundLogger(sink, level="warn")
    logger.debug("hidden %d", 1)
    logger.warn("shown %d", 2)
    assert sink.messages == [("warn", "shown 2")]


def test_child_of_duck_typed_sink_shares_sink_and_level() -> None:
    sink = RecordingSink()
    child = BoundLogger(sink, level="debug").child("http")
    child.debug("GET %s", "/next")
    assert child.level == "debug"
    assert sink.messages == [("debug", "GET /next")]


def test_level_from_env() -> None:
    assert level_from_env({"AWS_LAMBDA_RUNTIME_CLIENT_LOG_LEVEL": "DEBUG"}) == "debug"
    assert level_from_env({"AWS_LAMBDA_RUNTIME_CLIENT_LOG_LEVEL": "warning"}) == "warn"
    assert level_from_env({"AWS_LAMBDA_RUNTIME_CLIENT_LOG_LEVEL": "loud"}) == "info"
    assert level_from_env({}) == "info"


def test_default_logger_follows_configured_level() -> None:
    BoundLogger(level="error")
    assert logging.getLogger(LOGGER_NAME).level == logging.ERROR
    BoundLogger(level="debug")
    assert logging.getLogger(LOGGER_NAME).level == logging.DEBUG


def test_create_logger_reuses_bound_logger() -> None:
    logger = BoundLogger(RecordingSink(), level="error")
    assert create_logger(logger=logger) is logger
    assert create_logger(logger=RecordingSink(), level="debug").level == "debug"


def test_broken_sink_does_not_raise() -> None:
    class Broken:
        def log(self, *args, **kwargs) -> None:
            raise RuntimeError("sink down")

    BoundLogger(Broken(), level="debug").error("still fine")
