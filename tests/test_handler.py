from __future__ import annotations

import json
import logging
import threading
from typing import Any, Iterator

import pytest

from lib_log_datadog import DatadogHandler, DatadogTransport
from lib_log_datadog.domain.request import RequestOptions
from lib_log_datadog.domain.response import HttpResponse
from lib_log_datadog.handler import severity_for_level


class _FakeSender:
    def __init__(self) -> None:
        self.payloads: list[dict[str, Any]] = []
        self.closed = False
        self._lock = threading.Lock()

    def post(self, request: RequestOptions, body: bytes, *, timeout: float | None = None) -> HttpResponse:
        with self._lock:
            self.payloads.append(json.loads(body.decode("utf-8")))
        return HttpResponse(status_code=202, text="{}")

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def sender() -> _FakeSender:
    return _FakeSender()


@pytest.fixture
def transport(sender: _FakeSender) -> Iterator[DatadogTransport]:
    transport = DatadogTransport("k", "a", hostname="web01", environment="test", sender=sender)
    yield transport
    transport.close()


@pytest.fixture
def app_logger(transport: DatadogTransport) -> Iterator[logging.Logger]:
    logger = logging.getLogger("tests.handler.app")
    handler = DatadogHandler(transport)
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    yield logger
    logger.removeHandler(handler)
    logger.propagate = True


@pytest.mark.parametrize(
    "levelno, severity",
    [
        (5, "silly"),
        (logging.DEBUG, "debug"),
        (logging.INFO, "info"),
        (logging.WARNING, "warn"),
        (logging.ERROR, "error"),
        (logging.CRITICAL, "severe"),
        (logging.CRITICAL + 10, "severe"),
    ],
)
def test_severity_for_level(levelno: int, severity: str) -> None:
    assert severity_for_level(levelno) == severity


def test_handler_forwards_message_and_extra_data(app_logger: logging.Logger, transport: DatadogTransport, sender: _FakeSender) -> None:
    app_logger.warning("disk %s", "full", extra={"datadog_data": {"free": 0}})
    assert transport.flush(timeout=5)

    assert sender.payloads[0]["alert_type"] == "warning"
    assert sender.payloads[0]["text"] == 'disk full | {"free":0}'


def test_handler_sends_exception_stack(app_logger: logging.Logger, transport: DatadogTransport, sender: _FakeSender) -> None:
    try:
        raise ValueError("bad payload")
    except ValueError:
        app_logger.exception("import failed")
    assert transport.flush(timeout=5)

    text = sender.payloads[0]["text"]
    assert sender.payloads[0]["alert_type"] == "error"
    assert text.startswith("import failed | Traceback (most recent call last):")
    assert text.endswith("ValueError: bad payload")


def test_handler_applies_formatter_without_duplicating_stack(transport: DatadogTransport, sender: _FakeSender) -> None:
    logger = logging.getLogger("tests.handler.formatted")
    handler = DatadogHandler(transport)
    handler.setFormatter(logging.Formatter("[%(name)s] %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    try:
        try:
            raise ValueError("bad payload")
        except ValueError:
            logger.error("import failed", exc_info=True)
        assert transport.flush(timeout=5)
    finally:
        logger.removeHandler(handler)
        logger.propagate = True

    text = sender.payloads[0]["text"]
    assert text.startswith("[tests.handler.formatted] import failed | Traceback (most recent call last):")
    assert text.count("Traceback (most recent call last):") == 1


def test_handler_respects_transport_minimum(sender: _FakeSender) -> None:
    transport = DatadogTransport("k", "a", "error", hostname="h", environment="e", sender=sender)
    logger = logging.getLogger("tests.handler.minimum")
    handler = DatadogHandler(transport, owns_transport=True)
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    try:
        logger.info("skipped")
        logger.error("sent")
        assert transport.flush(timeout=5)
    finally:
        logger.removeHandler(handler)
        handler.close()

    assert [payload["text"] for payload in sender.payloads] == ["sent"]
    assert sender.closed is True


def test_handler_ignores_package_loggers(transport: DatadogTransport, sender: _FakeSender) -> None:
    logger = logging.getLogger("lib_log_datadog.transport")
    handler = DatadogHandler(transport)
    logger.addHandler(handler)
    try:
        logger.error("internal failure")
        assert transport.flush(timeout=5)
    finally:
        logger.removeHandler(handler)

    assert sender.payloads == []


def test_handler_close_leaves_shared_transport_open(transport: DatadogTransport, sender: _FakeSender) -> None:
    handler = DatadogHandler(transport)
    handler.close()

    assert sender.closed is False
