from __future__ import annotations

from typing import Any

from lib_log_datadog.adapters.requests_sender import RequestsSender
from lib_log_datadog.application.ports import HttpSenderPort, ResultListenerPort
from lib_log_datadog.domain.request import RequestOptions
from lib_log_datadog.domain.response import HttpResponse


class _FakeSender(HttpSenderPort):
    def post(self, request: RequestOptions, body: bytes, *, timeout: float | None = None) -> HttpResponse:
        return HttpResponse(status_code=200, text="{}")

    def close(self) -> None:
        return None


class _FakeListener(ResultListenerPort):
    def __init__(self) -> None:
        self.events: list[tuple[str, Any]] = []

    def emit(self, event_name: str, payload: Any) -> None:
        self.events.append((event_name, payload))


def test_requests_sender_satisfies_http_port() -> None:
    sender = RequestsSender()
    try:
        assert isinstance(sender, HttpSenderPort)
    finally:
        sender.close()


def test_fakes_satisfy_ports() -> None:
    assert isinstance(_FakeSender(), HttpSenderPort)
    assert isinstance(_FakeListener(), ResultListenerPort)


def test_duck_typed_listener_is_accepted() -> None:
    class EventEmitter:
        def emit(self, event_name: str, payload: Any) -> None:
            return None

    assert isinstance(EventEmitter(), ResultListenerPort)
    assert not isinstance(object(), ResultListenerPort)
