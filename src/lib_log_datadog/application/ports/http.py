"""Port describing the HTTP client used to reach the events endpoint."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lib_log_datadog.domain.request import RequestOptions
from lib_log_datadog.domain.response import HttpResponse


@runtime_checkable
class HttpSenderPort(Protocol):
    """Issue one POST and return the fully accumulated response."""

    def post(self, request: RequestOptions, body: bytes, *, timeout: float | None = None) -> HttpResponse:
        """Send ``body`` according to ``request``; raise on transport failure."""

    def close(self) -> None:
        """Release pooled connections (if any)."""


__all__ = ["HttpSenderPort"]
