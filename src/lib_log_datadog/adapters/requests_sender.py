"""HTTP adapter posting event payloads with :mod:`requests`.

Purpose
-------
Implement :class:`HttpSenderPort` on top of a pooled :class:`requests.Session`
so every worker thread reuses keep-alive connections to the Datadog API.

Contents
--------
* :class:`RequestsSender` - concrete sender used by default.

System Role
-----------
The only component that touches the network. Transport failures surface as
:class:`requests.RequestException` and are absorbed by the delivery use case.
"""

from __future__ import annotations

import logging
import threading

import requests

from lib_log_datadog.application.ports.http import HttpSenderPort
from lib_log_datadog.domain.request import RequestOptions
from lib_log_datadog.domain.response import HttpResponse

LOGGER = logging.getLogger(__name__)

_CHUNK_SIZE = 8192


class RequestsSender(HttpSenderPort):
    """Send POST requests through a shared :class:`requests.Session`.

    ``requests.Session`` is not documented as thread-safe, so each worker
    thread lazily receives its own session.
    """

    def __init__(self, *, session_factory: type[requests.Session] | None = None, user_agent: str | None = None) -> None:
        self._session_factory = session_factory or requests.Session
        self._user_agent = user_agent
        self._local = threading.local()
        self._sessions: list[requests.Session] = []
        self._lock = threading.Lock()

    def post(self, request: RequestOptions, body: bytes, *, timeout: float | None = None) -> HttpResponse:
        """POST ``body`` to ``request.url`` and accumulate the streamed response."""
        headers = dict(request.headers)
        if self._user_agent:
            headers["User-Agent"] = self._user_agent
        session = self._session()
        with session.request(
            request.method,
            request.url,
            data=body,
            headers=headers,
            timeout=timeout,
            stream=True,
        ) as response:
            chunks: list[bytes] = []
            for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
                if chunk:
                    chunks.append(chunk)
            text = _decode(b"".join(chunks), response.encoding)
            LOGGER.debug("Datadog responded with HTTP %s (%d bytes)", response.status_code, len(text))
            return HttpResponse(status_code=response.status_code, text=text, headers=dict(response.headers))

    def close(self) -> None:
        """Close every session opened by worker threads."""
        with self._lock:
            sessions, self._sessions = self._sessions, []
        for session in sessions:
            session.close()
        self._local = threading.local()

    def _session(self) -> requests.Session:
        session = getattr(self._local, "session", None)
        if session is None:
            session = self._session_factory()
            self._local.session = session
            with self._lock:
                self._sessions.append(session)
        return session


def _decode(content: bytes, encoding: str | None) -> str:
    try:
        return content.decode(encoding or "utf-8", errors="replace")
    except LookupError:
        LOGGER.debug("Unknown response charset %r; decoding as utf-8", encoding)
        return content.decode("utf-8", errors="replace")


__all__ = ["RequestsSender"]
