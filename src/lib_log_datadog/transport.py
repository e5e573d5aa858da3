"""Datadog events transport for structured log calls.

Purpose
-------
Receive ``(severity, message, data, callback)`` log calls, shape them into
Datadog event payloads, and POST each accepted call to the events API without
blocking the caller.

Contents
--------
* :class:`DatadogTransport` - the adapter host logging integrations talk to.

System Role
-----------
Composition point for the domain values (:mod:`lib_log_datadog.domain`), the
delivery use case, and the HTTP adapter. Configuration decisions are made once
in :meth:`DatadogTransport.__init__`; every :meth:`DatadogTransport.log` call
only reads them.
"""

from __future__ import annotations

import logging
import os
import socket
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import wait as wait_for_futures
from typing import Any, Callable

from .adapters import RequestsSender
from .application.ports import HttpSenderPort, ResultListenerPort
from .application.use_cases import DeliveryRequest, create_deliver_event
from .domain import (
    API_ENDPOINT,
    Credentials,
    DatadogResult,
    EventOptions,
    EventPayload,
    RequestOptions,
    SeverityPolicy,
    classify,
    compose_text,
    default_event_options,
)
from .domain.options import DEFAULT_ENVIRONMENT

LOGGER = logging.getLogger(__name__)

ENVIRONMENT_VAR = "NODE_ENV"


class DatadogTransport:
    """Forward log calls to the Datadog events API.

    Parameters
    ----------
    api_key, application_key:
        Datadog credentials embedded into the request URL.
    minimum_log_level:
        Optional lowest severity to forward. Unknown names are ignored and the
        full severity scale stays active.
    hostname, environment:
        Values used for the default ``host`` field and ``env:`` tag. Resolved
        from the machine hostname and ``NODE_ENV`` when omitted.
    api_endpoint:
        Base API URL; defaults to the public ``datadoghq.com`` endpoint.
    timeout:
        Per-request deadline in seconds. ``None`` keeps requests open until
        the server answers.
    sender:
        :class:`HttpSenderPort` implementation; defaults to :class:`RequestsSender`.
    max_workers:
        Size of the worker pool issuing requests.

    Examples
    --------
    >>> transport = DatadogTransport("key", "app", "error", hostname="web01", environment="test")
    >>> transport.log("info", "ignored") is None
    True
    >>> transport.close()
    """

    name = "Datadog"

    def __init__(
        self,
        api_key: str,
        application_key: str,
        minimum_log_level: str | None = None,
        *,
        hostname: str | None = None,
        environment: str | None = None,
        api_endpoint: str = API_ENDPOINT,
        timeout: float | None = None,
        sender: HttpSenderPort | None = None,
        max_workers: int = 4,
    ) -> None:
        credentials = Credentials(api_key=api_key, application_key=application_key)
        self.request_options = RequestOptions.build(credentials, api_endpoint=api_endpoint)
        self.severity_policy = SeverityPolicy.from_minimum(minimum_log_level)
        self.hostname = hostname if hostname is not None else socket.gethostname()
        self.environment = environment if environment is not None else os.getenv(ENVIRONMENT_VAR) or DEFAULT_ENVIRONMENT
        self.timeout = timeout
        self.attach_results = False
        self.use_text_as_title = False
        self.options: EventOptions = default_event_options(hostname=self.hostname, environment=self.environment)

        self._listener: ResultListenerPort | None = None
        self._sender = sender or RequestsSender()
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="lib-log-datadog")
        self._pending: set[Future[DatadogResult | None]] = set()
        self._lock = threading.Lock()
        self._closed = False
        self._deliver = create_deliver_event(
            sender=self._sender,
            request_options=self.request_options,
            resolve_listener=self._active_listener,
            timeout=timeout,
        )

    @property
    def allowed_levels(self) -> tuple[str, ...]:
        return self.severity_policy.allowed

    def receive_results(self, listener: ResultListenerPort | None = None) -> None:
        """Relay parsed API responses to ``listener`` as ``DatadogResult`` events."""
        self.attach_results = True
        if listener is not None:
            self._listener = listener

    def stop_results(self) -> None:
        """Stop relaying API responses."""
        self.attach_results = False

    def reset_options(self) -> None:
        """Discard template customisations and restore the defaults."""
        self.options = default_event_options(hostname=self.hostname, environment=self.environment)

    def log(
        self,
        severity: str,
        message: str,
        data: Any = None,
        callback: Callable[[], None] | None = None,
    ) -> Future[DatadogResult | None] | None:
        """Send one event unless ``severity`` is filtered out.

        Returns
        -------
        Future | None
            Future resolving to the :class:`DatadogResult` (``None`` after a
            transport failure), or ``None`` when the call was filtered and no
            request was issued. Filtered calls never invoke ``callback``.
        """
        resolved = self.severity_policy.resolve(severity)
        if not self.severity_policy.accepts(resolved):
            return None

        try:
            payload = self.build_payload(resolved, message, data)
            return self._submit(DeliveryRequest(payload=payload, callback=callback))
        except Exception as exc:  # noqa: BLE001
            LOGGER.error("Failed to dispatch Datadog event", exc_info=exc)
            return None

    def build_payload(self, severity: str, message: str, data: Any = None) -> EventPayload:
        """Return the payload :meth:`log` would send for an accepted call."""
        message = "" if message is None else str(message)
        text = compose_text(message, classify(data))
        title = message if self.use_text_as_title else None
        return EventPayload.from_options(self.options.copy(), alert_type=severity, text=text, title=title)

    def flush(self, timeout: float | None = None) -> bool:
        """Wait for in-flight requests; ``False`` if ``timeout`` elapsed first."""
        with self._lock:
            pending = list(self._pending)
        if not pending:
            return True
        _done, not_done = wait_for_futures(pending, timeout=timeout)
        return not not_done

    def close(self, wait: bool = True) -> None:
        """Stop accepting events and release the worker pool and connections."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._executor.shutdown(wait=wait)
        self._sender.close()

    def __enter__(self) -> "DatadogTransport":
        return self

    def __exit__(self, *_exc_info: object) -> None:
        self.close()

    def _submit(self, request: DeliveryRequest) -> Future[DatadogResult | None] | None:
        with self._lock:
            if self._closed:
                LOGGER.warning("Datadog transport is closed; dropping event %r", request.payload.title)
                return None
            future = self._executor.submit(self._deliver, request)
            self._pending.add(future)
        future.add_done_callback(self._forget)
        return future

    def _forget(self, future: Future[DatadogResult | None]) -> None:
        with self._lock:
            self._pending.discard(future)

    def _active_listener(self) -> ResultListenerPort | None:
        if not self.attach_results:
            return None
        if self._listener is None:
            LOGGER.warning("Datadog result relay is enabled but no listener is attached")
        return self._listener


__all__ = ["DatadogTransport"]
