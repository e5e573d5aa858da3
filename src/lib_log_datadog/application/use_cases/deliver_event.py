"""Use case sending one event payload and relaying the API response.

Purpose
-------
Encapsulate the "POST, accumulate, optionally relay, then call back" sequence
so the transport only decides *whether* to send and *what* to send.

Contents
--------
* :class:`DeliveryRequest` - payload plus completion callback for one call.
* :func:`create_deliver_event` - factory freezing the sender wiring.

System Role
-----------
Runs on a worker thread owned by :class:`lib_log_datadog.transport.DatadogTransport`.
Every failure is logged and absorbed; nothing propagates back into the host
application's logging path.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from lib_log_datadog.application.ports import HttpSenderPort, ResultListenerPort
from lib_log_datadog.domain.options import EventPayload
from lib_log_datadog.domain.request import RequestOptions
from lib_log_datadog.domain.response import RESULT_EVENT, DatadogResult

LOGGER = logging.getLogger(__name__)

Callback = Callable[[], None]
DeliverCallable = Callable[["DeliveryRequest"], "DatadogResult | None"]


@dataclass(slots=True, frozen=True)
class DeliveryRequest:
    """Everything a worker needs to deliver one event."""

    payload: EventPayload
    callback: Callback | None = None


def create_deliver_event(
    *,
    sender: HttpSenderPort,
    request_options: RequestOptions,
    resolve_listener: Callable[[], ResultListenerPort | None],
    timeout: float | None = None,
) -> DeliverCallable:
    """Build the delivery callable executed for every accepted event.

    Parameters
    ----------
    sender:
        Adapter implementing :class:`HttpSenderPort`.
    request_options:
        Pre-built request settings shared read-only by all calls.
    resolve_listener:
        Returns the listener to relay responses to, or ``None`` when relay is
        disabled. Consulted after each response so toggling relay affects
        requests that are still in flight.
    timeout:
        Per-request deadline in seconds; ``None`` waits indefinitely.
    """

    def deliver(request: DeliveryRequest) -> DatadogResult | None:
        body = request.payload.to_json().encode("utf-8")
        try:
            response = sender.post(request_options, body, timeout=timeout)
        except Exception as exc:  # noqa: BLE001
            LOGGER.error("Failed to send Datadog event to %s", request_options.host, exc_info=exc)
            return None

        result = DatadogResult.from_response(response, parse=False)
        listener = resolve_listener()
        if listener is not None:
            try:
                result = DatadogResult.from_response(response, parse=True)
                listener.emit(RESULT_EVENT, result)
            except Exception as exc:  # noqa: BLE001
                LOGGER.error("Failed to emit %s event", RESULT_EVENT, exc_info=exc)

        _invoke_callback(request.callback)
        return result

    return deliver


def _invoke_callback(callback: Callback | None) -> None:
    """Run the completion callback while guarding against its failures."""

    if callback is None:
        return
    try:
        callback()
    except Exception as exc:  # noqa: BLE001
        LOGGER.error("Datadog completion callback raised; continuing", exc_info=exc)


__all__ = ["DeliveryRequest", "create_deliver_event"]
