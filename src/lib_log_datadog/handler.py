"""Standard-library logging integration for :class:`DatadogTransport`.

Purpose
-------
Let applications route :mod:`logging` records to Datadog by attaching a
handler instead of calling the transport directly.

Contents
--------
* :data:`DATA_ATTRIBUTE` - ``extra=`` key carrying structured event data.
* :func:`severity_for_level` - translate numeric levels to transport severities.
* :class:`DatadogHandler` - :class:`logging.Handler` wrapping a transport.
"""

from __future__ import annotations

import copy
import logging

from .domain.data import ErrorInfo, LogData, classify
from .transport import DatadogTransport

DATA_ATTRIBUTE = "datadog_data"
#: Record attribute (set via ``extra={"datadog_data": ...}``) forwarded as event data.

_OWN_LOGGER_PREFIX = __name__.split(".", 1)[0]


def severity_for_level(levelno: int) -> str:
    """Return the transport severity name for a :mod:`logging` level number.

    Examples
    --------
    >>> severity_for_level(logging.WARNING)
    'warn'
    >>> severity_for_level(5)
    'silly'
    """
    if levelno >= logging.CRITICAL:
        return "severe"
    if levelno >= logging.ERROR:
        return "error"
    if levelno >= logging.WARNING:
        return "warn"
    if levelno >= logging.INFO:
        return "info"
    if levelno >= logging.DEBUG:
        return "debug"
    return "silly"


class DatadogHandler(logging.Handler):
    """Forward log records to Datadog through a :class:`DatadogTransport`.

    Records emitted by this package's own loggers are skipped so delivery
    failures cannot feed back into the transport. The handler's formatter
    renders the message text; exception details travel as event data instead
    of being appended by the formatter.
    """

    def __init__(self, transport: DatadogTransport, level: int = logging.NOTSET, *, owns_transport: bool = False) -> None:
        super().__init__(level)
        self.transport = transport
        self._owns_transport = owns_transport

    def emit(self, record: logging.LogRecord) -> None:
        if record.name == _OWN_LOGGER_PREFIX or record.name.startswith(_OWN_LOGGER_PREFIX + "."):
            return
        try:
            message = self._format_message(record)
            self.transport.log(severity_for_level(record.levelno), message, self._record_data(record))
        except Exception:  # noqa: BLE001
            self.handleError(record)

    def close(self) -> None:
        try:
            if self._owns_transport:
                self.transport.close()
        finally:
            super().close()

    def _format_message(self, record: logging.LogRecord) -> str:
        bare = copy.copy(record)
        bare.exc_info = None
        bare.exc_text = None
        bare.stack_info = None
        return self.format(bare)

    @staticmethod
    def _record_data(record: logging.LogRecord) -> LogData:
        if record.exc_info and record.exc_info[1] is not None:
            return ErrorInfo.from_exception(record.exc_info[1])
        return classify(getattr(record, DATA_ATTRIBUTE, None))


__all__ = ["DATA_ATTRIBUTE", "DatadogHandler", "severity_for_level"]
