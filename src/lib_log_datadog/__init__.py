"""Public package surface for the Datadog events transport.

``DatadogTransport`` is the adapter host integrations call; ``DatadogHandler``
attaches it to the standard :mod:`logging` tree.
"""

from __future__ import annotations

from .domain import (
    DatadogResult,
    EmptyData,
    ErrorInfo,
    EventOptions,
    StructuredData,
    default_event_options,
)
from .handler import DatadogHandler
from .transport import DatadogTransport

__all__ = [
    "DatadogHandler",
    "DatadogResult",
    "DatadogTransport",
    "EmptyData",
    "ErrorInfo",
    "EventOptions",
    "StructuredData",
    "default_event_options",
]
