"""Domain values describing Datadog events, severities, and requests."""

from __future__ import annotations

from .data import EmptyData, ErrorInfo, LogData, StructuredData, classify, compose_text
from .levels import ALLOWED_SEVERITIES, SEVERITY_REMAP, SeverityPolicy
from .options import EventOptions, EventPayload, default_event_options
from .request import API_ENDPOINT, API_VERSION, Credentials, RequestOptions
from .response import RESULT_EVENT, DatadogResult, HttpResponse

__all__ = [
    "ALLOWED_SEVERITIES",
    "API_ENDPOINT",
    "API_VERSION",
    "Credentials",
    "DatadogResult",
    "EmptyData",
    "ErrorInfo",
    "EventOptions",
    "EventPayload",
    "HttpResponse",
    "LogData",
    "RESULT_EVENT",
    "RequestOptions",
    "SEVERITY_REMAP",
    "SeverityPolicy",
    "StructuredData",
    "classify",
    "compose_text",
    "default_event_options",
]
