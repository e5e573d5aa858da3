"""Event template and per-call payload for the Datadog events endpoint.

Purpose
-------
Describe the fields accepted by ``POST /api/v1/events`` and keep the reusable
template strictly separate from the values sent for a single log call.

Contents
--------
* :class:`EventOptions` - mutable template customised by host applications.
* :func:`default_event_options` - pure factory producing independent defaults.
* :class:`EventPayload` - immutable snapshot serialised into the request body.

System Role
-----------
:class:`lib_log_datadog.transport.DatadogTransport` owns one template and
builds a fresh :class:`EventPayload` for every accepted call, so concurrent
calls never share mutable state.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from typing import Any

DEFAULT_TITLE = "LOG"
DEFAULT_PRIORITY = "normal"
DEFAULT_ALERT_TYPE = "warning"
DEFAULT_ENVIRONMENT = "local"


@dataclass(slots=True)
class EventOptions:
    """Template fields applied to every event unless overridden per call.

    Attributes
    ----------
    title:
        Event title shown in the Datadog event stream.
    priority:
        ``"normal"`` or ``"low"``.
    date_happened:
        Optional POSIX timestamp; ``None`` lets Datadog stamp the event.
    host:
        Host name attached to the event.
    tags:
        ``key:value`` tags; the default carries the ``env`` tag.
    alert_type:
        Fallback alert type; each call overrides it with its severity.
    aggregation_key:
        Optional key grouping related events.
    source_type_name:
        Optional source (``nagios``, ``jenkins``, ``my apps``...).
    """

    host: str
    tags: list[str] = field(default_factory=list)
    title: str = DEFAULT_TITLE
    priority: str = DEFAULT_PRIORITY
    date_happened: int | None = None
    alert_type: str = DEFAULT_ALERT_TYPE
    aggregation_key: str | None = None
    source_type_name: str | None = None

    def copy(self) -> "EventOptions":
        """Return a snapshot whose ``tags`` list is independently allocated."""
        return replace(self, tags=list(self.tags))


def default_event_options(*, hostname: str, environment: str | None = None) -> EventOptions:
    """Build the default template for ``hostname`` and ``environment``.

    Every call returns a new value; mutating its ``tags`` never affects later
    results.

    Examples
    --------
    >>> first = default_event_options(hostname="web01", environment="prod")
    >>> first.tags
    ['env:prod']
    >>> first.tags.append("team:core")
    >>> default_event_options(hostname="web01", environment="prod").tags
    ['env:prod']
    """
    env = environment or DEFAULT_ENVIRONMENT
    return EventOptions(host=hostname, tags=[f"env:{env}"])


@dataclass(slots=True, frozen=True)
class EventPayload:
    """Body of one request to the events endpoint."""

    title: str
    priority: str
    date_happened: int | None
    host: str
    tags: tuple[str, ...]
    alert_type: str
    aggregation_key: str | None
    source_type_name: str | None
    text: str

    @classmethod
    def from_options(
        cls,
        options: EventOptions,
        *,
        alert_type: str,
        text: str,
        title: str | None = None,
    ) -> "EventPayload":
        """Snapshot ``options`` with the per-call fields applied."""
        return cls(
            title=options.title if title is None else title,
            priority=options.priority,
            date_happened=options.date_happened,
            host=options.host,
            tags=tuple(options.tags),
            alert_type=alert_type,
            aggregation_key=options.aggregation_key,
            source_type_name=options.source_type_name,
            text=text,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "priority": self.priority,
            "date_happened": self.date_happened,
            "host": self.host,
            "tags": list(self.tags),
            "alert_type": self.alert_type,
            "aggregation_key": self.aggregation_key,
            "source_type_name": self.source_type_name,
            "text": self.text,
        }

    def to_json(self) -> str:
        """Serialise the payload as compact JSON for the request body."""
        return json.dumps(self.to_dict(), separators=(",", ":"))


__all__ = ["EventOptions", "EventPayload", "default_event_options"]
