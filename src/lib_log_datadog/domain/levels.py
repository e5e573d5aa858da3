"""Severity remapping and allow-list filtering for Datadog events.

Purpose
-------
Translate host-framework severities (``silly``, ``verbose``, ``warn``...) into
the alert types understood by the Datadog events API and decide which calls
are forwarded at all.

Contents
--------
* :data:`SEVERITY_REMAP` - extended severity names mapped onto canonical alert types.
* :data:`ALLOWED_SEVERITIES` - ordered severity scale used for the minimum cutoff.
* :class:`SeverityPolicy` - immutable remap/allow-list pair built once per transport.

System Role
-----------
Consulted by :class:`lib_log_datadog.transport.DatadogTransport` before any
payload is assembled; a rejected severity short-circuits the whole call.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

SEVERITY_REMAP: Mapping[str, str] = MappingProxyType(
    {
        "silly": "info",
        "debug": "info",
        "verbose": "info",
        "warn": "warning",
    }
)
#: Host-framework severities rewritten before filtering.

ALLOWED_SEVERITIES: tuple[str, ...] = (
    "silly",
    "debug",
    "verbose",
    "info",
    "warning",
    "error",
    "severe",
    "none",
)
#: Severity scale from least to most critical.


@dataclass(slots=True, frozen=True)
class SeverityPolicy:
    """Resolve and filter severities for outgoing events.

    Examples
    --------
    >>> policy = SeverityPolicy.from_minimum("warning")
    >>> policy.allowed
    ('warning', 'error', 'severe', 'none')
    >>> policy.resolve("warn")
    'warning'
    >>> policy.accepts("info")
    False
    """

    allowed: tuple[str, ...] = ALLOWED_SEVERITIES
    remap: Mapping[str, str] = field(default_factory=lambda: SEVERITY_REMAP)

    @classmethod
    def from_minimum(cls, minimum_level: str | None) -> "SeverityPolicy":
        """Return a policy whose allow-list starts at ``minimum_level``.

        Unknown or empty levels keep the full scale; nothing is raised.
        """
        if not minimum_level or minimum_level not in ALLOWED_SEVERITIES:
            return cls()
        start = ALLOWED_SEVERITIES.index(minimum_level)
        return cls(allowed=ALLOWED_SEVERITIES[start:])

    def resolve(self, severity: str) -> str:
        """Return the canonical alert type for ``severity``."""
        return self.remap.get(severity, severity)

    def accepts(self, severity: str) -> bool:
        """Return ``True`` when an already resolved ``severity`` may be sent."""
        return severity in self.allowed


__all__ = ["ALLOWED_SEVERITIES", "SEVERITY_REMAP", "SeverityPolicy"]
