"""Port for collaborators receiving relayed API responses."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ResultListenerPort(Protocol):
    """Event-emitting collaborator attached via ``receive_results``."""

    def emit(self, event_name: str, payload: Any) -> None:
        """Publish ``payload`` under ``event_name``."""


__all__ = ["ResultListenerPort"]
