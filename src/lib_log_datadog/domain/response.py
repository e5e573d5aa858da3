"""Response values produced by the HTTP adapter and relayed to listeners."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Mapping

RESULT_EVENT = "DatadogResult"
#: Event name used when relaying responses to an attached listener.


@dataclass(slots=True, frozen=True)
class HttpResponse:
    """Status, headers and fully accumulated body of one HTTP exchange."""

    status_code: int
    text: str
    headers: Mapping[str, str] = field(default_factory=dict)


@dataclass(slots=True, frozen=True)
class DatadogResult:
    """Response object emitted as :data:`RESULT_EVENT`.

    ``body`` holds the parsed JSON document, or ``None`` when the response was
    not parsed (relay disabled or malformed JSON).
    """

    status_code: int
    text: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Any = None

    @classmethod
    def from_response(cls, response: HttpResponse, *, parse: bool) -> "DatadogResult":
        """Wrap ``response``; parse its body as JSON when ``parse`` is set.

        Raises
        ------
        ValueError
            When ``parse`` is requested and the body is not valid JSON.
        """
        body = json.loads(response.text) if parse else None
        return cls(status_code=response.status_code, text=response.text, headers=dict(response.headers), body=body)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


__all__ = ["DatadogResult", "HttpResponse", "RESULT_EVENT"]
