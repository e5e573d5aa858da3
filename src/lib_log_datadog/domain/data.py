"""Classification of the optional data attached to a log call.

Purpose
-------
Replace runtime probing of "error versus object versus primitive" with an
explicit variant decided once per call.

Contents
--------
* :class:`EmptyData`, :class:`ErrorInfo`, :class:`StructuredData` - the
  :data:`LogData` variants.
* :func:`classify` - map an arbitrary caller value onto a variant.
* :func:`compose_text` / :func:`truncate_text` - render the event body.
"""

from __future__ import annotations

import json
import traceback
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Union

MAX_TEXT_LENGTH = 4000
#: Upper bound enforced on the ``text`` field of every event.

TEXT_SEPARATOR = " | "


@dataclass(slots=True, frozen=True)
class EmptyData:
    """No usable data accompanied the message."""


@dataclass(slots=True, frozen=True)
class ErrorInfo:
    """Exception details rendered as ``message | stack``."""

    message: str
    stack: str

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ErrorInfo":
        """Capture ``exc`` including its traceback when one is attached.

        Examples
        --------
        >>> ErrorInfo.from_exception(ValueError("bad")).stack
        'ValueError: bad'
        """
        lines = traceback.format_exception(type(exc), exc, exc.__traceback__)
        return cls(message=str(exc), stack="".join(lines).rstrip("\n"))


@dataclass(slots=True, frozen=True)
class StructuredData:
    """Key/value (or sequence) data serialised as compact JSON."""

    fields: Any = field(default_factory=dict)

    def to_json(self) -> str:
        return json.dumps(self.fields, separators=(",", ":"), default=str)


LogData = Union[EmptyData, ErrorInfo, StructuredData]


def classify(value: Any) -> LogData:
    """Return the :data:`LogData` variant describing ``value``.

    Exceptions become :class:`ErrorInfo`; non-empty mappings and non-string
    sequences become :class:`StructuredData`; everything else is empty.
    Values that are already a variant pass through unchanged.

    Examples
    --------
    >>> classify({"a": 1})
    StructuredData(fields={'a': 1})
    >>> classify({})
    EmptyData()
    >>> classify("plain")
    EmptyData()
    """
    if isinstance(value, (EmptyData, ErrorInfo, StructuredData)):
        return value
    if isinstance(value, BaseException):
        return ErrorInfo.from_exception(value)
    if isinstance(value, Mapping) and value:
        return StructuredData(dict(value))
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)) and value:
        return StructuredData(list(value))
    return EmptyData()


def compose_text(message: str, data: LogData) -> str:
    """Render the event body for ``message`` and ``data``, truncated.

    Examples
    --------
    >>> compose_text("boom", StructuredData({"id": 7}))
    'boom | {"id":7}'
    >>> compose_text("", ErrorInfo("bad", "Traceback..."))
    'Traceback...'
    """
    if isinstance(data, ErrorInfo):
        detail: str | None = data.stack
    elif isinstance(data, StructuredData) and data.fields:
        detail = data.to_json()
    else:
        detail = None

    if detail is None:
        text = message
    elif message:
        text = message + TEXT_SEPARATOR + detail
    else:
        text = detail
    return truncate_text(text)


def truncate_text(text: str, limit: int = MAX_TEXT_LENGTH) -> str:
    """Clip ``text`` to at most ``limit`` characters."""
    if len(text) > limit:
        return text[:limit]
    return text


__all__ = [
    "EmptyData",
    "ErrorInfo",
    "LogData",
    "MAX_TEXT_LENGTH",
    "StructuredData",
    "classify",
    "compose_text",
    "truncate_text",
]
