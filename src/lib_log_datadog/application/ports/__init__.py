"""Ports the transport depends on."""

from __future__ import annotations

from .http import HttpSenderPort
from .listener import ResultListenerPort

__all__ = ["HttpSenderPort", "ResultListenerPort"]
