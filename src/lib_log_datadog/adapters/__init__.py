"""Concrete adapters for the application ports."""

from __future__ import annotations

from .requests_sender import RequestsSender

__all__ = ["RequestsSender"]
