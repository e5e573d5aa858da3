"""Use cases executed for every accepted log call."""

from __future__ import annotations

from .deliver_event import DeliveryRequest, create_deliver_event

__all__ = ["DeliveryRequest", "create_deliver_event"]
