"""Aggregate application use cases."""

from .notifications import StatusEventGateway
from .order_lifecycle import apply_transition

__all__ = [
    "StatusEventGateway",
    "apply_transition",
]
