"""Use cases guarding order, delivery and payment status changes."""

from .apply_transition import allowed_targets, apply_transition

__all__ = ["allowed_targets", "apply_transition"]
