"""Errors raised by use cases and translated to HTTP responses by the API."""


class ApplicationError(Exception):
    """Base class for expected failures of an operation."""


class ValidationError(ApplicationError):
    """A required field is missing or empty."""


class AuthError(ApplicationError):
    """Missing or invalid service credential or user token."""


class ForbiddenError(ApplicationError):
    """The requester does not own the targeted resource."""


class NotFoundError(ApplicationError):
    """The targeted resource does not exist."""


class PersistenceError(ApplicationError):
    """The notification store could not complete a write or read."""


class IllegalTransitionError(ApplicationError):
    """A status change is outside the allowed transition tables."""


class StaleVersionError(ApplicationError):
    """The caller's view of an order is older than the current one."""


__all__ = [
    "ApplicationError",
    "AuthError",
    "ForbiddenError",
    "IllegalTransitionError",
    "NotFoundError",
    "PersistenceError",
    "StaleVersionError",
    "ValidationError",
]
