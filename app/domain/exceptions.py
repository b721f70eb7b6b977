"""Errors raised by the notification use cases."""


class NotificationError(Exception):
    """Base class for expected failures in the notification domain."""


class NotFoundError(NotificationError):
    """Raised when an entity, recipient set or cluster cannot be resolved."""


class ValidationError(NotificationError, ValueError):
    """Raised when a request is well-formed but semantically invalid."""


class NoRecipientsError(ValidationError):
    """Raised when a notification is created without direct recipients or a cluster."""

    def __init__(self, message: str = "Users and clusters are empty") -> None:
        super().__init__(message)


__all__ = [
    "NoRecipientsError",
    "NotFoundError",
    "NotificationError",
    "ValidationError",
]
