"""Typed failures raised by use cases and repositories.

They subclass :class:`ValueError` so callers that already translate
``ValueError`` into HTTP 400 keep working; routes that need a more precise
status code catch the subclass first.
"""


class NotFoundError(ValueError):
    """The requested record does not exist or is not visible to the caller."""


class NotificationNotFoundError(NotFoundError):
    """The notification does not exist or belongs to another recipient."""

    def __init__(self, notification_id: int) -> None:
        super().__init__("Notificação não encontrada")
        self.notification_id = notification_id


class InvalidTokenError(ValueError):
    """A single-use account token is unknown, already consumed or expired."""


__all__ = ["NotFoundError", "NotificationNotFoundError", "InvalidTokenError"]
