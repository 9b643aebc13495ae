"""Domain errors raised by services and rendered by the app's exception handlers."""

from fastapi import status


class QuietHoursError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(QuietHoursError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class InvalidRange(InvalidInput):
    default_message = "End time must be after start time"


class InvalidStateTransition(InvalidInput):
    default_message = "Invalid status transition"


class Unauthorized(QuietHoursError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class Forbidden(QuietHoursError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Unauthorized"


class InvalidToken(Forbidden):
    default_message = "Invalid or expired token"


class NotFound(QuietHoursError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class Conflict(QuietHoursError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"
