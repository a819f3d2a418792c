"""Domain errors raised by the service layer.

Each error carries the HTTP status it maps to at the API boundary, so routers
can let them propagate to the handler registered in ``jobboard.main``.
"""

from fastapi import status


class JobBoardError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(JobBoardError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"


class WeakPasswordError(ValidationError):
    default_message = "Password does not meet the strength requirements"


class ConflictError(JobBoardError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Email already registered"


class InvalidTransitionError(ConflictError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Invalid status transition"


class NotFoundError(JobBoardError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class InvalidCredentialsError(JobBoardError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid password"


class AccountInactiveError(JobBoardError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Account is inactive"


class PermissionDeniedError(JobBoardError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "You do not have permission to perform this action"


class TokenInvalidError(JobBoardError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid token"


class TokenExpiredError(JobBoardError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Token has expired"


class MailDeliveryError(JobBoardError):
    default_message = "Unable to send email. Please try again later."


class StorageError(JobBoardError):
    default_message = "Unable to save changes. Please try again later."


class HashingError(JobBoardError):
    default_message = "Unable to process password"
