from fastapi import status


class AppError(Exception):
    """Base application error rendered as {"success": false, "error": ...}"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Missing required fields"


class DuplicateEmail(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "User already exists"


class WeakPassword(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Password must be at least 6 characters"


class PayloadTooLarge(AppError):
    status_code = status.HTTP_413_CONTENT_TOO_LARGE
    default_message = "File too large"


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Unauthorized"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class NoFileData(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "File data not available"


class InvalidFileData(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid file data"


class InvalidCredentials(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials"


class IncorrectPassword(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Current password is incorrect"


class InternalError(AppError):
    pass
