from typing import Optional


class EssayServiceError(Exception):
    """Base class for errors rendered as {success: false, error, message}"""

    status_code = 500
    error = "Internal Server Error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.error)
        self.message = message


class ValidationError(EssayServiceError):
    status_code = 400
    error = "Validation failed"

    def __init__(self, message: str):
        super().__init__(message)
        # Validation messages are shown to the caller as the error itself
        self.error = message


class NotFoundError(EssayServiceError):
    status_code = 404
    error = "Essay not found"


class PersistenceError(EssayServiceError):
    status_code = 500
    error = "Database operation failed"


class InternalError(EssayServiceError):
    status_code = 500
    error = "Internal Server Error"
