from http import HTTPStatus


class MealHubError(Exception):
    """Base class for errors that map onto an HTTP status.

    Attributes:
        message: human-readable message, sent to the caller as ``error``
        http_status: status code used by the exception handlers
    """

    http_status = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.message, "message": self.http_status.phrase}

    def __str__(self) -> str:
        return self.message


class NotFoundError(MealHubError):
    """Raised when a requested record does not exist."""

    http_status = HTTPStatus.NOT_FOUND

    def __init__(self, message: str = "Not found"):
        super().__init__(message)
