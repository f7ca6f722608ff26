# fullstock/errors.py
from enum import Enum
from typing import Any, Dict, Optional

ERROR_TITLE = {
    400: "Bad request",
    404: "Resource not found",
    500: "Internal server error",
}


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    SERVER = "server"

    @property
    def status_code(self) -> int:
        return {
            ErrorKind.NOT_FOUND: 404,
            ErrorKind.VALIDATION: 400,
            ErrorKind.SERVER: 500,
        }[self]


class StoreError(Exception):
    """Base for errors rendered as an error page instead of escaping the request."""

    kind = ErrorKind.SERVER
    default_message = "Something went wrong on our side. Please try again later."

    def __init__(self, title: Optional[str] = None, message: Optional[str] = None, path: str = "/"):
        self.title = title or f"{self.status_code} - {ERROR_TITLE[self.status_code]}"
        self.message = message or self.default_message
        self.path = path
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    def to_view(self) -> Dict[str, Any]:
        return {
            "page": "error",
            "name_page": "Error",
            "kind": self.kind.value,
            "status_code": self.status_code,
            "title": self.title,
            "message": self.message,
            "path": self.path,
        }


class NotFound(StoreError):
    kind = ErrorKind.NOT_FOUND
    default_message = "The page you are looking for does not exist or has been moved."


class ValidationError(StoreError):
    kind = ErrorKind.VALIDATION
    default_message = "The submitted data is not valid."


class ServerError(StoreError):
    kind = ErrorKind.SERVER
