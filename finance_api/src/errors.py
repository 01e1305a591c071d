"""
Error taxonomy for the HTTP layer.

Every error that reaches the error boundary is classified into one of a
closed set of kinds. Errors raised on purpose by handlers carry their own
status code and JSON body; anything else collapses to a generic 500.
"""

from enum import Enum
from typing import Any, Dict, Mapping, Optional

from fastapi import status


INTERNAL_ERROR_BODY = {"error": "Internal Server Error"}


class ErrorKind(Enum):
    """Error kind classification"""
    VALIDATION = "validation"
    AUTH = "auth"
    HTTP = "http"
    UNKNOWN = "unknown"


class ApiError(Exception):
    """Base class for errors that render their own response."""

    kind = ErrorKind.HTTP
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    @property
    def body(self) -> Dict[str, Any]:
        return dict(INTERNAL_ERROR_BODY)

    @property
    def headers(self) -> Optional[Dict[str, str]]:
        return None


class HttpError(ApiError):
    """
    HTTP-shaped error returned verbatim by the error boundary.

    Example:
        raise HttpError(404, {"error": "Not found"})
    """

    def __init__(self, status_code: int, body: Mapping[str, Any]):
        super().__init__(f"HTTP {status_code}")
        self.status_code = status_code
        self._body = dict(body)

    @property
    def body(self) -> Dict[str, Any]:
        return self._body


class ValidationFailed(ApiError):
    """Input failed schema validation (400 with field details)."""

    kind = ErrorKind.VALIDATION
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, details: Mapping[str, str], message: str = "Validation failed"):
        super().__init__(message)
        self.message = message
        self.details = dict(details)

    @property
    def body(self) -> Dict[str, Any]:
        return {"error": self.message, "details": self.details}


class Unauthorized(ApiError):
    """No identity could be resolved for the caller."""

    kind = ErrorKind.AUTH
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)
        self.message = message

    @property
    def body(self) -> Dict[str, Any]:
        return {"error": self.message}

    @property
    def headers(self) -> Dict[str, str]:
        return {"WWW-Authenticate": "Bearer"}


def classify_error(exception: BaseException) -> ErrorKind:
    """
    Classify an exception for the error boundary.

    Args:
        exception: The exception to classify

    Returns:
        ErrorKind of an ApiError, UNKNOWN for everything else
    """
    if isinstance(exception, ApiError):
        return exception.kind
    return ErrorKind.UNKNOWN
