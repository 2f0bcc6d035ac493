# app/errors.py
import enum
from typing import Any, Dict

from fastapi.responses import JSONResponse


class ErrorKind(enum.Enum):
    NOT_FOUND = (404, "Not Found")
    VALIDATION = (400, "Validation Error")
    AUTHENTICATION = (401, "Authentication Error")
    INTERNAL = (500, "Internal Server Error")

    @property
    def status_code(self) -> int:
        return self.value[0]

    @property
    def label(self) -> str:
        return self.value[1]


GENERIC_MESSAGE = "Something went wrong!"


class ApiError(Exception):
    """A domain failure tagged with its kind; turned into a response by error_response()."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message


def not_found(message: str) -> ApiError:
    return ApiError(ErrorKind.NOT_FOUND, message)


def validation_error(message: str) -> ApiError:
    return ApiError(ErrorKind.VALIDATION, message)


def authentication_error(message: str) -> ApiError:
    return ApiError(ErrorKind.AUTHENTICATION, message)


def error_body(kind: ErrorKind, message: str) -> Dict[str, Any]:
    return {"error": kind.label, "message": message, "statusCode": kind.status_code}


def error_response(kind: ErrorKind, message: str = GENERIC_MESSAGE) -> JSONResponse:
    # internal failures never leak their detail
    if kind is ErrorKind.INTERNAL:
        message = GENERIC_MESSAGE
    return JSONResponse(status_code=kind.status_code, content=error_body(kind, message))
