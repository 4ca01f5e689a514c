"""Task errors and the handlers that turn them into JSON envelopes"""
import logging
from typing import Any, Dict, Optional

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import config

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Internal server error"


# Exceptions
class TaskValidationError(Exception):
    """Client input is invalid; the message names the field"""

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message)


class TaskNotFound(Exception):
    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__("Task not found")


class StorageFault(Exception):
    """The task store is unreachable or an operation on it failed"""

    def __init__(self, message: str, detail: Optional[str] = None):
        self.detail = detail
        super().__init__(message)


def error_envelope(status_code: int, message: str, error: Optional[str] = None) -> JSONResponse:
    content: Dict[str, Any] = {"success": False, "message": message}
    if error is not None:
        content["error"] = error
    return JSONResponse(status_code=status_code, content=content)


def error_detail(detail: Optional[str]) -> str:
    """Expose fault details only in development mode"""
    if config.is_development() and detail:
        return detail
    return GENERIC_ERROR


# Exception handlers
def task_validation_handler(request: Request, exc: TaskValidationError):
    logger.warning(f"Rejected {request.method} {request.url.path}: {exc}")
    return error_envelope(status.HTTP_400_BAD_REQUEST, str(exc))


def task_not_found_handler(request: Request, exc: TaskNotFound):
    logger.info(f"Task {exc.task_id} not found")
    return error_envelope(status.HTTP_404_NOT_FOUND, str(exc))


def storage_fault_handler(request: Request, exc: StorageFault):
    logger.error(f"{exc}: {exc.detail}")
    return error_envelope(
        status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc), error_detail(exc.detail)
    )


def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if not errors:
        return error_envelope(status.HTTP_400_BAD_REQUEST, "Invalid request body")

    first = errors[0]
    loc = [str(part) for part in first.get("loc", ()) if part != "body"]
    field = ".".join(loc)
    if first.get("type") == "json_invalid":
        message = "Request body must be valid JSON"
    elif not field:
        message = "Request body must be a JSON object"
    else:
        message = f"Invalid value for {field}"
    logger.warning(f"Rejected {request.method} {request.url.path}: {message}")
    return error_envelope(status.HTTP_400_BAD_REQUEST, message, first.get("msg"))


def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return error_envelope(status.HTTP_404_NOT_FOUND, "Route not found")
    return error_envelope(exc.status_code, str(exc.detail))


def unexpected_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return error_envelope(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "Something went wrong!", error_detail(str(exc))
    )
