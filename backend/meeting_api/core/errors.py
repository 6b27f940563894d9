"""
API error taxonomy and exception handlers.

Every failure leaves the API as the same envelope:
`{"error": <kind>, "message": <text>, "details"?: [...]}`.
"""

import functools
import inspect
import logging
from typing import Any, Callable, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from meeting_api.db.errors import (
    DuplicateRecordError,
    ForeignKeyViolationError,
    RecordNotFoundError,
    StoreError,
)

logger = logging.getLogger("errors")


class ApiError(Exception):
    """Base class for errors rendered straight into the envelope."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error = "InternalServerError"
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, details: Optional[list[dict[str, Any]]] = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class InputValidationError(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "ValidationError"
    default_message = "Invalid input data"


class BadRequest(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "BadRequest"
    default_message = "Bad request"


class Unauthorized(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error = "Unauthorized"
    default_message = "Authentication failed"


class Forbidden(ApiError):
    status_code = status.HTTP_403_FORBIDDEN
    error = "Forbidden"
    default_message = "Insufficient permissions"


class NotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    error = "NotFound"
    default_message = "Resource not found"


class InternalServerError(ApiError):
    pass


# ============== Helpers ==============


def error_body(error: str, message: str, details: Optional[list[dict[str, Any]]] = None) -> dict[str, Any]:
    body: dict[str, Any] = {"error": error, "message": message}
    if details is not None:
        body["details"] = details
    return body


def validation_details(errors: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Flatten pydantic errors into (path, message) items."""
    details = []
    for err in errors:
        loc = list(err.get("loc", ()))
        if loc and loc[0] in ("body", "query", "path", "header"):
            loc = loc[1:]
        details.append(
            {
                "path": loc,
                "message": err.get("msg", "Invalid value"),
                "code": err.get("type", "invalid"),
            }
        )
    return details


def failure_message(message: str) -> Callable:
    """
    Answer unexpected exceptions from an endpoint with a fixed 500 message.

    API and store errors pass through to their own handlers; anything
    else is logged with its traceback and replaced so internals never
    reach the client. Plain functions stay plain so FastAPI still runs
    them in its threadpool.
    """

    def reraise(exc: Exception):
        if isinstance(exc, (ApiError, StoreError)):
            raise exc
        logger.exception("%s: %s", message, exc)
        raise InternalServerError(message) from exc

    def decorator(endpoint: Callable) -> Callable:
        if inspect.iscoroutinefunction(endpoint):

            @functools.wraps(endpoint)
            async def async_wrapper(*args, **kwargs):
                try:
                    return await endpoint(*args, **kwargs)
                except Exception as exc:
                    reraise(exc)

            return async_wrapper

        @functools.wraps(endpoint)
        def wrapper(*args, **kwargs):
            try:
                return endpoint(*args, **kwargs)
            except Exception as exc:
                reraise(exc)

        return wrapper

    return decorator


# ============== Exception Handlers ==============


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.error, exc.message, exc.details),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    from_query = bool(errors) and all(err.get("loc", ("",))[0] == "query" for err in errors)
    message = "Invalid query parameters" if from_query else "Invalid input data"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("ValidationError", message, validation_details(errors)),
    )


async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    if isinstance(exc, RecordNotFoundError):
        status_code, kind = status.HTTP_404_NOT_FOUND, "NotFound"
    elif isinstance(exc, (DuplicateRecordError, ForeignKeyViolationError)):
        status_code, kind = status.HTTP_400_BAD_REQUEST, "BadRequest"
    else:
        logger.error("Unhandled store error: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body("InternalServerError", InternalServerError.default_message),
        )
    return JSONResponse(status_code=status_code, content=error_body(kind, str(exc)))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        body = error_body("NotFound", f"Cannot {request.method} {request.url.path}")
    elif exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        body = error_body("MethodNotAllowed", f"Cannot {request.method} {request.url.path}")
    else:
        body = error_body("Error", str(exc.detail))
    return JSONResponse(status_code=exc.status_code, content=body, headers=exc.headers)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("InternalServerError", InternalServerError.default_message),
    )


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
