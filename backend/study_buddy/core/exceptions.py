"""
Custom exception classes for unified error handling.

Every error the services raise derives from AppBaseError and carries its own
HTTP status. `register_exception_handlers` renders them (and FastAPI's own
errors) as a JSON body with an "error" key.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppBaseError(Exception):
    """Base exception for all application errors."""
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, detail: str | None = None):
        self.message = message
        self.detail = detail
        super().__init__(message)

    def to_dict(self) -> dict:
        body = {"error": self.message, "type": type(self).__name__}
        if self.detail:
            body["detail"] = self.detail
        return body


class InvalidInputError(AppBaseError):
    """Raised when a required field is missing or empty."""
    status_code = status.HTTP_400_BAD_REQUEST


class UnauthorizedError(AppBaseError):
    """Raised when the bearer credential is missing, invalid or expired."""
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized", detail: str | None = None):
        super().__init__(message, detail)


class ForbiddenError(AppBaseError):
    """Raised when a valid user acts on a record or route they do not own."""
    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str = "Forbidden", detail: str | None = None):
        super().__init__(message, detail)


class NotFoundError(AppBaseError):
    """Raised when a referenced record does not exist."""
    status_code = status.HTTP_404_NOT_FOUND


class InvalidFileTypeError(AppBaseError):
    """Raised when an upload has an unsupported MIME type."""
    status_code = status.HTTP_415_UNSUPPORTED_MEDIA_TYPE

    def __init__(self, content_type: str | None):
        super().__init__(
            message="Invalid file type. Only PDF, TXT, and DOCX files are allowed",
            detail=f"Received: {content_type or 'unknown'}",
        )


class FileTooLargeError(AppBaseError):
    """Raised when an upload exceeds the size limit."""
    status_code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE

    def __init__(self, size: int):
        super().__init__(
            message="File size exceeds 10MB limit",
            detail=f"Received {size} bytes",
        )


class StorageError(AppBaseError):
    """Raised when object storage rejects an upload."""
    status_code = status.HTTP_502_BAD_GATEWAY


class ExtractionError(AppBaseError):
    """Raised when text cannot be extracted from an uploaded document."""
    status_code = 422


class GenerationError(AppBaseError):
    """Raised when the generative model fails or times out."""
    status_code = status.HTTP_502_BAD_GATEWAY


# ── Handlers ─────────────────────────────────────────────

async def app_error_handler(request: Request, exc: AppBaseError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message} ({exc.detail})")
    else:
        logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    else:
        message = "Invalid request"
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the JSON error handlers to the application."""
    app.add_exception_handler(AppBaseError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
