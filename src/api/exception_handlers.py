"""Exception handlers for the FastAPI application."""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.config import settings
from core.exceptions import (
    AppException,
    ErrorCode,
    ErrorKind,
    status_for,
)

logger = structlog.get_logger()

_SERVER_SIDE_KINDS = frozenset({ErrorKind.DATABASE, ErrorKind.CONNECTION, ErrorKind.INTERNAL})


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app."""

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        """Handle custom application exceptions."""
        if exc.kind in _SERVER_SIDE_KINDS:
            # str(exc) carries the operation and driver reason; clients only
            # get exc.message.
            logger.error(
                "app_exception",
                error_code=exc.error_code.value,
                kind=exc.kind.value,
                error=str(exc),
                cause=repr(exc.__cause__) if exc.__cause__ else None,
            )
        else:
            logger.warning(
                "app_exception",
                error_code=exc.error_code.value,
                kind=exc.kind.value,
                message=exc.message,
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "code": exc.error_code.value,
                "message": exc.message,
                "details": exc.details,
            },
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Handle HTTP exceptions from FastAPI/Starlette."""
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "code": "HTTP_ERROR",
                "message": exc.detail,
                "details": None,
            },
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle malformed bodies and Pydantic validation errors."""
        errors = exc.errors()
        logger.info("validation_error", errors=errors)

        if any(error["type"] == "json_invalid" for error in errors):
            return JSONResponse(
                status_code=status_for(ErrorKind.VALIDATION),
                content={
                    "code": ErrorCode.INVALID_REQUEST.value,
                    "message": "Invalid request body",
                    "details": None,
                },
            )

        return JSONResponse(
            status_code=status_for(ErrorKind.VALIDATION),
            content={
                "code": ErrorCode.VALIDATION_ERROR.value,
                "message": "Request validation failed",
                "details": [
                    {
                        "field": ".".join(str(x) for x in error["loc"]),
                        "message": error["msg"],
                        "type": error["type"],
                    }
                    for error in errors
                ],
            },
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle unexpected exceptions."""
        request_id = getattr(request.state, "request_id", "unknown")
        logger.error(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
            request_id=request_id,
            exc_info=True,
        )

        message = "An unexpected error occurred"
        if not settings.is_production:
            message = str(exc)

        return JSONResponse(
            status_code=status_for(ErrorKind.INTERNAL),
            content={
                "code": ErrorCode.INTERNAL_ERROR.value,
                "message": message,
                "details": {"request_id": request_id},
            },
        )
