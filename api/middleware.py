"""
Consolidated middleware for the MealHub API
"""

import time
import logging
from uuid import uuid4

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from api.responses import error_response
from app.exceptions import MealHubError

logger = logging.getLogger("mealhub.middleware")

# Location prefixes FastAPI puts in front of field names
_LOC_SOURCES = {"body", "query", "path", "header", "cookie"}


# ============================================================================
# Helper Functions
# ============================================================================


def first_error_message(errors) -> str:
    """Render the first validation error as ``<field>: <message>``"""
    if not errors:
        return "Invalid request"
    err = errors[0]
    loc = [str(part) for part in err.get("loc", ()) if part not in _LOC_SOURCES]
    msg = err.get("msg", "Invalid value")
    return f"{'.'.join(loc)}: {msg}" if loc else msg


# ============================================================================
# Request Logging Middleware
# ============================================================================


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log all HTTP requests and responses"""

    async def dispatch(self, request: Request, call_next):
        # Generate unique request ID
        request_id = str(uuid4())
        request.state.request_id = request_id

        logger.info(
            "%s %s started",
            request.method,
            request.url.path,
            extra={
                "request_id": request_id,
                "client": request.client.host if request.client else None,
            },
        )

        start_time = time.time()

        try:
            response: Response = await call_next(request)
        except Exception as exc:
            # Render the 500 here, inside CORS, instead of in ServerErrorMiddleware
            response = await general_exception_handler(request, exc)

        process_time = time.time() - start_time
        logger.info(
            "%s %s -> %d in %.4fs",
            request.method,
            request.url.path,
            response.status_code,
            process_time,
            extra={"request_id": request_id},
        )

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = f"{process_time:.4f}"
        return response


# ============================================================================
# Error Handlers
# ============================================================================


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle Pydantic validation errors: report the first violated rule"""
    message = first_error_message(exc.errors())
    logger.warning(f"Validation error on {request.url.path}: {message}")

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_response(message, status.HTTP_400_BAD_REQUEST),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions"""
    logger.warning(f"HTTP {exc.status_code} on {request.url.path}: {exc.detail}")

    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(str(exc.detail), exc.status_code),
        headers=getattr(exc, "headers", None),
    )


async def app_exception_handler(request: Request, exc: MealHubError):
    """Handle application errors that carry their own status"""
    logger.warning(f"{exc.__class__.__name__} on {request.url.path}: {exc}")

    return JSONResponse(status_code=exc.http_status, content=exc.to_dict())


async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected errors"""
    logger.exception(f"Unexpected error on {request.url.path}: {exc}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response(
            "Internal Server Error", status.HTTP_500_INTERNAL_SERVER_ERROR
        ),
    )
