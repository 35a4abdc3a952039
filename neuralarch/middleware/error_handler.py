"""
Global error handling middleware for the NeuralArch Search API
Provides consistent error handling and structured error responses
"""

import logging
import os
import time
from typing import Dict, Any, Optional
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy.exc import SQLAlchemyError
from datetime import datetime, timezone
import uuid

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from neuralarch.utils.logger import log_error, log_request, log_response
from neuralarch.utils.error_monitor import track_error, ErrorTypes
from neuralarch.utils.error_utils import extract_error_message, setup_hint_for

logger = logging.getLogger(__name__)


class NASError(Exception):
    """Base exception class for NeuralArch application errors"""

    def __init__(self,
                 code: str,
                 message: str,
                 status_code: int = 500,
                 details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


# Specific error classes
class ValidationError(NASError):
    """Missing or malformed request fields"""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__("VALIDATION_ERROR", message, 400, details)


class ResourceNotFoundError(NASError):
    """Resource not found errors"""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__("RESOURCE_NOT_FOUND", message, 404, details)


class DatabaseError(NASError):
    """Database operation errors, carrying the store's raw message"""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        details = dict(details or {})
        hint = setup_hint_for(message)
        if hint and "hint" not in details:
            details["hint"] = hint
        super().__init__("DATABASE_ERROR", message, 500, details)


class DatabaseNotConfiguredError(NASError):
    """Persistence requested while DATABASE_URL is unset"""
    def __init__(self, message: str = "Database is not configured. Set DATABASE_URL to enable persistence.",
                 details: Optional[Dict[str, Any]] = None):
        super().__init__("CONFIGURATION_ERROR", message, 503, details)


def create_error_response(
    code: str,
    message: str,
    status_code: int,
    request_id: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """Create standardized error response"""
    return {
        "error": {
            "code": code,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "request_id": request_id,
            "details": details or {}
        }
    }


def _request_id(request: Request) -> str:
    return getattr(request.state, 'request_id', None) or str(uuid.uuid4())


async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for all uncaught exceptions"""
    request_id = _request_id(request)

    error_type = exc.__class__.__name__
    error_message = str(exc)
    log_error(request_id, error_type, error_message, exc_info=True)
    await track_error(ErrorTypes.UNKNOWN, error_message, request_id)

    return JSONResponse(
        status_code=500,
        content=create_error_response(
            code="INTERNAL_SERVER_ERROR",
            message="An unexpected error occurred",
            status_code=500,
            request_id=request_id
        )
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handler for HTTP exceptions, including unknown routes and wrong methods"""
    request_id = _request_id(request)

    log_error(request_id, "HTTPException", f"{exc.status_code}: {exc.detail}")
    await track_error(ErrorTypes.HTTP, f"{exc.status_code}: {exc.detail}", request_id)

    return JSONResponse(
        status_code=exc.status_code,
        content=create_error_response(
            code=f"HTTP_{exc.status_code}",
            message=str(exc.detail),
            status_code=exc.status_code,
            request_id=request_id
        ),
        headers=getattr(exc, "headers", None)
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies and params are a client error: 400"""
    request_id = _request_id(request)

    validation_errors = []
    for error in exc.errors():
        validation_errors.append({
            "loc": list(error["loc"]),
            "msg": error["msg"],
            "type": error["type"]
        })

    log_error(request_id, "ValidationError", f"Request validation failed: {validation_errors}")
    await track_error(ErrorTypes.VALIDATION, "Request validation failed", request_id)

    return JSONResponse(
        status_code=400,
        content=create_error_response(
            code="VALIDATION_ERROR",
            message="Request validation failed",
            status_code=400,
            request_id=request_id,
            details={"validation_errors": validation_errors}
        )
    )


async def sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError):
    """Handler for SQLAlchemy errors that escaped the façade"""
    request_id = _request_id(request)

    error_message = extract_error_message(exc)
    log_error(request_id, "DatabaseError", error_message, exc_info=True)
    await track_error(ErrorTypes.DATABASE, error_message, request_id)

    details = {}
    hint = setup_hint_for(error_message)
    if hint:
        details["hint"] = hint

    return JSONResponse(
        status_code=500,
        content=create_error_response(
            code="DATABASE_ERROR",
            message=error_message,
            status_code=500,
            request_id=request_id,
            details=details
        )
    )


_error_types_by_code = {
    "VALIDATION_ERROR": ErrorTypes.VALIDATION,
    "RESOURCE_NOT_FOUND": ErrorTypes.NOT_FOUND,
    "DATABASE_ERROR": ErrorTypes.DATABASE,
    "CONFIGURATION_ERROR": ErrorTypes.CONFIG,
}


async def nas_error_handler(request: Request, exc: NASError):
    """Handler for application errors"""
    request_id = _request_id(request)

    log_error(request_id, exc.code, exc.message, exc_info=False)
    await track_error(_error_types_by_code.get(exc.code, exc.code.lower()), exc.message, request_id)

    return JSONResponse(
        status_code=exc.status_code,
        content=create_error_response(
            code=exc.code,
            message=exc.message,
            status_code=exc.status_code,
            request_id=request_id,
            details=exc.details
        )
    )


# Rate limiting
def rate_limit_enabled() -> bool:
    return os.getenv("RATE_LIMIT_ENABLED", "true").lower() not in ("0", "false", "no")


AI_RATE_LIMIT = os.getenv("AI_RATE_LIMIT", "60/minute")

limiter = Limiter(key_func=get_remote_address, enabled=rate_limit_enabled())


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """Handler for rate limiting exceeded errors"""
    request_id = _request_id(request)

    error_message = f"Rate limit exceeded for {get_remote_address(request)}"
    log_error(request_id, "RateLimitExceeded", error_message, exc_info=False)
    await track_error(ErrorTypes.RATE_LIMIT, error_message, request_id)

    retry_after = getattr(exc, "retry_after", None) or 60
    return JSONResponse(
        status_code=429,
        content=create_error_response(
            code="RATE_LIMIT_EXCEEDED",
            message="Too many requests, please try again later",
            status_code=429,
            request_id=request_id,
            details={
                "retry_after": retry_after,
                "limit": exc.detail
            }
        ),
        headers={"Retry-After": str(retry_after)}
    )


def register_error_handlers(app: FastAPI):
    """Register all error handlers with the FastAPI application"""

    app.add_exception_handler(NASError, nas_error_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    app.state.limiter = limiter

    logger.info("Error handlers registered successfully")


# Request ID middleware
async def request_id_middleware(request: Request, call_next):
    """Middleware to generate and attach request ID to all requests"""
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    request.state.request_id = request_id

    response = await call_next(request)

    # Add request ID to response headers for tracing
    response.headers["X-Request-ID"] = request_id

    return response


# Request logging middleware
async def request_logging_middleware(request: Request, call_next):
    """Middleware to log all incoming requests and responses"""
    request_id = getattr(request.state, 'request_id', None) or str(uuid.uuid4())

    log_request(request_id, request.method, request.url.path)

    start_time = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        # the exception handlers produce the response; record the failed attempt
        log_response(request_id, 500, (time.perf_counter() - start_time) * 1000, 0)
        raise

    duration_ms = (time.perf_counter() - start_time) * 1000
    response_size = int(response.headers.get("content-length", 0))
    log_response(request_id, response.status_code, duration_ms, response_size)

    return response
