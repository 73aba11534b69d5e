"""
Centralized Error Handling and Logging System
Structured error logs, per-request trace ids and consistent JSON error bodies.
"""

import json
import logging
import traceback
import uuid
from typing import Any, Dict, Optional, Union
from contextvars import ContextVar

from fastapi import Request, HTTPException
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.middleware.base import BaseHTTPMiddleware

from utils.exceptions import BlogPostError
from utils.helpers import utc_now

# Context variables for request tracing
request_id_var: ContextVar[str] = ContextVar('request_id', default='')
endpoint_context_var: ContextVar[str] = ContextVar('endpoint_context', default='')

logger = logging.getLogger(__name__)


class ErrorHandlingConfig:
    """Centralized configuration for error handling behavior"""

    # Security settings
    SANITIZE_SENSITIVE_FIELDS = True
    SENSITIVE_FIELD_PATTERNS = [
        'password', 'token', 'key', 'secret', 'authorization',
        'auth', 'bearer', 'credential', 'cookie'
    ]

    # Logging settings
    LOG_REQUEST_BODIES = True
    LOG_HEADERS = True
    MAX_BODY_LOG_SIZE = 5000  # Truncate large bodies

    # Error response settings
    INCLUDE_TRACE_ID = True
    INCLUDE_TIMESTAMP = True

    @classmethod
    def is_sensitive_field(cls, field_name: str) -> bool:
        """Check if a field contains sensitive data"""
        field_lower = field_name.lower()
        return any(pattern in field_lower for pattern in cls.SENSITIVE_FIELD_PATTERNS)

    @classmethod
    def sanitize_data(cls, data: Union[Dict, str, Any]) -> Any:
        """Recursively sanitize sensitive data from logs"""
        if not cls.SANITIZE_SENSITIVE_FIELDS:
            return data

        if isinstance(data, dict):
            return {
                key: "***REDACTED***" if cls.is_sensitive_field(str(key)) else cls.sanitize_data(value)
                for key, value in data.items()
            }
        elif isinstance(data, list):
            return [cls.sanitize_data(item) for item in data]
        elif isinstance(data, str) and len(data) > cls.MAX_BODY_LOG_SIZE:
            return data[:cls.MAX_BODY_LOG_SIZE] + "...[TRUNCATED]"
        else:
            return data


class StructuredLogger:
    """Structured logging with consistent format and context"""

    @staticmethod
    def log_error(
        error_type: str,
        message: str,
        request: Optional[Request] = None,
        exception: Optional[Exception] = None,
        extra_context: Optional[Dict] = None,
        include_traceback: bool = True,
        level: int = logging.ERROR
    ) -> str:
        """Log structured error with full context and return its trace id"""

        # Same id as the X-Trace-ID response header
        trace_id = request_id_var.get('') or str(uuid.uuid4())[:8]

        log_entry = {
            "timestamp": utc_now().isoformat(),
            "trace_id": trace_id,
            "error_type": error_type,
            "message": message,
            "level": logging.getLevelName(level)
        }

        if request:
            headers = dict(request.headers)
            log_entry["request"] = {
                "method": request.method,
                "path": request.url.path,
                "query_params": dict(request.query_params),
                "headers": ErrorHandlingConfig.sanitize_data(headers) if ErrorHandlingConfig.LOG_HEADERS else {},
                "client_ip": request.client.host if request.client else None
            }

        if exception:
            log_entry["exception"] = {
                "type": type(exception).__name__,
                "details": str(exception)
            }
            if include_traceback:
                log_entry["exception"]["traceback"] = "".join(
                    traceback.format_exception(type(exception), exception, exception.__traceback__)
                )

        if extra_context:
            log_entry["context"] = ErrorHandlingConfig.sanitize_data(extra_context)

        endpoint_context = endpoint_context_var.get('')
        if endpoint_context:
            log_entry["endpoint_context"] = endpoint_context

        logger.log(level, json.dumps(log_entry, indent=2, default=str))

        return trace_id


def log_level_for(status_code: int) -> int:
    """Client errors are logged as warnings, server errors as errors"""
    return logging.ERROR if status_code >= 500 else logging.WARNING


def captured_body(request: Request) -> Optional[Any]:
    """Request body captured by RequestContextMiddleware, decoded for logging"""
    body = getattr(request.state, 'captured_body', None)
    if not body:
        return None
    try:
        return ErrorHandlingConfig.sanitize_data(json.loads(body))
    except (UnicodeDecodeError, ValueError):
        return ErrorHandlingConfig.sanitize_data(body.decode('utf-8', errors='replace'))


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Middleware to capture request context and add request IDs"""

    async def dispatch(self, request: Request, call_next):
        trace_id = str(uuid.uuid4())[:8]
        request_id_var.set(trace_id)
        endpoint_context_var.set('')

        body = None
        if ErrorHandlingConfig.LOG_REQUEST_BODIES and request.method in ("POST", "PUT"):
            body = await request.body()

        request.state.captured_body = body
        request.state.trace_id = trace_id

        try:
            response = await call_next(request)
        except Exception as e:
            # Unhandled errors surface here before ServerErrorMiddleware sees them
            response = await general_exception_handler(request, e)

        # Add trace ID to response headers for client-side debugging
        response.headers["X-Trace-ID"] = trace_id
        return response


def error_response(status_code: int, error: str, message: Any, trace_id: Optional[str] = None, **extra) -> JSONResponse:
    """Build the common JSON error body"""
    content = {"error": error, "message": message}
    content.update(extra)

    if ErrorHandlingConfig.INCLUDE_TRACE_ID and trace_id:
        content["trace_id"] = trace_id
    if ErrorHandlingConfig.INCLUDE_TIMESTAMP:
        content["timestamp"] = utc_now().isoformat()

    return JSONResponse(status_code=status_code, content=jsonable_encoder(content))


# Global Exception Handlers
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle HTTP exceptions with logging"""
    trace_id = StructuredLogger.log_error(
        f"http_{exc.status_code}",
        f"HTTP {exc.status_code}: {exc.detail}",
        request=request,
        exception=exc,
        extra_context={
            "status_code": exc.status_code,
            "request_body": captured_body(request)
        },
        include_traceback=exc.status_code >= 500,
        level=log_level_for(exc.status_code)
    )

    return error_response(exc.status_code, f"HTTP {exc.status_code}", exc.detail, trace_id)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request validation errors as 400 Bad Request"""
    validation_details = []
    for error in exc.errors():
        validation_details.append({
            "field": " -> ".join(str(loc) for loc in error.get("loc", [])),
            "message": error.get("msg", "Unknown validation error"),
            "type": error.get("type", "unknown")
        })

    trace_id = StructuredLogger.log_error(
        "validation_error_400",
        f"Request validation failed: {len(validation_details)} validation errors",
        request=request,
        exception=exc,
        extra_context={
            "validation_errors": validation_details,
            "request_body": captured_body(request)
        },
        include_traceback=False,
        level=logging.WARNING
    )

    return error_response(
        400,
        "Validation Error",
        "Request validation failed",
        trace_id,
        detail=validation_details,
        error_count=len(validation_details)
    )


async def blogpost_error_handler(request: Request, exc: BlogPostError) -> JSONResponse:
    """Handle taxonomy errors that escape the service layer"""
    trace_id = StructuredLogger.log_error(
        exc.error_type.lower(),
        exc.message,
        request=request,
        exception=exc,
        extra_context={"request_body": captured_body(request)},
        include_traceback=exc.status_code >= 500,
        level=log_level_for(exc.status_code)
    )

    # Store failures keep their details in the logs only
    message = exc.message if exc.status_code < 500 else "A storage error occurred"
    return error_response(exc.status_code, exc.error_type, message, trace_id)


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all other exceptions"""
    trace_id = StructuredLogger.log_error(
        "internal_server_error",
        f"Unhandled exception: {str(exc)}",
        request=request,
        exception=exc,
        extra_context={"request_body": captured_body(request)},
        include_traceback=True
    )

    # Build safe response (don't expose internal details)
    return error_response(500, "Internal Server Error", "An unexpected error occurred", trace_id)


def setup_error_handling(app):
    """Setup comprehensive error handling for FastAPI app"""

    # Add middleware for request context
    app.add_middleware(RequestContextMiddleware)

    # Add exception handlers (order matters - most specific first)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(BlogPostError, blogpost_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    logger.info("Centralized error handling system initialized")


# Utility for endpoint-specific logging
def set_endpoint_context(context: str):
    """Set context for current endpoint (call at start of endpoint functions)"""
    endpoint_context_var.set(context)
