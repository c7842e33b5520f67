"""
Custom middleware for request processing
"""
import time
import uuid
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse
import structlog

from app.core.exceptions import TalentTrackException

logger = structlog.get_logger()

CORRELATION_HEADER = "X-Correlation-ID"


def error_response(exc: TalentTrackException) -> JSONResponse:
    """Render an application exception as the standard error envelope"""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": {
                "message": exc.message,
                "details": exc.details,
                "type": exc.__class__.__name__,
            }
        },
    )


class CorrelationIDMiddleware(BaseHTTPMiddleware):
    """Bind a correlation ID to the logging context of every request"""

    async def dispatch(self, request: Request, call_next):
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(correlation_id=correlation_id)

        response = await call_next(request)
        response.headers[CORRELATION_HEADER] = correlation_id
        return response


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log request start, completion and failure with timings"""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        logger.info("request_started", method=request.method, path=request.url.path)

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "request_failed",
                method=request.method,
                path=request.url.path,
                error=str(e),
                process_time=time.perf_counter() - started,
            )
            raise

        process_time = time.perf_counter() - started
        logger.info(
            "request_completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            process_time=process_time,
        )
        response.headers["X-Process-Time"] = f"{process_time:.6f}"
        return response


class ExceptionHandlerMiddleware(BaseHTTPMiddleware):
    """Turn anything that escapes the routers into a JSON error"""

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except TalentTrackException as e:
            return error_response(e)
        except Exception as e:
            logger.exception("unhandled_exception", error=str(e))
            return JSONResponse(
                status_code=500,
                content={
                    "error": {
                        "message": "Internal server error",
                        "type": "InternalServerError",
                    }
                },
            )
