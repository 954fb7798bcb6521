"""
Error envelopes and request middleware for the Job Tracker AI API.

Every failure leaves the API as::

    {"success": false, "timestamp": ..., "request_id": ..., "status_code": ..., "message": ..., ...}
"""
import time
import uuid
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from app.utils.exceptions import JobTrackerBaseException, map_to_http_exception
from app.utils.logging_config import get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def create_error_response(request_id: str, status_code: int, detail: Any) -> JSONResponse:
    if isinstance(detail, str):
        detail = {"message": detail}
    elif not isinstance(detail, dict):
        detail = {"message": str(detail)}

    body = {
        "success": False,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "request_id": request_id,
        "status_code": status_code,
        **detail,
    }
    return JSONResponse(status_code=status_code, content=body, headers={REQUEST_ID_HEADER: request_id})


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", None) or str(uuid.uuid4())


def _context(request: Request, **extra) -> Dict[str, Any]:
    return {"request_id": _request_id(request), "method": request.method, "path": request.url.path, **extra}


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.detail}", extra=_context(request))
    return create_error_response(_request_id(request), exc.status_code, exc.detail)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = jsonable_encoder(exc.errors())
    logger.warning(f"Malformed request to {request.url.path}: {len(errors)} error(s)", extra=_context(request))
    return create_error_response(
        _request_id(request),
        422,
        {"error": "Validation failed", "message": "Request data validation failed", "validation_errors": errors},
    )


async def app_exception_handler(request: Request, exc: JobTrackerBaseException) -> JSONResponse:
    http_exc = map_to_http_exception(exc)
    log = logger.warning if http_exc.status_code < 500 else logger.error
    log(
        f"{exc.__class__.__name__} in {request.method} {request.url.path}: {exc.message}",
        extra=_context(request, error_code=exc.error_code),
    )
    return create_error_response(_request_id(request), http_exc.status_code, http_exc.detail)


def register_exception_handlers(app: FastAPI) -> None:
    """Route HTTP, request-validation and application errors through the shared envelope."""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(JobTrackerBaseException, app_exception_handler)


class ExceptionHandlerMiddleware(BaseHTTPMiddleware):
    """Assigns the request ID and converts anything that escapes the app into a 500 envelope."""

    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        try:
            response = await call_next(request)
        except JobTrackerBaseException as exc:
            return await app_exception_handler(request, exc)
        except Exception as exc:
            logger.error(
                f"Unhandled {exc.__class__.__name__} in {request.method} {request.url.path}: {exc}",
                extra=_context(request),
                exc_info=True,
            )
            # internals stay in the log
            return create_error_response(
                request_id,
                500,
                {"error": "Internal server error", "message": "An unexpected error occurred. Please try again later."},
            )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each request line and its outcome."""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        logger.debug(
            f"{request.method} {request.url}",
            extra=_context(
                request,
                content_type=request.headers.get("content-type", ""),
                content_length=request.headers.get("content-length", "0"),
                client_ip=request.client.host if request.client else "unknown",
            ),
        )

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                f"{request.method} {request.url.path} raised after {time.perf_counter() - started:.3f}s: {exc}",
                extra=_context(request),
            )
            raise

        logger.info(
            f"{request.method} {request.url.path} - {response.status_code} in {time.perf_counter() - started:.3f}s",
            extra=_context(request, status_code=response.status_code),
        )
        return response


class PerformanceMiddleware(BaseHTTPMiddleware):
    """Adds X-Processing-Time and warns about slow requests (PDF parsing and model calls dominate)."""

    def __init__(self, app, slow_request_threshold: float = 2.0):
        super().__init__(app)
        self.slow_request_threshold = slow_request_threshold

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - started

        if elapsed > self.slow_request_threshold:
            logger.warning(
                f"Slow request: {request.method} {request.url.path} took {elapsed:.3f}s",
                extra=_context(request, processing_time=elapsed, threshold=self.slow_request_threshold),
            )

        response.headers["X-Processing-Time"] = f"{elapsed:.3f}"
        return response
