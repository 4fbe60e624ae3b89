"""API middleware for logging, error handling and security headers."""
import time
import uuid
from typing import Callable

from fastapi import HTTPException, Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from ..core.exceptions import AuthenticationError, AuthorizationError, BaseAPIException
from ..core.logging import RequestLogger, SecurityLogger


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging requests and responses."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        # Generate request ID
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        # Log request
        start_time = time.time()
        RequestLogger.log_request(
            method=request.method,
            path=str(request.url.path),
            request_id=request_id,
            extra_data={
                "query_params": dict(request.query_params),
                "client_ip": request.client.host if request.client else None,
                "user_agent": request.headers.get("user-agent")
            }
        )

        # Process request
        response = await call_next(request)

        # Calculate response time
        response_time_ms = (time.time() - start_time) * 1000

        # Set by the auth dependency once the bearer token checks out
        user_id = getattr(request.state, "user_id", None)

        RequestLogger.log_response(
            method=request.method,
            path=str(request.url.path),
            status_code=response.status_code,
            response_time_ms=response_time_ms,
            user_id=user_id,
            request_id=request_id
        )

        # Add request ID to response headers
        response.headers["X-Request-ID"] = request_id

        return response


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Middleware for handling exceptions and returning appropriate responses."""

    def __init__(self, app, debug: bool = False):
        super().__init__(app)
        self.debug = debug

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)

        except BaseAPIException as e:
            self._log(request, e)
            return JSONResponse(
                status_code=e.status_code,
                content={
                    "error": e.message,
                    "error_code": e.error_code,
                    "details": e.details,
                    "timestamp": time.time()
                }
            )

        except HTTPException as e:
            # Handle FastAPI HTTP exceptions
            return JSONResponse(
                status_code=e.status_code,
                content={
                    "error": e.detail,
                    "error_code": "HTTP_EXCEPTION",
                    "timestamp": time.time()
                }
            )

        except Exception as e:
            RequestLogger.log_error(
                method=request.method,
                path=str(request.url.path),
                status_code=500,
                error_code="INTERNAL_ERROR",
                message=str(e),
                request_id=getattr(request.state, "request_id", None),
                exc_info=True,
            )
            return JSONResponse(
                status_code=500,
                content={
                    "error": "Internal server error",
                    "error_code": "INTERNAL_ERROR",
                    "details": {"message": str(e)} if self.debug else {},
                    "timestamp": time.time()
                }
            )

    @staticmethod
    def _log(request: Request, error: BaseAPIException) -> None:
        if isinstance(error, (AuthenticationError, AuthorizationError)):
            SecurityLogger.log_unauthorized_access(
                path=str(request.url.path),
                method=request.method,
                ip_address=request.client.host if request.client else None,
                user_agent=request.headers.get("user-agent"),
                reason=error.message,
            )
            return

        RequestLogger.log_error(
            method=request.method,
            path=str(request.url.path),
            status_code=error.status_code,
            error_code=error.error_code,
            message=error.message,
            request_id=getattr(request.state, "request_id", None),
        )


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to responses."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        # Add security headers
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        return response
