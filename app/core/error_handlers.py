"""
Exception handlers for the FastAPI application.

Every error body is a StandardErrorResponse: a human-readable ``error``
string, an ``error_code``, optional ``details`` and the ``request_id``
assigned by RequestContextMiddleware. Causes of upstream failures are logged
here and never returned to the caller.
"""

from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import time
from typing import Dict, Any, Optional

from app.core.exceptions import (
    MapExplorerException,
    ErrorCode,
    UpstreamError,
)
from app.models.api_models import StandardErrorResponse

logger = logging.getLogger(__name__)

# Logged as a warning each time a code's count reaches a multiple of this
ERROR_BURST_SIZE = 10

_STATUS_CODES = {
    400: ErrorCode.VALIDATION_ERROR,
    404: ErrorCode.NOT_FOUND,
    405: ErrorCode.VALIDATION_ERROR,
    422: ErrorCode.VALIDATION_ERROR,
}


def _request_id(request: Request) -> str:
    return getattr(request.state, 'request_id', 'unknown')


class ErrorHandler:
    """Turns exceptions into error responses and counts them per error code."""

    def __init__(self):
        self.error_counts: Dict[str, int] = {}
        self.last_error_time: Dict[str, float] = {}

    async def handle_map_explorer_exception(
        self,
        request: Request,
        exc: MapExplorerException
    ) -> JSONResponse:
        request_id = _request_id(request)
        log = logger.warning if exc.status_code < 500 else logger.error
        log(
            f"{request.method} {request.url.path} failed: {exc.message}",
            extra={
                'request_id': request_id,
                'error_code': exc.error_code.value,
                'status_code': exc.status_code,
                'details': exc.details,
            }
        )
        self._track_error(exc.error_code.value)
        return self._create_error_response(
            error_code=exc.error_code.value,
            message=exc.message,
            details=exc.details or None,
            request_id=request_id,
            status_code=exc.status_code
        )

    async def handle_upstream_error(
        self,
        request: Request,
        exc: UpstreamError
    ) -> JSONResponse:
        """
        Log the collaborator failure with its cause; answer with the generic
        message only. No details are returned so upstream hosts, statuses
        and bodies stay server-side.
        """
        request_id = _request_id(request)
        logger.error(
            f"Upstream {exc.service} failed during {request.method} {request.url.path}: {exc.cause!r}",
            exc_info=exc.cause,
            extra={
                'request_id': request_id,
                'service': exc.service,
                'upstream_status': exc.upstream_status,
            }
        )
        self._track_error(exc.error_code.value)
        return self._create_error_response(
            error_code=exc.error_code.value,
            message=exc.message,
            request_id=request_id,
            status_code=exc.status_code
        )

    async def handle_validation_error(
        self,
        request: Request,
        exc: RequestValidationError
    ) -> JSONResponse:
        """Report each rejected field as ``{field, message, type}``."""
        request_id = _request_id(request)
        validation_errors = [
            {
                'field': '.'.join(str(loc) for loc in error['loc']),
                'message': error['msg'],
                'type': error['type'],
            }
            for error in exc.errors()
        ]
        logger.warning(
            f"Rejected {request.method} {request.url.path}: {len(validation_errors)} invalid field(s)",
            extra={'request_id': request_id, 'validation_errors': validation_errors}
        )
        self._track_error(ErrorCode.VALIDATION_ERROR.value)
        return self._create_error_response(
            error_code=ErrorCode.VALIDATION_ERROR.value,
            message="Request validation failed",
            details={'validation_errors': validation_errors},
            request_id=request_id,
            status_code=422
        )

    async def handle_http_exception(
        self,
        request: Request,
        exc: StarletteHTTPException
    ) -> JSONResponse:
        request_id = _request_id(request)
        error_code = _STATUS_CODES.get(exc.status_code, ErrorCode.INTERNAL_SERVER_ERROR)
        logger.info(
            f"{request.method} {request.url.path} -> {exc.status_code}: {exc.detail}",
            extra={'request_id': request_id, 'status_code': exc.status_code}
        )
        return self._create_error_response(
            error_code=error_code.value,
            message=str(exc.detail),
            request_id=request_id,
            status_code=exc.status_code
        )

    async def handle_generic_exception(
        self,
        request: Request,
        exc: Exception
    ) -> JSONResponse:
        request_id = _request_id(request)
        logger.error(
            f"Unhandled {type(exc).__name__} in {request.method} {request.url.path}: {exc}",
            exc_info=exc,
            extra={'request_id': request_id}
        )
        self._track_error(ErrorCode.INTERNAL_SERVER_ERROR.value)
        return self._create_error_response(
            error_code=ErrorCode.INTERNAL_SERVER_ERROR.value,
            message="An internal server error occurred",
            request_id=request_id,
            status_code=500
        )

    def _create_error_response(
        self,
        error_code: str,
        message: str,
        request_id: str,
        status_code: int,
        details: Optional[Dict[str, Any]] = None
    ) -> JSONResponse:
        body = StandardErrorResponse(
            error=message,
            error_code=error_code,
            details=details,
            request_id=request_id,
        )
        return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))

    def _track_error(self, error_code: str) -> None:
        count = self.error_counts.get(error_code, 0) + 1
        self.error_counts[error_code] = count
        self.last_error_time[error_code] = time.time()
        if count % ERROR_BURST_SIZE == 0:
            logger.warning(f"{error_code} has occurred {count} times")

    def get_error_statistics(self) -> Dict[str, Any]:
        """Error counts overall and for codes seen within the last hour."""
        cutoff = time.time() - 3600
        return {
            'error_counts': dict(self.error_counts),
            'recent_errors': {
                code: count for code, count in self.error_counts.items()
                if self.last_error_time.get(code, 0) >= cutoff
            },
            'total_errors': sum(self.error_counts.values())
        }


error_handler = ErrorHandler()


def setup_error_handlers(app):
    """Register the handlers, most specific exception type first."""

    @app.exception_handler(UpstreamError)
    async def upstream_error_handler(request: Request, exc: UpstreamError):
        return await error_handler.handle_upstream_error(request, exc)

    @app.exception_handler(MapExplorerException)
    async def map_explorer_exception_handler(request: Request, exc: MapExplorerException):
        return await error_handler.handle_map_explorer_exception(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return await error_handler.handle_validation_error(request, exc)

    @app.exception_handler(HTTPException)
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return await error_handler.handle_http_exception(request, exc)

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        return await error_handler.handle_generic_exception(request, exc)
