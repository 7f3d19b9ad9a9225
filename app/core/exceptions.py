"""
Custom exceptions for the map explorer backend.
"""

from typing import Optional, Dict, Any
from enum import Enum


class ErrorCode(str, Enum):
    """Standardized error codes for the application."""

    # Input errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    NOT_FOUND = "NOT_FOUND"

    # Collaborator errors
    UPSTREAM_ERROR = "UPSTREAM_ERROR"

    # Generic errors
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class MapExplorerException(Exception):
    """Base exception for the map explorer backend."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code


class ValidationError(MapExplorerException):
    """Raised when required input is missing or empty, before any network call."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.VALIDATION_ERROR,
            details=details,
            status_code=400
        )


class UpstreamError(MapExplorerException):
    """
    Raised when a collaborator call fails: network error, non-success status
    or an undecodable body.

    ``service`` names the collaborator; the underlying cause is kept on the
    exception for logging and is never part of the response body.
    """

    def __init__(
        self,
        service: str,
        message: str = "Failed to fetch upstream data",
        status_code_upstream: Optional[int] = None,
        cause: Optional[BaseException] = None
    ):
        details = {"service": service}
        if status_code_upstream is not None:
            details["upstream_status"] = status_code_upstream
        super().__init__(
            message=message,
            error_code=ErrorCode.UPSTREAM_ERROR,
            details=details,
            status_code=500
        )
        self.service = service
        self.upstream_status = status_code_upstream
        self.cause = cause


class SessionNotFoundError(MapExplorerException):
    """Raised when a viewer session id is unknown or already closed."""

    def __init__(self, session_id: str):
        super().__init__(
            message=f"Viewer session '{session_id}' not found",
            error_code=ErrorCode.SESSION_NOT_FOUND,
            details={"session_id": session_id},
            status_code=404
        )
