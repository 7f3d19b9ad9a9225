"""
Core infrastructure for the map explorer backend: exceptions, error
handlers, logging setup and dependency providers.
"""

from .exceptions import (
    ErrorCode,
    MapExplorerException,
    ValidationError,
    UpstreamError,
    SessionNotFoundError,
)

__all__ = [
    "ErrorCode",
    "MapExplorerException",
    "ValidationError",
    "UpstreamError",
    "SessionNotFoundError",
]
