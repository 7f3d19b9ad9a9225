"""
API response models shared across routers.

The error response always carries a string ``error`` so clients of the
geocode proxy can rely on the ``{error: string}`` shape.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, Dict, Any
from datetime import datetime, timezone
import uuid


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class HealthCheckResponse(BaseModel):
    """Response model for the health check endpoint"""
    status: str = Field(description="Overall system status: healthy, degraded, unhealthy")
    version: str = Field(description="API version")
    active_sessions: int = Field(ge=0, description="Open viewer sessions")
    timestamp: datetime = Field(default_factory=_utcnow)

    @field_validator('status')
    @classmethod
    def validate_status(cls, v):
        valid_statuses = {"healthy", "degraded", "unhealthy"}
        if v not in valid_statuses:
            raise ValueError(f"status must be one of: {valid_statuses}")
        return v


class StandardErrorResponse(BaseModel):
    """Standardized error response format"""
    error: str
    error_code: str
    details: Optional[Dict[str, Any]] = None
    request_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime = Field(default_factory=_utcnow)

    @field_validator('error_code')
    @classmethod
    def validate_error_code(cls, v):
        if not v or not v.isupper():
            raise ValueError("error_code must be a non-empty uppercase string")
        return v
