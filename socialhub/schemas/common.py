"""
SocialHub Backend - Shared Response Schemas
=============================================

What:  Error envelope and health check models used across all routes.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class FieldError(BaseModel):
    """A single rejected input field."""
    field: str = Field(description="Name of the offending field")
    message: str = Field(description="What is wrong with it")
    location: str = Field(default="body", description="body, path, query or header")


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Fields:
        error: Machine-readable error code (e.g., "validation_error", "not_found")
        message: Human-readable description for display to users
        errors: Per-field violations (validation failures only)
        request_id: Correlation ID for tracing this error in server logs

    Example:
        {
            "error": "conflict",
            "message": "Post already liked",
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    errors: Optional[List[FieldError]] = Field(default=None, description="Field violations")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and load balancer checks."""
    status: str = Field(description="Overall service status: healthy or unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
