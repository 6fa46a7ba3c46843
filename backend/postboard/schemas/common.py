"""
Postboard Backend — Shared Response Schemas
=============================================

What:  Error and health payloads used across route groups.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    What:  The one error format every failing request ends in.
    Who:   Built by error_handlers.py; referenced in route `responses=` for docs.

    Example:
        {
            "error": "not_found",
            "message": "post with ID '3f2a...' was not found",
            "status_code": 404,
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    status_code: int = Field(description="HTTP status of the response")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Liveness payload: the process is up."""
    status: str = Field(default="OK")


class ReadinessResponse(BaseModel):
    """Readiness payload: the process is up and the database answers."""
    status: str = Field(description="OK or UNAVAILABLE")
    database: str = Field(description="connected or disconnected")
