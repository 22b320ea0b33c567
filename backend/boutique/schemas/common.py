"""
Boutique Backend — Shared Response Schemas
===========================================

What:  Envelope models shared by every route: confirmations, errors, health.
"""

from typing import Optional

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """
    Confirmation returned by mutating endpoints.

    Creation endpoints also return the id assigned by the store.
    """
    message: str = Field(description="Human-readable confirmation")
    id: Optional[int] = Field(default=None, description="Id of the created resource")


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "auth_error",
            "message": "Invalid token.",
            "details": null,
            "request_id": "1a2b3c4d"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
