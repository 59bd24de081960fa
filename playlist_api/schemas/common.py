"""
Playlist API: Shared Response Schemas
========================================

What:  Error envelope and health check payloads shared across routers.
       Also the id range accepted in bodies and paths.
"""

from typing import Optional

from pydantic import BaseModel, Field

# Ids are stored as a 64-bit signed INTEGER / BIGINT
ID_MIN = -(2**63)
ID_MAX = 2**63 - 1


class ErrorResponse(BaseModel):
    """
    Standardized error body for non-404 application errors.

    Example:
        {
            "error": "conflict",
            "message": "song with ID '1' already exists",
            "request_id": "a1b2c3d4"
        }

    404 responses carry no body at all.
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
