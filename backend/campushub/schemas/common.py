"""Shared response envelopes: status, errors, health."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for API models: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StatusResponse(BaseModel):
    status: str = Field(default="success", description="'success' or 'error'")
    message: Optional[str] = Field(default=None, description="Human-readable message")


class ErrorResponse(BaseModel):
    """
    Body of every error response.

    Example:
        {
            "status": "error",
            "error": "auth_failed",
            "message": "Invalid username or password",
            "request_id": "a1b2c3d4"
        }
    """

    status: str = Field(default="error")
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Client-safe error description")
    details: Optional[List[str]] = Field(default=None, description="Offending request fields")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="healthy or unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="connected or disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
