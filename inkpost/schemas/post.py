"""
Inkpost Backend — Post Schemas
===============================

What:  Pydantic models defining the post API contract.
How:   FastAPI serializes ORM objects through these models (from_attributes),
       so only the listed fields ever leave the server. The nested author is
       reduced to its username; password hashes cannot leak through here.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class AuthorResponse(BaseModel):
    """Public view of a post's author: the username and nothing else."""
    username: str = Field(description="Author's username")

    model_config = {"from_attributes": True}


class PostResponse(BaseModel):
    """
    What:  Full representation of a post.
    Who:   Returned by POST /post, PUT /post, GET /post and GET /post/{id}.
    """
    id: uuid.UUID = Field(description="Unique post identifier (UUID)")
    title: str
    summary: str
    content: str
    cover: str = Field(description="Relative path of the cover image, servable at '/' + cover")
    author: AuthorResponse
    created_at: datetime = Field(description="When the post was created (UTC)")
    updated_at: datetime = Field(description="When the post was last edited (UTC)")

    model_config = {"from_attributes": True}

    @field_validator("created_at", "updated_at")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        # SQLite hands timestamps back without a zone; they were written as UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "not_author",
            "message": "you are not the author",
            "request_id": "1a2b3c4d"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and dependency status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
