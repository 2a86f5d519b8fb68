"""
Inkpost Backend — User & Auth Schemas
======================================

What:  Request/response bodies for /register, /login and /profile.
"""

import uuid

from pydantic import BaseModel, Field


class CredentialsRequest(BaseModel):
    """JSON body shared by POST /register and POST /login."""
    username: str = Field(description="Login name (at least 4 characters on registration)")
    password: str = Field(description="Plaintext password; hashed before storage, never echoed")


class UserResponse(BaseModel):
    """
    Public user record returned by /register and /login.

    Has no password field; the stored hash never leaves the server.
    """
    id: uuid.UUID
    username: str

    model_config = {"from_attributes": True}


class ProfileResponse(BaseModel):
    """Identity embedded in the verified token cookie."""
    id: uuid.UUID
    username: str
