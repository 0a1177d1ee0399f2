"""
Authentication schemas.

Registration and login bodies, plus the user and token envelopes the
auth endpoints return.
"""

import uuid
from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, EmailStr, Field, StringConstraints, field_validator


class RegisterRequest(BaseModel):
    """User registration request schema."""

    model_config = ConfigDict(
        strict=True,
        json_schema_extra={
            "example": {
                "name": "Ada Lovelace",
                "email": "ada@example.com",
                "password": "analytical",
            }
        },
    )

    name: Annotated[str, StringConstraints(strip_whitespace=True)] = Field(
        min_length=1, max_length=50, description="Display name"
    )
    email: EmailStr = Field(description="Unique email address")
    password: str = Field(min_length=6, description="User password")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        return v.lower()


class LoginRequest(BaseModel):
    """User login request schema."""

    model_config = ConfigDict(
        strict=True,
        json_schema_extra={"example": {"email": "ada@example.com", "password": "analytical"}},
    )

    email: EmailStr = Field(description="Account email")
    password: str = Field(min_length=1, description="User password")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        return v.lower()


class UserResponse(BaseModel):
    """Public user information."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: uuid.UUID
    name: str
    email: str
    created_at: datetime = Field(alias="createdAt")


class AuthResponse(BaseModel):
    """Token issued on register/login."""

    message: str
    token: str = Field(description="Bearer session token")
    user: UserResponse


class ProfileResponse(BaseModel):
    user: UserResponse
