"""
Pydantic schemas for validating and documenting API requests and responses.
"""

from .auth import AuthResponse, LoginRequest, ProfileResponse, RegisterRequest, UserResponse
from .common import ErrorResponse, FieldError, HealthCheckResponse, MessageResponse, PaginationInfo
from .notes import (
    FoldersResponse,
    NoteCreate,
    NoteEnvelope,
    NoteFilter,
    NoteListResponse,
    NoteMessageEnvelope,
    NoteResponse,
    NoteUpdate,
    TagsResponse,
)

__all__ = [
    # Auth schemas
    "RegisterRequest",
    "LoginRequest",
    "UserResponse",
    "AuthResponse",
    "ProfileResponse",
    # Note schemas
    "NoteCreate",
    "NoteUpdate",
    "NoteResponse",
    "NoteEnvelope",
    "NoteMessageEnvelope",
    "NoteListResponse",
    "NoteFilter",
    "FoldersResponse",
    "TagsResponse",
    # Common schemas
    "PaginationInfo",
    "ErrorResponse",
    "FieldError",
    "MessageResponse",
    "HealthCheckResponse",
]
