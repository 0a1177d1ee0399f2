"""
Service interfaces for the Notekeeper application.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict
from uuid import UUID

from ..schemas.auth import AuthResponse, LoginRequest, ProfileResponse, RegisterRequest
from ..schemas.common import HealthCheckResponse
from ..schemas.notes import (
    NoteCreate,
    NoteFilter,
    NoteListResponse,
    NoteResponse,
    NoteUpdate,
)


class IAuthService(ABC):
    """Auth service for user management."""

    @abstractmethod
    async def register_user(self, request: RegisterRequest) -> AuthResponse:
        """Register new user and issue a session token."""
        pass

    @abstractmethod
    async def authenticate_user(self, request: LoginRequest) -> AuthResponse:
        """Login user and issue a session token."""
        pass

    @abstractmethod
    async def get_profile(self, user_id: UUID) -> ProfileResponse:
        """Get the authenticated user's profile."""
        pass


class INoteService(ABC):
    """Owner-scoped note operations."""

    @abstractmethod
    async def create_note(self, user_id: UUID, request: NoteCreate) -> NoteResponse:
        pass

    @abstractmethod
    async def get_note(self, note_id: str, user_id: UUID) -> NoteResponse:
        pass

    @abstractmethod
    async def update_note(self, note_id: str, user_id: UUID, request: NoteUpdate) -> NoteResponse:
        pass

    @abstractmethod
    async def delete_note(self, note_id: str, user_id: UUID) -> None:
        pass

    @abstractmethod
    async def list_user_notes(
        self, user_id: UUID, filters: NoteFilter, page: int, per_page: int
    ) -> NoteListResponse:
        pass

    @abstractmethod
    async def search_notes(
        self, user_id: UUID, query: str, filters: NoteFilter, page: int, per_page: int
    ) -> NoteListResponse:
        pass

    @abstractmethod
    async def get_folders(self, user_id: UUID) -> list[str]:
        pass

    @abstractmethod
    async def get_available_tags(self, user_id: UUID) -> list[str]:
        pass


class IHealthService(ABC):
    """Service for health monitoring."""

    @abstractmethod
    async def get_health_status(self) -> HealthCheckResponse:
        """Get overall system health."""
        pass

    @abstractmethod
    async def check_database_health(self) -> Dict[str, Any]:
        """Check database connectivity."""
        pass
