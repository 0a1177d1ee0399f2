"""Note service implementation."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ...config import get_settings
from ..exceptions import InvalidInputError, NotFoundError
from ..logging import get_logger
from ..models.note import Note
from ..repositories.note_repository import NoteRepository, parse_search_terms
from ..schemas.common import PaginationInfo
from ..schemas.notes import NoteCreate, NoteFilter, NoteListResponse, NoteResponse, NoteUpdate
from .interfaces import INoteService

logger = get_logger("notes")


def parse_note_id(note_id: str) -> Optional[UUID]:
    """Parse a path id; anything that is not a UUID cannot name a note."""
    try:
        return UUID(str(note_id))
    except ValueError:
        return None


class NoteService(INoteService):
    """Note service implementation."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.note_repo = NoteRepository(session)
        self.settings = get_settings()

    async def create_note(self, user_id: UUID, request: NoteCreate) -> NoteResponse:
        """Create new note."""
        note_data = {
            "title": request.title,
            "content": request.content,
            "tags": request.tags,
            "folder": request.folder or None,
            "is_pinned": request.is_pinned,
        }
        note = await self.note_repo.create_note(user_id, note_data)
        logger.info("Note created", extra={"note_id": str(note.id), "user_id": str(user_id)})
        return self._note_to_response(note)

    async def get_note(self, note_id: str, user_id: UUID) -> NoteResponse:
        """Get note by ID; notes of other users are reported as missing."""
        note = await self._get_owned(note_id, user_id)
        return self._note_to_response(note)

    async def update_note(self, note_id: str, user_id: UUID, request: NoteUpdate) -> NoteResponse:
        """Apply the fields present in the request to the note."""
        parsed_id = parse_note_id(note_id)
        if parsed_id is None:
            raise NotFoundError("Note")

        update_data = request.changes()
        if "folder" in update_data:
            update_data["folder"] = update_data["folder"] or None

        note = await self.note_repo.update_note(parsed_id, user_id, update_data)
        if not note:
            raise NotFoundError("Note")

        logger.info("Note updated", extra={"note_id": str(parsed_id), "fields": sorted(update_data)})
        return self._note_to_response(note)

    async def delete_note(self, note_id: str, user_id: UUID) -> None:
        """Delete note."""
        parsed_id = parse_note_id(note_id)
        if parsed_id is None or not await self.note_repo.delete_note(parsed_id, user_id):
            raise NotFoundError("Note")

    async def list_user_notes(
        self,
        user_id: UUID,
        filters: Optional[NoteFilter] = None,
        page: int = 1,
        per_page: Optional[int] = None,
    ) -> NoteListResponse:
        """List user notes with pagination."""
        page, per_page = self._page_bounds(page, per_page)
        notes, total_count = await self.note_repo.list_user_notes(
            user_id, filters or NoteFilter(), page, per_page
        )
        return self._build_page(notes, total_count, page, per_page)

    async def search_notes(
        self,
        user_id: UUID,
        query: Optional[str],
        filters: Optional[NoteFilter] = None,
        page: int = 1,
        per_page: Optional[int] = None,
    ) -> NoteListResponse:
        """Full-text search over the user's notes."""
        if not parse_search_terms(query):
            raise InvalidInputError(
                "Search query is required",
                [{"field": "query", "message": "Search query is required"}],
            )

        page, per_page = self._page_bounds(page, per_page)
        notes, total_count = await self.note_repo.search_notes(
            user_id, query, filters or NoteFilter(), page, per_page
        )
        return self._build_page(notes, total_count, page, per_page)

    async def get_folders(self, user_id: UUID) -> List[str]:
        """Get the folder names in use."""
        return await self.note_repo.get_user_folders(user_id)

    async def get_available_tags(self, user_id: UUID) -> List[str]:
        """Get all user tags."""
        return await self.note_repo.get_user_tags(user_id)

    async def _get_owned(self, note_id: str, user_id: UUID) -> Note:
        parsed_id = parse_note_id(note_id)
        note = await self.note_repo.get_by_id_and_user(parsed_id, user_id) if parsed_id else None
        if not note:
            raise NotFoundError("Note")
        return note

    def _page_bounds(self, page: int, per_page: Optional[int]) -> tuple[int, int]:
        if page < 1:
            page = 1
        if per_page is None or per_page < 1:
            per_page = self.settings.default_page_size
        return page, min(per_page, self.settings.max_page_size)

    def _build_page(self, notes: List[Note], total: int, page: int, per_page: int) -> NoteListResponse:
        return NoteListResponse(
            notes=[self._note_to_response(note) for note in notes],
            pagination=PaginationInfo.create(total=total, page=page, per_page=per_page),
        )

    def _note_to_response(self, note: Note) -> NoteResponse:
        """Convert note model to response."""
        return NoteResponse.model_validate(note)
