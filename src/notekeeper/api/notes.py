"""Notes API endpoints."""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import get_settings
from ..core.schemas.common import ErrorResponse, MessageResponse
from ..core.schemas.notes import (
    FoldersResponse,
    NoteCreate,
    NoteEnvelope,
    NoteFilter,
    NoteListResponse,
    NoteMessageEnvelope,
    NoteUpdate,
    TagsResponse,
)
from ..core.services import NoteService
from ..database import get_db_session
from ..middleware.auth import get_current_user_id

router = APIRouter(
    prefix="/notes",
    tags=["notes"],
    responses={
        400: {"model": ErrorResponse, "description": "Validation failed"},
        401: {"model": ErrorResponse, "description": "Missing or invalid token"},
        404: {"model": ErrorResponse, "description": "Note not found"},
    },
)

settings = get_settings()


def note_filter(
    folder: Optional[str] = Query(None, description="Exact folder name"),
    tags: Optional[List[str]] = Query(None, description="Any of these tags; repeat or comma separate"),
    is_pinned: Optional[bool] = Query(None, alias="isPinned"),
) -> NoteFilter:
    return NoteFilter.from_query(folder=folder, tags=tags, is_pinned=is_pinned)


@router.post("", response_model=NoteMessageEnvelope, status_code=status.HTTP_201_CREATED)
async def create_note(
    request: NoteCreate,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Create a new note."""
    note_service = NoteService(session)
    note = await note_service.create_note(current_user_id, request)
    return NoteMessageEnvelope(message="Note created successfully", note=note)


@router.get("", response_model=NoteListResponse)
async def list_notes(
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1, le=settings.max_page_size),
    filters: NoteFilter = Depends(note_filter),
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """List user notes, pinned first, with optional folder/tag/pin filters."""
    note_service = NoteService(session)
    return await note_service.list_user_notes(current_user_id, filters, page, limit)


@router.get("/search", response_model=NoteListResponse)
async def search_notes(
    query: Optional[str] = Query(None, description="Search text"),
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1, le=settings.max_page_size),
    filters: NoteFilter = Depends(note_filter),
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Search notes by title, content and tags."""
    note_service = NoteService(session)
    return await note_service.search_notes(current_user_id, query, filters, page, limit)


@router.get("/folders", response_model=FoldersResponse)
async def get_folders(
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Get the folder names used by the user's notes."""
    note_service = NoteService(session)
    return FoldersResponse(folders=await note_service.get_folders(current_user_id))


@router.get("/tags", response_model=TagsResponse)
async def get_available_tags(
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Get all tags used by the user's notes."""
    note_service = NoteService(session)
    return TagsResponse(tags=await note_service.get_available_tags(current_user_id))


@router.get("/{note_id}", response_model=NoteEnvelope)
async def get_note(
    note_id: str,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Get a specific note."""
    note_service = NoteService(session)
    return NoteEnvelope(note=await note_service.get_note(note_id, current_user_id))


@router.put("/{note_id}", response_model=NoteMessageEnvelope)
async def update_note(
    note_id: str,
    request: NoteUpdate,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Update a note."""
    note_service = NoteService(session)
    note = await note_service.update_note(note_id, current_user_id, request)
    return NoteMessageEnvelope(message="Note updated successfully", note=note)


@router.delete("/{note_id}", response_model=MessageResponse)
async def delete_note(
    note_id: str,
    current_user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Delete a note."""
    note_service = NoteService(session)
    await note_service.delete_note(note_id, current_user_id)
    return MessageResponse(message="Note deleted successfully")
