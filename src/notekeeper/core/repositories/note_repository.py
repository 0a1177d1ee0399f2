"""Note repository for database operations.

Every statement built here is scoped by the owner's id; that filter is the
only access control notes have.
"""

import logging
import re
from functools import reduce
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import case, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.note import Note, NoteTag
from ..schemas.notes import NoteFilter

logger = logging.getLogger(__name__)

# relevance weights per matched term
TITLE_WEIGHT = 3
TAG_WEIGHT = 2
CONTENT_WEIGHT = 1

_TERM_PATTERN = re.compile(r'"([^"]+)"|([^\s"]+)')


def parse_search_terms(query: Optional[str]) -> List[str]:
    """Split a search string into lowercase terms; quoted phrases stay whole."""
    terms: List[str] = []
    for phrase, word in _TERM_PATTERN.findall(query or ""):
        term = (phrase or word).strip().lower()
        if term and term not in terms:
            terms.append(term)
    return terms


class NoteRepository:
    """Repository for note database operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_note(self, owner_id: UUID, note_data: Dict[str, Any]) -> Note:
        """Create new note."""
        data = dict(note_data)
        tags = data.pop("tags", None) or []
        data.setdefault("is_pinned", False)

        note = Note(owner_id=owner_id, **data)
        note.set_tags(tags)
        self.session.add(note)
        await self.session.commit()

        created = await self.get_by_id_and_user(note.id, owner_id)
        logger.debug("Created note %s for user %s", note.id, owner_id)
        return created

    async def get_by_id_and_user(self, note_id: UUID, user_id: UUID) -> Optional[Note]:
        """Get note by ID if owned by user."""
        stmt = (
            select(Note)
            .where(Note.id == note_id, Note.owner_id == user_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def update_note(self, note_id: UUID, user_id: UUID, update_data: Dict[str, Any]) -> Optional[Note]:
        """Merge the supplied fields into the note if owned by user."""
        note = await self.get_by_id_and_user(note_id, user_id)
        if not note:
            return None

        for key, value in update_data.items():
            if key == "tags":
                note.set_tags(value or [])
            else:
                setattr(note, key, value)

        # tag-only edits don't touch the notes row, so bump explicitly
        note.touch()

        await self.session.commit()
        return note

    async def delete_note(self, note_id: UUID, user_id: UUID) -> bool:
        """Delete note if owned by user."""
        note = await self.get_by_id_and_user(note_id, user_id)
        if not note:
            logger.warning("Note %s not found or not owned by user %s", note_id, user_id)
            return False

        await self.session.delete(note)
        await self.session.commit()
        logger.info("Deleted note %s", note_id)
        return True

    def _filter_conditions(self, user_id: UUID, filters: Optional[NoteFilter]) -> list:
        conditions = [Note.owner_id == user_id]
        if filters is None:
            return conditions

        if filters.folder:
            conditions.append(Note.folder == filters.folder)
        if filters.tags:
            tagged = select(NoteTag.note_id).where(NoteTag.name.in_(filters.tags))
            conditions.append(Note.id.in_(tagged))
        if filters.is_pinned is not None:
            conditions.append(Note.is_pinned == filters.is_pinned)
        return conditions

    async def _count(self, conditions: list) -> int:
        count_stmt = select(func.count(Note.id)).where(*conditions)
        total_result = await self.session.execute(count_stmt)
        return total_result.scalar() or 0

    async def list_user_notes(
        self,
        user_id: UUID,
        filters: Optional[NoteFilter] = None,
        page: int = 1,
        per_page: int = 10,
    ) -> Tuple[List[Note], int]:
        """List user notes, pinned first then most recently updated."""
        conditions = self._filter_conditions(user_id, filters)
        total_count = await self._count(conditions)

        stmt = (
            select(Note)
            .where(*conditions)
            .order_by(Note.is_pinned.desc(), Note.updated_at.desc(), Note.created_at.desc())
            .offset((page - 1) * per_page)
            .limit(per_page)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all()), total_count

    async def search_notes(
        self,
        user_id: UUID,
        query: str,
        filters: Optional[NoteFilter] = None,
        page: int = 1,
        per_page: int = 10,
    ) -> Tuple[List[Note], int]:
        """Search title, content and tags; best matches first, then most recent."""
        terms = parse_search_terms(query)
        if not terms:
            return [], 0

        matches = []
        scores = []
        for term in terms:
            in_title = Note.title.icontains(term, autoescape=True)
            in_content = Note.content.icontains(term, autoescape=True)
            in_tags = (
                select(NoteTag.id)
                .where(NoteTag.note_id == Note.id, NoteTag.name == term)
                .exists()
            )
            matches.append(or_(in_title, in_content, in_tags))
            scores.extend([
                case((in_title, TITLE_WEIGHT), else_=0),
                case((in_tags, TAG_WEIGHT), else_=0),
                case((in_content, CONTENT_WEIGHT), else_=0),
            ])

        relevance = reduce(lambda left, right: left + right, scores)
        conditions = self._filter_conditions(user_id, filters) + [or_(*matches)]
        total_count = await self._count(conditions)

        stmt = (
            select(Note)
            .where(*conditions)
            .order_by(relevance.desc(), Note.updated_at.desc())
            .offset((page - 1) * per_page)
            .limit(per_page)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all()), total_count

    async def get_user_folders(self, user_id: UUID) -> List[str]:
        """Distinct folder names used by the user's notes."""
        stmt = (
            select(Note.folder)
            .where(Note.owner_id == user_id, Note.folder.is_not(None), Note.folder != "")
            .distinct()
            .order_by(Note.folder)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_user_tags(self, user_id: UUID) -> List[str]:
        """Get all unique tags for user's notes."""
        stmt = (
            select(NoteTag.name)
            .join(Note, NoteTag.note_id == Note.id)
            .where(Note.owner_id == user_id)
            .distinct()
            .order_by(NoteTag.name)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
