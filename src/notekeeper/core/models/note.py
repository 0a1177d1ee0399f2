# Note model for user content
import uuid
from typing import Iterable, List, Optional

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import BaseModel


class Note(BaseModel):
    """Note owned by exactly one user."""

    __tablename__ = "notes"

    title: Mapped[str] = mapped_column(String(100), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    folder: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    is_pinned: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # owner reference
    owner_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    tag_links: Mapped[List["NoteTag"]] = relationship(
        "NoteTag",
        cascade="all, delete-orphan",
        order_by="NoteTag.position",
        lazy="selectin",
    )

    __table_args__ = (
        # listing: owner scoped, pinned first, most recent first
        Index("idx_notes_owner_pinned_updated", "owner_id", "is_pinned", "updated_at"),
        Index("idx_notes_owner_folder", "owner_id", "folder"),
        CheckConstraint("length(title) <= 100", name="ck_notes_title_len"),
        CheckConstraint("length(content) <= 10000", name="ck_notes_content_len"),
        CheckConstraint("folder IS NULL OR length(folder) <= 50", name="ck_notes_folder_len"),
    )

    def __repr__(self) -> str:
        truncated = self.title if len(self.title) <= 30 else (self.title[:30] + "...")
        return f"<Note(title='{truncated}', owner_id={self.owner_id})>"

    @property
    def tags(self) -> List[str]:
        """Tag names in their stored order."""
        return [link.name for link in self.tag_links]

    def set_tags(self, names: Iterable[str]) -> None:
        """Replace the note's tags, reusing rows for names that stay."""
        existing = {link.name: link for link in self.tag_links}
        links: List[NoteTag] = []
        for position, name in enumerate(names):
            link = existing.get(name)
            if link is None:
                link = NoteTag(name=name)
            link.position = position
            links.append(link)
        self.tag_links = links


class NoteTag(BaseModel):
    """A single lowercase tag attached to a note."""

    __tablename__ = "note_tags"

    note_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("notes.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(20), nullable=False)
    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    __table_args__ = (
        UniqueConstraint("note_id", "name", name="uq_note_tags_note_name"),
        CheckConstraint("name = lower(name)", name="ck_note_tags_name_lowercase"),
        Index("idx_note_tags_name", "name"),
        Index("idx_note_tags_note_id", "note_id"),
    )

    def __repr__(self) -> str:
        return f"<NoteTag(note_id={self.note_id}, name='{self.name}')>"
