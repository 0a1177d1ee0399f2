"""
Note management schemas.

These schemas define the API contracts for note CRUD operations, listing
filters and search. Request bodies accept the camelCase ``isPinned`` key
(or ``is_pinned``); responses are serialised with camelCase keys.
"""

import uuid
from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator

from .common import PaginationInfo

Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
Content = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=10000)]
TagName = Annotated[str, StringConstraints(strip_whitespace=True, to_lower=True, max_length=20)]
FolderName = Annotated[str, StringConstraints(strip_whitespace=True, max_length=50)]


def normalize_tags(tags: List[str]) -> List[str]:
    """Drop blanks and repeats, keeping first-seen order."""
    seen = set()
    result = []
    for tag in tags:
        if tag and tag not in seen:
            seen.add(tag)
            result.append(tag)
    return result


class NoteCreate(BaseModel):
    """Note creation request schema."""

    title: Title = Field(description="Note title")
    content: Content = Field(description="Note content")
    tags: List[TagName] = Field(default_factory=list, description="Note tags")
    folder: Optional[FolderName] = Field(default=None, description="Folder name")
    is_pinned: bool = Field(default=False, alias="isPinned", description="Pin to the top of lists")

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v):
        return normalize_tags(v)

    model_config = ConfigDict(
        strict=True,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "title": "Groceries",
                "content": "milk, eggs",
                "tags": ["home"],
                "folder": "Personal",
                "isPinned": False,
            }
        },
    )


class NoteUpdate(BaseModel):
    """Note update request schema.

    Only supplied fields change. ``folder: null`` clears the folder; null is
    rejected for every other field.
    """

    title: Optional[Title] = Field(default=None, description="Note title")
    content: Optional[Content] = Field(default=None, description="Note content")
    tags: Optional[List[TagName]] = Field(default=None, description="Note tags")
    folder: Optional[FolderName] = Field(default=None, description="Folder name")
    is_pinned: Optional[bool] = Field(default=None, alias="isPinned", description="Pin flag")

    @field_validator("title", "content", "tags", "is_pinned", mode="before")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v):
        return normalize_tags(v) if v is not None else v

    def changes(self) -> dict:
        """Fields explicitly supplied by the client, keyed by model name."""
        return self.model_dump(exclude_unset=True)

    model_config = ConfigDict(
        strict=True,
        populate_by_name=True,
        json_schema_extra={"example": {"title": "Groceries for the week", "isPinned": True}},
    )


class NoteResponse(BaseModel):
    """Note response schema."""

    id: uuid.UUID = Field(description="Note unique identifier")
    title: str
    content: str
    tags: List[str]
    folder: Optional[str] = None
    owner_id: uuid.UUID = Field(alias="userId")
    is_pinned: bool = Field(alias="isPinned")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class NoteEnvelope(BaseModel):
    note: NoteResponse


class NoteMessageEnvelope(BaseModel):
    message: str
    note: NoteResponse


class NoteListResponse(BaseModel):
    """Paginated note list response."""

    notes: List[NoteResponse]
    pagination: PaginationInfo


class FoldersResponse(BaseModel):
    folders: List[str]


class TagsResponse(BaseModel):
    tags: List[str]


class NoteFilter(BaseModel):
    """Optional list/search filters; unset fields do not constrain."""

    folder: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    is_pinned: Optional[bool] = None

    @classmethod
    def from_query(
        cls,
        folder: Optional[str] = None,
        tags: Optional[List[str]] = None,
        is_pinned: Optional[bool] = None,
    ) -> "NoteFilter":
        """Build a filter from raw query values.

        Tags may be repeated and/or comma separated; they are lowercased
        like stored tags.
        """
        names: List[str] = []
        for raw in tags or []:
            names.extend(part.strip().lower() for part in raw.split(","))
        folder = folder.strip() if folder else None
        return cls(folder=folder or None, tags=normalize_tags(names), is_pinned=is_pinned)
