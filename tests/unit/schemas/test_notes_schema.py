"""Unit tests for note schemas."""

import uuid
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from src.notekeeper.core.schemas.notes import (
    NoteCreate,
    NoteFilter,
    NoteResponse,
    NoteUpdate,
    normalize_tags,
)


class Dummy:
    def __init__(self, **kw):
        self.__dict__.update(kw)


def test_note_create_defaults():
    note = NoteCreate(title="Groceries", content="milk, eggs")
    assert note.tags == []
    assert note.folder is None
    assert note.is_pinned is False


def test_note_create_accepts_camel_case_pin():
    note = NoteCreate.model_validate({"title": "T", "content": "C", "isPinned": True})
    assert note.is_pinned is True


def test_note_create_normalises_tags():
    note = NoteCreate(title="T", content="C", tags=[" Home ", "home", "WORK", ""])
    assert note.tags == ["home", "work"]


def test_note_create_trims_title_and_content():
    note = NoteCreate(title="  Groceries  ", content="  milk  ", folder=" Personal ")
    assert note.title == "Groceries"
    assert note.content == "milk"
    assert note.folder == "Personal"


@pytest.mark.parametrize(
    "payload",
    [
        {"title": "", "content": "C"},
        {"title": "   ", "content": "C"},
        {"title": "x" * 101, "content": "C"},
        {"title": "T", "content": ""},
        {"title": "T", "content": "x" * 10001},
        {"title": "T", "content": "C", "tags": ["x" * 21]},
        {"title": "T", "content": "C", "folder": "x" * 51},
        {"title": "T", "content": "C", "isPinned": "yes"},
        {"content": "C"},
    ],
)
def test_note_create_rejects_invalid(payload):
    with pytest.raises(ValidationError):
        NoteCreate.model_validate(payload)


def test_note_create_accepts_boundaries():
    note = NoteCreate(title="x" * 100, content="y" * 10000, tags=["z" * 20], folder="f" * 50)
    assert len(note.title) == 100


def test_note_update_tracks_supplied_fields():
    update = NoteUpdate.model_validate({"isPinned": True})
    assert update.changes() == {"is_pinned": True}


def test_note_update_allows_clearing_folder():
    update = NoteUpdate.model_validate({"folder": None})
    assert update.changes() == {"folder": None}


@pytest.mark.parametrize("field", ["title", "content", "tags", "isPinned"])
def test_note_update_rejects_null(field):
    with pytest.raises(ValidationError) as exc:
        NoteUpdate.model_validate({field: None})
    assert "Field cannot be null" in str(exc.value)


def test_note_update_validates_supplied_fields_only():
    assert NoteUpdate.model_validate({}).changes() == {}
    with pytest.raises(ValidationError):
        NoteUpdate.model_validate({"title": "x" * 101})


def test_note_response_serialises_camel_case():
    now = datetime.now(timezone.utc)
    note = Dummy(
        id=uuid.uuid4(),
        title="T",
        content="C",
        tags=["a"],
        folder=None,
        owner_id=uuid.uuid4(),
        is_pinned=True,
        created_at=now,
        updated_at=now,
    )
    data = NoteResponse.model_validate(note).model_dump(by_alias=True)
    assert set(data) == {
        "id", "title", "content", "tags", "folder", "userId", "isPinned", "createdAt", "updatedAt",
    }
    assert data["isPinned"] is True


def test_note_filter_from_query_splits_and_lowercases():
    filters = NoteFilter.from_query(folder=" Work ", tags=["Home,URGENT", "home"], is_pinned=False)
    assert filters.folder == "Work"
    assert filters.tags == ["home", "urgent"]
    assert filters.is_pinned is False


def test_note_filter_from_query_empty():
    filters = NoteFilter.from_query(folder="  ", tags=None)
    assert filters.folder is None
    assert filters.tags == []
    assert filters.is_pinned is None


def test_normalize_tags_keeps_first_seen_order():
    assert normalize_tags(["b", "a", "b", "", "c"]) == ["b", "a", "c"]
