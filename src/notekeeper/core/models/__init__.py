"""
Database models for the Notekeeper application.

Models included:
    - User: account identified by email with a hashed password
    - Note: note content owned by a single user
    - NoteTag: lowercase tags attached to a note, kept in order
"""

from .base import BaseModel
from .note import Note, NoteTag
from .user import User

__all__ = [
    "BaseModel",
    "User",
    "Note",
    "NoteTag",
]
