"""Ports (interfaces) for the Notes bounded context."""

from notes.ports.exceptions import NoteAccessDeniedError, NoteNotFoundError
from notes.ports.repositories import INoteRepository

__all__ = [
    "INoteRepository",
    "NoteAccessDeniedError",
    "NoteNotFoundError",
]
