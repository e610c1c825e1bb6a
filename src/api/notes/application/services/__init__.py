"""Application services for the Notes bounded context."""

from notes.application.services.note_service import NoteService

__all__ = ["NoteService"]
