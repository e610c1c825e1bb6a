"""Domain aggregates for the Notes context."""

from notes.domain.aggregates.note import Note, NoteChanges

__all__ = ["Note", "NoteChanges"]
