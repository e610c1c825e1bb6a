"""Domain-Oriented Observability for the Notes application layer."""

from notes.application.observability.note_service_probe import (
    DefaultNoteServiceProbe,
    NoteServiceProbe,
)

__all__ = [
    "DefaultNoteServiceProbe",
    "NoteServiceProbe",
]
