"""Domain-Oriented Observability for the Notes infrastructure layer."""

from notes.infrastructure.observability.repository_probe import (
    DefaultNoteRepositoryProbe,
    NoteRepositoryProbe,
)

__all__ = [
    "DefaultNoteRepositoryProbe",
    "NoteRepositoryProbe",
]
