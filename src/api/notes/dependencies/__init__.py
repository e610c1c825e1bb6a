"""Dependency injection for the Notes bounded context."""

from notes.dependencies.note import (
    get_note_query_service,
    get_note_repository,
    get_note_service,
    get_note_service_probe,
)

__all__ = [
    "get_note_query_service",
    "get_note_repository",
    "get_note_service",
    "get_note_service_probe",
]
