"""Notes presentation layer."""

from notes.presentation.routes import router

__all__ = ["router"]
