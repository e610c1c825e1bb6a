"""Exceptions for the Notes bounded context.

Raised by the note service; the presentation layer maps them to HTTP
responses.
"""


class NoteNotFoundError(Exception):
    """Raised when a note id does not reference an existing note."""

    def __init__(self, note_id: str):
        super().__init__("Note not found")
        self.note_id = note_id


class NoteAccessDeniedError(Exception):
    """Raised when the caller does not own the note they want to change.

    The message says only "not authorized" and never echoes the note.
    """

    def __init__(self, note_id: str, action: str):
        super().__init__(f"Not authorized to {action} this note")
        self.note_id = note_id
        self.action = action
