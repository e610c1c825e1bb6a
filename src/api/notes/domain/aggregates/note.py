"""Note aggregate for the Notes context."""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from datetime import UTC, datetime

from iam.domain.value_objects import UserId
from notes.domain.exceptions import NoteValidationError
from notes.domain.value_objects import (
    CONTENT_MAX_LENGTH,
    DURATION_MAX_MINUTES,
    TITLE_MAX_LENGTH,
    BillStatus,
    NoteId,
)


def _validated_text(field: str, value: str, max_length: int) -> str:
    trimmed = value.strip()
    if not 1 <= len(trimmed) <= max_length:
        raise NoteValidationError(
            field, f"must be between 1 and {max_length} characters"
        )
    return trimmed


def _validated_duration(duration: float | None) -> float | None:
    if duration is None:
        return None
    # NaN compares false against both bounds
    if not math.isfinite(duration) or not 0 <= duration <= DURATION_MAX_MINUTES:
        raise NoteValidationError(
            "duration", f"must be between 0 and {DURATION_MAX_MINUTES} minutes"
        )
    return duration


@dataclass(frozen=True)
class NoteChanges:
    """Partial update for a note.

    A field left as ``None`` is not part of the update and keeps its
    stored value.
    """

    title: str | None = None
    content: str | None = None
    billable: bool | None = None
    duration: float | None = None
    bill_status: BillStatus | None = None

    def present_fields(self) -> list[str]:
        """Names of the fields this update sets."""
        return [f.name for f in fields(self) if getattr(self, f.name) is not None]


@dataclass(eq=False)
class Note:
    """A unit of billable work recorded by one user.

    Business rules:
    - Title is 1-200 characters and content 1-5000 characters, both
      measured after trimming surrounding whitespace
    - Duration, when present, is 0-1440 minutes
    - ``created_by`` and ``created_at`` never change after creation
    - Only the owner may update or delete the note (enforced at service layer)
    """

    id: NoteId
    title: str
    content: str
    created_by: UserId
    billable: bool
    duration: float | None
    bill_status: BillStatus
    created_at: datetime

    @classmethod
    def create(
        cls,
        created_by: UserId,
        title: str,
        content: str,
        billable: bool,
        duration: float | None = None,
    ) -> Note:
        """Factory method for creating a new open note.

        Args:
            created_by: The owning user
            title: Note title, trimmed before storage
            content: Note body, trimmed before storage
            billable: Whether the work is billable
            duration: Optional duration in minutes

        Returns:
            A new Note with ``bill_status`` set to open

        Raises:
            NoteValidationError: If any input is out of bounds
        """
        return cls(
            id=NoteId.generate(),
            title=_validated_text("title", title, TITLE_MAX_LENGTH),
            content=_validated_text("content", content, CONTENT_MAX_LENGTH),
            created_by=created_by,
            billable=billable,
            duration=_validated_duration(duration),
            bill_status=BillStatus.OPEN,
            created_at=datetime.now(UTC),
        )

    def apply(self, changes: NoteChanges) -> None:
        """Apply a partial update.

        Every present field is validated before any of them is assigned,
        so a rejected update leaves the note untouched.

        Args:
            changes: The fields to change

        Raises:
            NoteValidationError: If any present field is out of bounds
        """
        title = (
            _validated_text("title", changes.title, TITLE_MAX_LENGTH)
            if changes.title is not None
            else self.title
        )
        content = (
            _validated_text("content", changes.content, CONTENT_MAX_LENGTH)
            if changes.content is not None
            else self.content
        )
        duration = (
            _validated_duration(changes.duration)
            if changes.duration is not None
            else self.duration
        )

        self.title = title
        self.content = content
        self.duration = duration
        if changes.billable is not None:
            self.billable = changes.billable
        if changes.bill_status is not None:
            self.bill_status = changes.bill_status

    def is_owned_by(self, user_id: UserId) -> bool:
        """Check whether the given user created this note."""
        return self.created_by == user_id

    def __str__(self) -> str:
        """Return string representation."""
        return f"Note({self.id})"

    def __eq__(self, other: object) -> bool:
        """Notes are equal if they have the same ID (identity-based equality)."""
        if not isinstance(other, Note):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on ID for use in sets and dicts."""
        return hash(self.id)
