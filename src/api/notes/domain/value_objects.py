"""Value objects for the Notes domain."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from ulid import ULID

TITLE_MAX_LENGTH = 200
CONTENT_MAX_LENGTH = 5000
DURATION_MAX_MINUTES = 1440


@dataclass(frozen=True)
class NoteId:
    """Identifier for a Note aggregate.

    Uses ULID for sortability and distribution-friendly generation.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> NoteId:
        """Generate a new NoteId using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> NoteId:
        """Create NoteId from string value.

        Args:
            value: ULID string

        Returns:
            NoteId instance

        Raises:
            ValueError: If value is not a valid ULID
        """
        try:
            ULID.from_str(value)
        except ValueError as e:
            raise ValueError(f"Invalid NoteId: {value}") from e

        return cls(value=value)


class BillStatus(StrEnum):
    """Billing state of a note.

    Every note starts ``open``; the owner moves it along afterwards.
    """

    OPEN = "open"
    BILLED = "billed"
    CANCELED = "canceled"
