"""SQLAlchemy ORM model for the notes table."""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Float,
    ForeignKey,
    Index,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class NoteModel(Base, TimestampMixin):
    """ORM model for notes table.

    Foreign Key Constraints:
    - created_by references users.id with RESTRICT delete

    Indexes:
    - (created_by, created_at) backs the owner-scoped listing scan
    - (bill_status, created_at) backs the status-scoped listing scan
    """

    __tablename__ = "notes"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_by: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    billable: Mapped[bool] = mapped_column(Boolean, nullable=False)
    duration: Mapped[float | None] = mapped_column(Float, nullable=True)
    bill_status: Mapped[str] = mapped_column(String(16), nullable=False, index=True)

    __table_args__ = (
        CheckConstraint(
            "bill_status IN ('open', 'billed', 'canceled')",
            name="bill_status_valid",
        ),
        Index("idx_notes_created_by_created_at", "created_by", "created_at"),
        Index("idx_notes_bill_status_created_at", "bill_status", "created_at"),
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<NoteModel(id={self.id}, created_by={self.created_by}, "
            f"bill_status={self.bill_status})>"
        )
