"""create notes table

Revision ID: 8e4d27c5a6b0
Revises: 3c9a1f0b7d21
Create Date: 2026-10-19 09:40:03.551870

Creates the notes table. The composite indexes back the owner-scoped and
status-scoped listing scans, both ordered by created_at.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "8e4d27c5a6b0"
down_revision: Union[str, Sequence[str], None] = "3c9a1f0b7d21"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create notes table with constraints and indexes."""
    op.create_table(
        "notes",
        sa.Column("id", sa.String(length=26), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("created_by", sa.String(length=26), nullable=False),
        sa.Column("billable", sa.Boolean(), nullable=False),
        sa.Column("duration", sa.Float(), nullable=True),
        sa.Column("bill_status", sa.String(length=16), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "bill_status IN ('open', 'billed', 'canceled')",
            name=op.f("ck_notes_bill_status_valid"),
        ),
        sa.ForeignKeyConstraint(
            ["created_by"],
            ["users.id"],
            name=op.f("fk_notes_created_by_users"),
            ondelete="RESTRICT",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_notes")),
    )
    op.create_index(op.f("ix_notes_created_by"), "notes", ["created_by"])
    op.create_index(op.f("ix_notes_bill_status"), "notes", ["bill_status"])
    op.create_index(
        "idx_notes_created_by_created_at",
        "notes",
        ["created_by", "created_at"],
    )
    op.create_index(
        "idx_notes_bill_status_created_at",
        "notes",
        ["bill_status", "created_at"],
    )


def downgrade() -> None:
    """Drop notes table."""
    op.drop_index("idx_notes_bill_status_created_at", table_name="notes")
    op.drop_index("idx_notes_created_by_created_at", table_name="notes")
    op.drop_index(op.f("ix_notes_bill_status"), table_name="notes")
    op.drop_index(op.f("ix_notes_created_by"), table_name="notes")
    op.drop_table("notes")
