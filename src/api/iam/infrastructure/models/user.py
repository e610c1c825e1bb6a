"""SQLAlchemy ORM model for the users table.

One row per external subject that has ever signed in.
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class UserModel(Base, TimestampMixin):
    """ORM model for users table.

    ``external_subject`` carries a unique index: it backs the indexed
    lookup of the sync path and makes a second insert for the same
    subject fail instead of silently creating a twin. The identity claims
    are unbounded Text: the provider does not cap their length.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    external_subject: Mapped[str] = mapped_column(
        Text, nullable=False, unique=True, index=True
    )
    email: Mapped[str] = mapped_column(Text, nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<UserModel(id={self.id}, external_subject={self.external_subject})>"
