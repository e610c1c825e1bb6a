"""User aggregate for IAM context."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from iam.domain.value_objects import UserId

UNNAMED_USER = "Unnamed User"
NO_EMAIL_PROVIDED = "No email provided"


def preferred_display_name(name: str | None, email: str | None) -> str:
    """Pick the display name for an identity: name, else email, else a placeholder."""
    return name or email or UNNAMED_USER


@dataclass(eq=False)
class User:
    """Local record of a person known to the identity provider.

    Created the first time an unseen external subject authenticates and
    kept in step with the provider afterwards.

    Business rules:
    - ``external_subject`` is the join key to the identity provider and
      never changes once stored
    - ``email`` is captured at provisioning time
    - ``name`` follows the provider's preferred display name
    - ``created_at`` is set once
    """

    id: UserId
    external_subject: str
    email: str
    name: str
    created_at: datetime

    @classmethod
    def provision(
        cls,
        external_subject: str,
        name: str | None,
        email: str | None,
    ) -> User:
        """Create the local record for a subject seen for the first time.

        Args:
            external_subject: Subject identifier issued by the identity provider
            name: Display name asserted by the provider, if any
            email: Email asserted by the provider, if any

        Returns:
            A new User with placeholder values for missing claims
        """
        return cls(
            id=UserId.generate(),
            external_subject=external_subject,
            email=email or NO_EMAIL_PROVIDED,
            name=preferred_display_name(name, email),
            created_at=datetime.now(UTC),
        )

    def sync_name(self, name: str | None, email: str | None) -> bool:
        """Bring the display name in line with the provider's current claims.

        Returns:
            True if the name changed and the record needs to be written
        """
        preferred = preferred_display_name(name, email)
        if self.name == preferred:
            return False
        self.name = preferred
        return True

    def __str__(self) -> str:
        """Return string representation."""
        return f"User({self.external_subject})"

    def __eq__(self, other: object) -> bool:
        """Users are equal if they have the same ID (identity-based equality)."""
        if not isinstance(other, User):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on ID for use in sets and dicts."""
        return hash(self.id)
