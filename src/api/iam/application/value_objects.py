"""Application-layer value objects for IAM bounded context.

These represent the authentication context of a call, not core business
entities, which is why they live outside the domain layer.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class IdentityAssertion:
    """Claims presented for the current caller, as validated by the IdP.

    Derived from the bearer token of each request and passed explicitly
    into every service call; nothing caches it between calls.

    Attributes:
        subject: Opaque subject identifier issued by the identity provider
        name: Display name, when the provider shares one
        email: Email address, when the provider shares one
    """

    subject: str
    name: str | None = None
    email: str | None = None
