"""Listing query plans for notes.

The access path for a listing is chosen from a table keyed on which
optional filters are active. A new filter is a new column in
``NoteFilters`` plus new rows in ``_PLANS``; existing rows keep their
meaning, so calls that omit the new filter behave as before.
"""

from __future__ import annotations

from dataclasses import dataclass

from notes.domain.value_objects import BillStatus

CREATED_BY_CURRENT_USER = "created_by_current_user"
BILL_STATUS = "bill_status"


@dataclass(frozen=True)
class NoteFilters:
    """Optional filters for listing notes.

    A missing filter object and ``NoteFilters()`` mean the same thing:
    no restriction. ``created_by_current_user=False`` is the same as
    leaving it out.
    """

    created_by_current_user: bool | None = None
    bill_status: BillStatus | None = None

    def active_fields(self) -> frozenset[str]:
        """Names of the filters that restrict the listing."""
        active: set[str] = set()
        if self.created_by_current_user:
            active.add(CREATED_BY_CURRENT_USER)
        if self.bill_status is not None:
            active.add(BILL_STATUS)
        return frozenset(active)


@dataclass(frozen=True)
class ListingPlan:
    """How a listing is executed.

    Attributes:
        name: Stable plan name, reported to observability
        scope_to_caller: Scan only the calling user's notes; a caller
            without a local user gets an empty listing
        match_status: Keep only notes in the requested billing state
    """

    name: str
    scope_to_caller: bool
    match_status: bool


_PLANS: dict[frozenset[str], ListingPlan] = {
    frozenset({CREATED_BY_CURRENT_USER, BILL_STATUS}): ListingPlan(
        name="owner_with_status",
        scope_to_caller=True,
        match_status=True,
    ),
    frozenset({CREATED_BY_CURRENT_USER}): ListingPlan(
        name="owner",
        scope_to_caller=True,
        match_status=False,
    ),
    frozenset({BILL_STATUS}): ListingPlan(
        name="status",
        scope_to_caller=False,
        match_status=True,
    ),
    frozenset(): ListingPlan(
        name="all",
        scope_to_caller=False,
        match_status=False,
    ),
}


def plan_listing(filters: NoteFilters | None) -> ListingPlan:
    """Pick the listing plan for a set of filters.

    Args:
        filters: Requested filters, or None for no restriction

    Returns:
        The plan registered for exactly the active filters
    """
    return _PLANS[(filters or NoteFilters()).active_fields()]
