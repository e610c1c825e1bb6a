"""Unit tests for the note listing query plan table."""

import pytest

from notes.application.query_plan import NoteFilters, plan_listing
from notes.domain.value_objects import BillStatus


class TestPlanListing:
    """Tests for plan_listing."""

    def test_owner_and_status(self):
        """Both filters scope to the caller and match the status."""
        plan = plan_listing(
            NoteFilters(created_by_current_user=True, bill_status=BillStatus.OPEN)
        )

        assert plan.name == "owner_with_status"
        assert plan.scope_to_caller is True
        assert plan.match_status is True

    def test_owner_only(self):
        """Only the owner filter scopes to the caller."""
        plan = plan_listing(NoteFilters(created_by_current_user=True))

        assert plan.name == "owner"
        assert plan.scope_to_caller is True
        assert plan.match_status is False

    def test_status_only(self):
        """Only the status filter scans by status across owners."""
        plan = plan_listing(NoteFilters(bill_status=BillStatus.BILLED))

        assert plan.name == "status"
        assert plan.scope_to_caller is False
        assert plan.match_status is True

    @pytest.mark.parametrize(
        "filters",
        [None, NoteFilters(), NoteFilters(created_by_current_user=False)],
    )
    def test_no_restriction(self, filters):
        """Missing, empty and false filters all mean no restriction."""
        plan = plan_listing(filters)

        assert plan.name == "all"
        assert plan.scope_to_caller is False
        assert plan.match_status is False

    def test_false_owner_flag_with_status(self):
        """created_by_current_user=False is the same as leaving it out."""
        plan = plan_listing(
            NoteFilters(created_by_current_user=False, bill_status=BillStatus.OPEN)
        )

        assert plan.name == "status"


class TestNoteFilters:
    """Tests for NoteFilters.active_fields."""

    def test_active_fields(self):
        """Only restricting filters are active."""
        filters = NoteFilters(created_by_current_user=True, bill_status=None)

        assert filters.active_fields() == frozenset({"created_by_current_user"})
