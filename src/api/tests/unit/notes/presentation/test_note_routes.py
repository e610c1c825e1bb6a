"""Unit tests for note HTTP routes.

Tests request parsing, filter forwarding and the mapping of service
errors onto HTTP status codes.
"""

from __future__ import annotations

from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI, status
from fastapi.testclient import TestClient

from iam.application.value_objects import IdentityAssertion
from iam.domain.value_objects import UserId
from iam.ports.exceptions import AuthenticationRequiredError, UserNotFoundError
from notes.application.query_plan import NoteFilters
from notes.application.services import NoteService
from notes.domain.aggregates import Note, NoteChanges
from notes.domain.exceptions import NoteValidationError
from notes.domain.value_objects import BillStatus, NoteId
from notes.ports.exceptions import NoteAccessDeniedError, NoteNotFoundError


@pytest.fixture
def mock_note_service() -> AsyncMock:
    """Mock NoteService for testing."""
    return AsyncMock(spec=NoteService)


@pytest.fixture
def assertion() -> IdentityAssertion:
    """Identity of the calling user."""
    return IdentityAssertion(subject="alice", name="Alice", email="alice@x.com")


@pytest.fixture
def note() -> Note:
    return Note(
        id=NoteId.generate(),
        title="Client call",
        content="Discussed the roadmap",
        created_by=UserId.generate(),
        billable=True,
        duration=30.0,
        bill_status=BillStatus.OPEN,
        created_at=datetime(2026, 3, 1, tzinfo=UTC),
    )


def build_client(service: AsyncMock, assertion: IdentityAssertion | None) -> TestClient:
    from iam.dependencies.user import get_identity_assertion
    from notes.dependencies.note import get_note_query_service, get_note_service
    from notes.presentation import router

    app = FastAPI()

    app.dependency_overrides[get_note_service] = lambda: service
    app.dependency_overrides[get_note_query_service] = lambda: service
    app.dependency_overrides[get_identity_assertion] = lambda: assertion

    app.include_router(router)

    return TestClient(app)


@pytest.fixture
def test_client(mock_note_service, assertion) -> TestClient:
    """Create TestClient with mocked dependencies."""
    return build_client(mock_note_service, assertion)


class TestCreateNote:
    """Tests for POST /notes."""

    def test_returns_201_with_id(self, test_client, mock_note_service, assertion):
        """A created note answers 201 with its ID."""
        note_id = NoteId.generate()
        mock_note_service.create_note.return_value = note_id

        response = test_client.post(
            "/notes",
            json={"title": "t", "content": "c", "billable": True, "duration": 15},
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json() == {"id": note_id.value}
        mock_note_service.create_note.assert_called_once_with(
            assertion, title="t", content="c", billable=True, duration=15.0
        )

    def test_validation_error_returns_422(self, test_client, mock_note_service):
        """Domain validation failures answer 422 with the message."""
        mock_note_service.create_note.side_effect = NoteValidationError(
            "title", "must be between 1 and 200 characters"
        )

        response = test_client.post(
            "/notes", json={"title": " ", "content": "c", "billable": False}
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT
        assert response.json()["detail"] == "Title must be between 1 and 200 characters"

    def test_unsynced_user_returns_409(self, test_client, mock_note_service):
        """A caller without a local user is told to sync first."""
        mock_note_service.create_note.side_effect = UserNotFoundError("alice")

        response = test_client.post(
            "/notes", json={"title": "t", "content": "c", "billable": False}
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert "sync the current user first" in response.json()["detail"]

    def test_anonymous_returns_401(self, mock_note_service):
        """Without a bearer token the service's refusal becomes 401."""
        mock_note_service.create_note.side_effect = AuthenticationRequiredError(
            "Authentication required"
        )
        client = build_client(mock_note_service, None)

        response = client.post(
            "/notes", json={"title": "t", "content": "c", "billable": False}
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.headers["WWW-Authenticate"] == "Bearer"
        mock_note_service.create_note.assert_called_once()
        assert mock_note_service.create_note.call_args[0][0] is None

    def test_unexpected_error_returns_500(self, test_client, mock_note_service):
        """Unknown failures answer a generic 500."""
        mock_note_service.create_note.side_effect = RuntimeError("db down")

        response = test_client.post(
            "/notes", json={"title": "t", "content": "c", "billable": False}
        )

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json()["detail"] == "Failed to create note"


class TestListNotes:
    """Tests for GET /notes."""

    def test_returns_notes(self, test_client, mock_note_service, note):
        """Notes are serialized in service order."""
        mock_note_service.get_notes.return_value = [note]

        response = test_client.get("/notes")

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert len(body) == 1
        assert body[0]["id"] == note.id.value
        assert body[0]["created_by"] == note.created_by.value
        assert body[0]["bill_status"] == "open"
        assert body[0]["duration"] == 30.0

    def test_forwards_filters(self, test_client, mock_note_service, assertion):
        """Query parameters become NoteFilters."""
        mock_note_service.get_notes.return_value = []

        response = test_client.get(
            "/notes",
            params={"created_by_current_user": "true", "bill_status": "billed"},
        )

        assert response.status_code == status.HTTP_200_OK
        mock_note_service.get_notes.assert_called_once_with(
            assertion,
            NoteFilters(created_by_current_user=True, bill_status=BillStatus.BILLED),
        )

    def test_without_filters(self, test_client, mock_note_service, assertion):
        """Omitted parameters are passed on as None."""
        mock_note_service.get_notes.return_value = []

        test_client.get("/notes")

        mock_note_service.get_notes.assert_called_once_with(assertion, NoteFilters())

    def test_unknown_bill_status_is_rejected(self, test_client, mock_note_service):
        """Only the defined billing states are accepted."""
        response = test_client.get("/notes", params={"bill_status": "paid"})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT
        mock_note_service.get_notes.assert_not_called()

    def test_anonymous_returns_401(self, mock_note_service):
        """Listing requires authentication."""
        mock_note_service.get_notes.side_effect = AuthenticationRequiredError(
            "Authentication required"
        )
        client = build_client(mock_note_service, None)

        response = client.get("/notes")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestUpdateNote:
    """Tests for PATCH /notes/{note_id}."""

    def test_applies_only_present_fields(
        self, test_client, mock_note_service, assertion, note
    ):
        """Omitted and null fields do not reach the service."""
        mock_note_service.update_note.return_value = note

        response = test_client.patch(
            f"/notes/{note.id.value}",
            json={"bill_status": "billed", "title": None},
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["id"] == note.id.value
        mock_note_service.update_note.assert_called_once_with(
            assertion,
            note_id=note.id,
            changes=NoteChanges(bill_status=BillStatus.BILLED),
        )

    def test_other_owner_returns_403(self, test_client, mock_note_service, note):
        """Updating someone else's note is forbidden."""
        mock_note_service.update_note.side_effect = NoteAccessDeniedError(
            note.id.value, "update"
        )

        response = test_client.patch(f"/notes/{note.id.value}", json={"title": "x"})

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["detail"] == "Not authorized to update this note"

    def test_missing_note_returns_404(self, test_client, mock_note_service):
        """An unknown note answers 404."""
        note_id = NoteId.generate()
        mock_note_service.update_note.side_effect = NoteNotFoundError(note_id.value)

        response = test_client.patch(f"/notes/{note_id.value}", json={"title": "x"})

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_malformed_id_returns_404(self, test_client, mock_note_service):
        """A malformed ID is answered like an unknown one."""
        response = test_client.patch("/notes/not-a-ulid", json={"title": "x"})

        assert response.status_code == status.HTTP_404_NOT_FOUND
        mock_note_service.update_note.assert_not_called()

    def test_invalid_field_returns_422(self, test_client, mock_note_service, note):
        """Domain validation failures answer 422."""
        mock_note_service.update_note.side_effect = NoteValidationError(
            "duration", "must be between 0 and 1440 minutes"
        )

        response = test_client.patch(
            f"/notes/{note.id.value}", json={"duration": 2000}
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT
        assert (
            response.json()["detail"] == "Duration must be between 0 and 1440 minutes"
        )


class TestDeleteNote:
    """Tests for DELETE /notes/{note_id}."""

    def test_returns_204(self, test_client, mock_note_service, assertion, note):
        """The owner's delete answers 204 with no body."""
        mock_note_service.delete_note.return_value = None

        response = test_client.delete(f"/notes/{note.id.value}")

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert response.content == b""
        mock_note_service.delete_note.assert_called_once_with(
            assertion, note_id=note.id
        )

    def test_other_owner_returns_403(self, test_client, mock_note_service, note):
        """Deleting someone else's note is forbidden."""
        mock_note_service.delete_note.side_effect = NoteAccessDeniedError(
            note.id.value, "delete"
        )

        response = test_client.delete(f"/notes/{note.id.value}")

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["detail"] == "Not authorized to delete this note"

    def test_missing_note_returns_404(self, test_client, mock_note_service):
        """An unknown note answers 404."""
        note_id = NoteId.generate()
        mock_note_service.delete_note.side_effect = NoteNotFoundError(note_id.value)

        response = test_client.delete(f"/notes/{note_id.value}")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "Note not found"
