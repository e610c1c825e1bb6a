"""Unit tests for IAM repository domain probes."""

from unittest.mock import Mock

from iam.infrastructure.observability import DefaultUserRepositoryProbe
from shared_kernel.observability_context import ObservationContext


class TestDefaultUserRepositoryProbe:
    """Tests for DefaultUserRepositoryProbe."""

    def test_creates_with_default_logger(self):
        """Test that probe can be created without providing a logger."""
        probe = DefaultUserRepositoryProbe()
        assert probe._logger is not None

    def test_accepts_custom_logger(self):
        """Test that probe accepts a custom logger."""
        custom_logger = Mock()
        probe = DefaultUserRepositoryProbe(logger=custom_logger)
        assert probe._logger is custom_logger


class TestUserSaved:
    """Tests for user_saved probe method."""

    def test_logs_with_correct_parameters(self):
        """Test that user saved event is logged correctly."""
        mock_logger = Mock()
        probe = DefaultUserRepositoryProbe(logger=mock_logger)

        probe.user_saved(user_id="01ABC123", subject="user_2abc")

        mock_logger.info.assert_called_once()
        call_args = mock_logger.info.call_args
        assert call_args[0][0] == "user_saved"
        assert call_args[1]["user_id"] == "01ABC123"
        assert call_args[1]["subject"] == "user_2abc"


class TestUserNotFound:
    """Tests for user_not_found probe method."""

    def test_logs_lookup_key(self):
        """Test that the missed lookup key is logged at debug level."""
        mock_logger = Mock()
        probe = DefaultUserRepositoryProbe(logger=mock_logger)

        probe.user_not_found(lookup="user_2abc")

        mock_logger.debug.assert_called_once_with("user_not_found", lookup="user_2abc")


class TestSubjectIntegrity:
    """Tests for the uniqueness-related probe methods."""

    def test_duplicate_subject_is_error(self):
        """Duplicate rows for one subject are logged as an error."""
        mock_logger = Mock()
        probe = DefaultUserRepositoryProbe(logger=mock_logger)

        probe.duplicate_external_subject(subject="user_2abc", count=2)

        mock_logger.error.assert_called_once_with(
            "duplicate_external_subject", subject="user_2abc", count=2
        )

    def test_conflict_is_warning(self):
        """A lost first-sign-in insert is logged as a warning."""
        mock_logger = Mock()
        probe = DefaultUserRepositoryProbe(logger=mock_logger)

        probe.external_subject_conflict(subject="user_2abc")

        mock_logger.warning.assert_called_once_with(
            "external_subject_conflict", subject="user_2abc"
        )


class TestUserProbeWithContext:
    """Tests for context binding on the user repository probe."""

    def test_with_context_creates_new_probe(self):
        """Test that with_context returns a new probe instance."""
        probe = DefaultUserRepositoryProbe(logger=Mock())

        bound = probe.with_context(ObservationContext(request_id="req-1"))

        assert bound is not probe
        assert bound._logger is probe._logger

    def test_context_included_in_log_calls(self):
        """Test that bound context is included in log calls."""
        mock_logger = Mock()
        probe = DefaultUserRepositoryProbe(logger=mock_logger).with_context(
            ObservationContext(request_id="req-1", subject="user_2abc")
        )

        probe.user_retrieved(user_id="01ABC123")

        mock_logger.debug.assert_called_once_with(
            "user_retrieved",
            user_id="01ABC123",
            request_id="req-1",
            subject="user_2abc",
        )
