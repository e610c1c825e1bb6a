"""Unit tests for IAM dependencies.

Tests how get_identity_assertion turns bearer credentials into an
IdentityAssertion.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, create_autospec

import pytest
from fastapi import HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials

from iam.application.observability import AuthenticationProbe
from iam.application.value_objects import IdentityAssertion
from iam.dependencies.user import get_identity_assertion
from shared_kernel.auth import InvalidTokenError, JWTValidator, TokenClaims


@pytest.fixture
def mock_validator() -> AsyncMock:
    """Create a mock JWT validator."""
    validator = create_autospec(JWTValidator, instance=True)
    validator.validate_token = AsyncMock()
    return validator


@pytest.fixture
def mock_auth_probe():
    """Create a mock authentication probe."""
    return create_autospec(AuthenticationProbe, instance=True)


def bearer(token: str = "token-abc") -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


class TestGetIdentityAssertion:
    """Tests for get_identity_assertion dependency."""

    @pytest.mark.asyncio
    async def test_no_credentials_is_anonymous(self, mock_validator, mock_auth_probe):
        """A request without a token yields None and is not validated."""
        result = await get_identity_assertion(
            validator=mock_validator,
            auth_probe=mock_auth_probe,
            credentials=None,
        )

        assert result is None
        mock_validator.validate_token.assert_not_called()
        mock_auth_probe.anonymous_request.assert_called_once()

    @pytest.mark.asyncio
    async def test_valid_token_yields_assertion(self, mock_validator, mock_auth_probe):
        """Validated claims become the identity assertion."""
        mock_validator.validate_token.return_value = TokenClaims(
            sub="u1", name="Alice", email="a@x.com"
        )

        result = await get_identity_assertion(
            validator=mock_validator,
            auth_probe=mock_auth_probe,
            credentials=bearer(),
        )

        assert result == IdentityAssertion(
            subject="u1", name="Alice", email="a@x.com"
        )
        mock_validator.validate_token.assert_awaited_once_with("token-abc")
        mock_auth_probe.user_authenticated.assert_called_once_with(subject="u1")

    @pytest.mark.asyncio
    async def test_claims_without_profile(self, mock_validator, mock_auth_probe):
        """Missing name and email stay None on the assertion."""
        mock_validator.validate_token.return_value = TokenClaims(sub="u2")

        result = await get_identity_assertion(
            validator=mock_validator,
            auth_probe=mock_auth_probe,
            credentials=bearer(),
        )

        assert result == IdentityAssertion(subject="u2")

    @pytest.mark.asyncio
    async def test_invalid_token_raises_401(self, mock_validator, mock_auth_probe):
        """A token that fails validation is rejected with 401."""
        mock_validator.validate_token.side_effect = InvalidTokenError(
            "Token has expired"
        )

        with pytest.raises(HTTPException) as exc_info:
            await get_identity_assertion(
                validator=mock_validator,
                auth_probe=mock_auth_probe,
                credentials=bearer(),
            )

        assert exc_info.value.status_code == status.HTTP_401_UNAUTHORIZED
        assert exc_info.value.detail == "Token has expired"
        assert exc_info.value.headers == {"WWW-Authenticate": "Bearer"}
        mock_auth_probe.authentication_failed.assert_called_once_with(
            reason="Token has expired"
        )
