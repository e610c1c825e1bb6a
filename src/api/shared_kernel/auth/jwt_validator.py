"""JWT validation for tokens minted by the identity provider.

The identity provider issues short-lived RS256 tokens for this backend's
audience. Validation checks signature, expiry, issuer and audience against
the provider's JWKS (cached) and extracts the identity claims the rest of
the system consumes: subject, display name and email.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Any

import httpx
from jose import JWTError, jwt
from jose.exceptions import ExpiredSignatureError, JWTClaimsError

if TYPE_CHECKING:
    from shared_kernel.auth.observability import JWTValidatorProbe


@dataclass(frozen=True)
class TokenClaims:
    """Validated identity claims.

    ``name`` and ``email`` are optional; providers omit them when the
    user never shared them.
    """

    sub: str
    name: str | None = None
    email: str | None = None


class InvalidTokenError(Exception):
    """Raised when JWT validation fails."""

    pass


def _optional_claim(claims: dict[str, Any], key: str) -> str | None:
    value = claims.get(key)
    if value is None:
        return None
    value = str(value).strip()
    return value or None


class JWTValidator:
    """Validates JWT tokens using the identity provider's JWKS.

    Fetches JWKS via OpenID discovery and caches them for the configured
    TTL. Concurrent cache misses are collapsed behind a lock.
    """

    def __init__(
        self,
        issuer_url: str,
        audience: str,
        probe: JWTValidatorProbe,
        user_id_claim: str = "sub",
        name_claim: str = "name",
        email_claim: str = "email",
        jwks_cache_ttl: timedelta = timedelta(hours=1),
    ):
        """Initialize the JWT validator.

        Args:
            issuer_url: The issuer domain tokens must name in ``iss``.
            audience: Expected audience claim value.
            probe: Observability probe for logging events.
            user_id_claim: Claim carrying the external subject (default: sub).
            name_claim: Claim carrying the display name (default: name).
            email_claim: Claim carrying the email address (default: email).
            jwks_cache_ttl: How long to cache JWKS keys (default: 1 hour).
        """
        self._issuer_url = issuer_url.rstrip("/")
        self._audience = audience
        self._probe = probe
        self._user_id_claim = user_id_claim
        self._name_claim = name_claim
        self._email_claim = email_claim
        self._jwks_cache_ttl = jwks_cache_ttl

        self._jwks: dict[str, Any] | None = None
        self._jwks_fetched_at: datetime | None = None
        self._jwks_lock = asyncio.Lock()

    async def validate_token(self, token: str) -> TokenClaims:
        """Validate JWT and return its identity claims.

        Args:
            token: The JWT token string.

        Returns:
            TokenClaims containing the validated claims.

        Raises:
            InvalidTokenError: If token is invalid, expired, or verification fails.
        """
        try:
            unverified_header = jwt.get_unverified_header(token)
        except JWTError as e:
            self._probe.token_validation_failed(reason=f"Malformed token: {e}")
            raise InvalidTokenError(f"Invalid token format: {e}") from e

        if not unverified_header:
            self._probe.token_validation_failed(reason="Missing token header")
            raise InvalidTokenError("Invalid token: missing header")

        jwks = await self._get_jwks()
        claims = self._decode(token, jwks)

        subject = claims.get(self._user_id_claim)
        if subject is None or not str(subject).strip():
            self._probe.token_validation_failed(
                reason=f"Missing {self._user_id_claim} claim"
            )
            raise InvalidTokenError(f"Missing required claim: {self._user_id_claim}")

        token_claims = TokenClaims(
            sub=str(subject),
            name=_optional_claim(claims, self._name_claim),
            email=_optional_claim(claims, self._email_claim),
        )
        self._probe.token_validated(
            subject=token_claims.sub,
            has_email=token_claims.email is not None,
        )
        return token_claims

    def _decode(self, token: str, jwks: dict[str, Any]) -> dict[str, Any]:
        try:
            return jwt.decode(
                token=token,
                key=jwks,
                algorithms=["RS256"],
                audience=self._audience,
                issuer=self._issuer_url,
                options={
                    "verify_signature": True,
                    "verify_aud": True,
                    "verify_iss": True,
                    "verify_exp": True,
                    "verify_iat": True,
                },
            )
        except ExpiredSignatureError as e:
            self._probe.token_validation_failed(reason="Token expired")
            raise InvalidTokenError("Token has expired") from e
        except JWTClaimsError as e:
            error_msg = str(e).lower()
            if "audience" in error_msg:
                self._probe.token_validation_failed(reason="Invalid audience")
                raise InvalidTokenError("Invalid audience claim") from e
            if "issuer" in error_msg:
                self._probe.token_validation_failed(reason="Invalid issuer")
                raise InvalidTokenError("Invalid issuer claim") from e
            self._probe.token_validation_failed(reason=f"Claims error: {e}")
            raise InvalidTokenError(f"Invalid token claims: {e}") from e
        except JWTError as e:
            if "signature" in str(e).lower():
                self._probe.token_validation_failed(reason="Invalid signature")
                raise InvalidTokenError("Invalid token signature") from e
            self._probe.token_validation_failed(reason=f"JWT error: {e}")
            raise InvalidTokenError(f"Invalid token: {e}") from e

    async def _get_jwks(self) -> dict[str, Any]:
        """Get JWKS, fetching from issuer if cache expired.

        Raises:
            InvalidTokenError: If JWKS cannot be fetched.
        """
        if self._is_cache_valid():
            self._probe.jwks_cache_hit()
            return self._jwks  # type: ignore[return-value]

        async with self._jwks_lock:
            # Another coroutine may have refreshed while we waited
            if self._is_cache_valid():
                self._probe.jwks_cache_hit()
                return self._jwks  # type: ignore[return-value]

            return await self._fetch_jwks()

    def _is_cache_valid(self) -> bool:
        if self._jwks is None or self._jwks_fetched_at is None:
            return False

        now = datetime.now(tz=timezone.utc)
        return (now - self._jwks_fetched_at) < self._jwks_cache_ttl

    async def _fetch_jwks(self) -> dict[str, Any]:
        """Fetch JWKS from the issuer via OpenID discovery.

        Raises:
            InvalidTokenError: If JWKS cannot be fetched.
        """
        try:
            async with httpx.AsyncClient() as client:
                config_response = await client.get(
                    f"{self._issuer_url}/.well-known/openid-configuration"
                )
                config_response.raise_for_status()
                jwks_uri = config_response.json().get("jwks_uri")
                if not jwks_uri:
                    self._probe.jwks_fetch_failed(
                        error="Missing jwks_uri in OpenID configuration"
                    )
                    raise InvalidTokenError(
                        "Identity provider missing jwks_uri in configuration"
                    )

                jwks_response = await client.get(jwks_uri)
                jwks_response.raise_for_status()
                jwks = jwks_response.json()

        except httpx.HTTPError as e:
            self._probe.jwks_fetch_failed(error=str(e))
            raise InvalidTokenError(
                f"Failed to fetch JWKS from identity provider: {e}"
            ) from e

        self._jwks = jwks
        self._jwks_fetched_at = datetime.now(tz=timezone.utc)
        self._probe.jwks_fetched(key_count=len(jwks.get("keys", [])))
        return jwks
