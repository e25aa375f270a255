"""JWT authentication provider.

Accepts Supabase access tokens signed with ES256 (verified against the
project's JWKS endpoint) and HS256 tokens signed with the configured shared
secret, which is what local development and the test-suite issue.
"""

from datetime import datetime, timedelta
from typing import Any, Optional
from uuid import UUID

import httpx
import structlog
from jose import JWTError, jwt
from jose.backends import ECKey

from core.config import settings
from infrastructure.auth.provider import TokenUser

logger = structlog.get_logger()


class JWKSCache:
    """kid -> JWK mapping fetched from Supabase and kept until a miss."""

    def __init__(self, jwks_url: str) -> None:
        self._jwks_url = jwks_url
        self._keys: dict[str, Any] | None = None

    async def get(self, kid: str) -> dict[str, Any] | None:
        if self._keys is None or kid not in self._keys:
            # Unknown kid usually means the signing key rotated.
            self._keys = await self._fetch()
        return self._keys.get(kid)

    async def _fetch(self) -> dict[str, Any]:
        if not self._jwks_url:
            return {}
        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(self._jwks_url, timeout=10.0)
                response.raise_for_status()
                document = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("jwks_fetch_failed", url=self._jwks_url, error=str(exc))
            return {}

        entries = document.get("keys") if isinstance(document, dict) else None
        if not isinstance(entries, list):
            logger.error("jwks_malformed", url=self._jwks_url)
            return {}

        keys = {
            key["kid"]: key
            for key in entries
            if isinstance(key, dict) and key.get("kid")
        }
        logger.info("jwks_fetched", key_count=len(keys))
        return keys


class JWTAuthProvider:
    """JWT-based authentication provider."""

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_minutes: int = settings.jwt_expire_minutes,
        jwks: Optional[JWKSCache] = None,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes
        self._jwks = jwks or JWKSCache(settings.supabase_jwks_url)

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """
        Validate a JWT and extract the user it was issued to.

        Args:
            token: The raw bearer token

        Returns:
            TokenUser if the signature and expiry check out and the token
            names a subject, None otherwise
        """
        try:
            header = jwt.get_unverified_header(token)
            if header.get("alg") == "ES256":
                payload = await self._decode_es256(token, header)
            else:
                payload = jwt.decode(
                    token,
                    self._secret_key,
                    algorithms=[self._algorithm],
                    options={"verify_aud": False},
                )
        except JWTError:
            return None

        if payload is None:
            return None

        subject = payload.get("sub")
        if not subject:
            return None

        try:
            user_id = UUID(subject)
        except ValueError:
            return None

        return TokenUser(
            id=user_id,
            email=payload.get("email"),
            role=payload.get("role"),
        )

    async def _decode_es256(
        self, token: str, header: dict[str, Any]
    ) -> Optional[dict[str, Any]]:
        kid = header.get("kid")
        if not kid:
            return None

        key_data = await self._jwks.get(kid)
        if not key_data:
            logger.warning("jwks_key_not_found", kid=kid)
            return None

        return jwt.decode(
            token,
            ECKey(key_data, algorithm="ES256"),
            algorithms=["ES256"],
            options={"verify_aud": False},
        )

    def create_token(self, user: TokenUser) -> str:
        """Create an HS256 token shaped like a Supabase access token."""
        payload: dict[str, Any] = {
            "sub": str(user.id),
            "aud": "authenticated",
            "role": user.role or "authenticated",
            "exp": datetime.utcnow() + timedelta(minutes=self._expire_minutes),
        }
        if user.email:
            payload["email"] = user.email

        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
