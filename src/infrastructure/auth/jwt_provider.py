"""JWT authentication provider implementation.

Supports both Supabase-issued JWTs (ES256 via JWKS) and
locally-created tokens (HS256 for tests).

Supabase JWT payload structure:
    {
        "sub": "user-uuid",
        "email": "user@example.com",
        "role": "authenticated",
        "aud": "authenticated",
        "user_metadata": { "name": "Jane" },
        "exp": 1234567890
    }
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Optional
from uuid import UUID

import httpx
from jose import JWTError, jwt
from jose.backends import ECKey

from core.config import settings
from domain.entities.identity import Identity

logger = logging.getLogger(__name__)

# Module-level JWKS cache (fetched once, reused across requests)
_jwks_cache: dict[str, Any] | None = None


async def _get_jwks_keys() -> dict[str, Any]:
    """Fetch and cache JWKS keys from Supabase."""
    global _jwks_cache
    if _jwks_cache is not None:
        return _jwks_cache

    jwks_url = settings.supabase_jwks_url
    if not jwks_url:
        return {}

    try:
        async with httpx.AsyncClient() as client:
            response = await client.get(jwks_url, timeout=10.0)
            response.raise_for_status()
            jwks_data = response.json()
            _jwks_cache = {}
            for key_data in jwks_data.get("keys", []):
                kid = key_data.get("kid")
                if kid:
                    _jwks_cache[kid] = key_data
            logger.info("Fetched %d JWKS keys from Supabase", len(_jwks_cache))
            return _jwks_cache
    except (httpx.HTTPError, ValueError):
        logger.exception("Failed to fetch JWKS from %s", jwks_url)
        return {}


class JWTAuthProvider:
    """JWT-based authentication provider.

    Turns Supabase-issued (ES256) and locally-created (HS256)
    access tokens into identities.
    """

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_minutes: int = settings.jwt_expire_minutes,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes

    async def validate_token(self, token: str) -> Optional[Identity]:
        """
        Validate a JWT and extract the identity it carries.

        The signing algorithm is read from the token header: ES256 tokens
        are checked against the project's JWKS, anything else against the
        shared secret.

        Args:
            token: The JWT to validate

        Returns:
            Identity if valid, None if invalid or expired
        """
        try:
            header = jwt.get_unverified_header(token)
            if header.get("alg", self._algorithm) == "ES256":
                claims = await self._validate_es256(token, header)
            else:
                claims = jwt.decode(
                    token,
                    self._secret_key,
                    algorithms=[self._algorithm],
                    options={"verify_aud": False},
                )
            return _identity_from_claims(claims) if claims else None
        except (JWTError, ValueError):
            return None

    async def _validate_es256(self, token: str, header: dict) -> Optional[dict]:
        """Validate an ES256-signed JWT using JWKS public keys."""
        kid = header.get("kid")
        if not kid:
            return None

        jwks_keys = await _get_jwks_keys()
        key_data = jwks_keys.get(kid)
        if not key_data:
            # Key not found: refetch once in case the keys were rotated
            global _jwks_cache
            _jwks_cache = None
            jwks_keys = await _get_jwks_keys()
            key_data = jwks_keys.get(kid)
            if not key_data:
                logger.warning("JWKS key not found for kid=%s", kid)
                return None

        ec_key = ECKey(key_data, algorithm="ES256")
        return jwt.decode(
            token,
            ec_key,
            algorithms=["ES256"],
            options={"verify_aud": False},
        )

    def create_token(self, identity: Identity) -> str:
        """
        Create a JWT for an identity (HS256, used for tests and local runs).

        Args:
            identity: The identity to create a token for

        Returns:
            The generated JWT string
        """
        expire = datetime.utcnow() + timedelta(minutes=self._expire_minutes)

        payload: dict = {
            "sub": str(identity.id),
            "email": identity.email,
            "aud": "authenticated",
            "role": "authenticated",
            "exp": expire,
            "user_metadata": dict(identity.metadata),
        }

        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if not isinstance(value, str):
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def _identity_from_claims(claims: dict[str, Any]) -> Optional[Identity]:
    """Build an Identity from verified claims. Tokens without a subject or email are rejected."""
    subject = claims.get("sub")
    email = claims.get("email")
    if not subject or not email:
        return None
    return Identity(
        id=UUID(subject),
        email=email,
        # Supabase keeps signup data (e.g. the chosen name) in user_metadata
        metadata=dict(claims.get("user_metadata") or {}),
        created_at=_parse_timestamp(claims.get("created_at")),
    )
