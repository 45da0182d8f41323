"""Bearer token verification and the single-role authorization check."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt

from userhub.models.user import Identity
from .errors import Unauthorized, Forbidden

logger = logging.getLogger(__name__)

DEFAULT_ALGORITHM = "HS256"
DEFAULT_EXPIRE_MINUTES = 60


class TokenVerifier:
    """Verifies and issues HMAC-signed JWT access tokens."""

    def __init__(
        self,
        secret: str,
        algorithm: str = DEFAULT_ALGORITHM,
        expire_minutes: int = DEFAULT_EXPIRE_MINUTES,
    ) -> None:
        self.secret = secret
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def verify(self, raw_header: Optional[str]) -> Identity:
        """Turn a raw Authorization header value into an Identity.

        Accepts either `Bearer <token>` or the bare token.

        Raises:
            Unauthorized: header missing, or the token is malformed, badly
                signed, expired, or carries no id.
        """
        token = _extract_token(raw_header)
        if not token:
            raise Unauthorized()

        claims = self.decode(token)
        if claims is None:
            raise Unauthorized()

        user_id = claims.get("id") or claims.get("sub")
        if not user_id:
            logger.warning("JWT missing id claim")
            raise Unauthorized()

        # A token without a role still authenticates; the role gate rejects it.
        role = claims.get("role")

        return Identity(
            id=str(user_id),
            role=role if isinstance(role, str) else None,
            email=claims.get("email"),
            username=claims.get("username"),
        )

    def decode(self, token: str) -> Optional[dict[str, Any]]:
        """Validate the signature, and the expiry when `exp` is present.

        Returns the claims, or None if invalid.
        """
        try:
            return jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
            )
        except jwt.ExpiredSignatureError:
            logger.warning("JWT token expired")
            return None
        except jwt.InvalidTokenError as e:
            logger.warning(f"Invalid JWT token: {e}")
            return None

    def issue(self, identity: Identity, expires_in: Optional[timedelta] = None) -> str:
        """Sign an access token for an identity."""
        now = datetime.now(timezone.utc)
        lifetime = expires_in or timedelta(minutes=self.expire_minutes)
        payload = {
            "id": identity.id,
            "sub": identity.id,
            "role": identity.role,
            "email": identity.email,
            "username": identity.username,
            "iat": now,
            "exp": now + lifetime,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)


def authorize(identity: Optional[Identity], required_role: str) -> Identity:
    """Permit the identity only if its role equals `required_role` exactly.

    There is no role hierarchy: an admin is not implicitly a user.

    Raises:
        Forbidden: identity is missing or has a different role.
    """
    if identity is None or identity.role != required_role:
        raise Forbidden()
    return identity


def _extract_token(raw_header: Optional[str]) -> Optional[str]:
    if raw_header is None:
        return None
    value = raw_header.strip()
    scheme, _, rest = value.partition(" ")
    if rest and scheme.lower() == "bearer":
        value = rest.strip()
    return value or None
