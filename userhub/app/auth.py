"""FastAPI dependencies for bearer-token, session, and role-based authorization."""

import logging
from typing import Optional

from fastapi import Depends, Header, Request
from pydantic import ValidationError

from userhub.models.user import Identity
from .constants import SESSION_IDENTITY_KEY
from .dependencies import get_token_verifier
from .errors import Unauthorized
from .tokens import TokenVerifier, authorize

logger = logging.getLogger(__name__)


async def require_identity(
    authorization: Optional[str] = Header(None),
    verifier: TokenVerifier = Depends(get_token_verifier),
) -> Identity:
    """Require a valid bearer token.

    Returns:
        The identity decoded from the token.

    Raises:
        Unauthorized if the header is missing or the token is invalid.
    """
    return verifier.verify(authorization)


def session_identity(request: Request) -> Optional[Identity]:
    """The identity stored in the session at sign-in, if any."""
    data = request.session.get(SESSION_IDENTITY_KEY)
    if not data:
        return None
    try:
        return Identity.model_validate(data)
    except ValidationError:
        logger.warning("Discarding malformed identity in session")
        request.session.pop(SESSION_IDENTITY_KEY, None)
        return None


async def optional_identity(
    authorization: Optional[str] = Header(None),
    verifier: TokenVerifier = Depends(get_token_verifier),
    from_session: Optional[Identity] = Depends(session_identity),
) -> Optional[Identity]:
    """Identity from a bearer token if one verifies, else from the session.

    Returns None when the caller is anonymous.
    """
    if authorization:
        try:
            return verifier.verify(authorization)
        except Unauthorized:
            logger.debug("Bearer token rejected, falling back to session")
    return from_session


def require_role(role: str):
    """Build a dependency that admits only identities whose role equals `role`."""

    async def dependency(
        identity: Optional[Identity] = Depends(optional_identity),
    ) -> Identity:
        return authorize(identity, role)

    return dependency


require_admin = require_role("admin")
