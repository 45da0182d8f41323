"""Google sign-in, session-to-token exchange, and logout."""

import logging
import secrets

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse

from userhub.integrations.google.auth import GOOGLE_CALLBACK_PATH
from userhub.models.user import Identity
from userhub.services import GoogleIdentityBridge, AuthRejected
from userhub.app.auth import session_identity
from userhub.app.constants import (
    SESSION_IDENTITY_KEY,
    SESSION_STATE_KEY,
    LOGIN_SUCCESS_REDIRECT,
    LOGIN_FAILURE_REDIRECT,
)
from userhub.app.dependencies import get_identity_bridge, get_token_verifier
from userhub.app.errors import Unauthorized
from userhub.app.models import TokenResponse
from userhub.app.tokens import TokenVerifier

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.get("/auth/google")
def google_login(
    request: Request,
    bridge: GoogleIdentityBridge = Depends(get_identity_bridge),
) -> RedirectResponse:
    """Redirect the browser to Google's consent screen."""
    state = secrets.token_urlsafe(32)
    request.session[SESSION_STATE_KEY] = state
    return RedirectResponse(bridge.begin_auth(state))


@router.get(GOOGLE_CALLBACK_PATH)
async def google_callback(
    request: Request,
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
    bridge: GoogleIdentityBridge = Depends(get_identity_bridge),
) -> RedirectResponse:
    """Google OAuth callback endpoint.

    Browsers land here, so failures redirect to the home page instead of
    returning an error body.
    """
    expected_state = request.session.pop(SESSION_STATE_KEY, None)
    try:
        identity = await bridge.complete_auth(
            code=code, state=state, error=error, expected_state=expected_state
        )
    except AuthRejected as e:
        logger.warning(f"Google sign-in rejected: {e}")
        return RedirectResponse(LOGIN_FAILURE_REDIRECT)
    except Exception:
        logger.exception("Unexpected error completing Google sign-in")
        return RedirectResponse(LOGIN_FAILURE_REDIRECT)

    request.session[SESSION_IDENTITY_KEY] = identity.model_dump()
    logger.info(f"User {identity.id} signed in with Google")
    return RedirectResponse(LOGIN_SUCCESS_REDIRECT)


@router.post("/auth/token", response_model=TokenResponse)
def issue_token(
    identity: Identity | None = Depends(session_identity),
    verifier: TokenVerifier = Depends(get_token_verifier),
) -> TokenResponse:
    """Exchange the signed-in session for a bearer token."""
    if identity is None:
        raise Unauthorized("No active session")
    return TokenResponse(
        access_token=verifier.issue(identity),
        expires_in=verifier.expire_minutes * 60,
    )


@router.get("/auth/logout")
def logout(request: Request) -> RedirectResponse:
    """Clear the session and go back to the home page."""
    request.session.clear()
    return RedirectResponse(LOGIN_FAILURE_REDIRECT)
