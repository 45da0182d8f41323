"""Google OAuth sign-in functions."""

import os
from urllib.parse import urlencode
import logging

import httpx
from pydantic import BaseModel

from userhub.models.user import GoogleProfile

PUBLIC_API_BASE_URL = os.environ["PUBLIC_API_BASE_URL"]
GOOGLE_CLIENT_ID = os.environ["GOOGLE_CLIENT_ID"]
GOOGLE_CLIENT_SECRET = os.environ["GOOGLE_CLIENT_SECRET"]
GOOGLE_CALLBACK_PATH = os.getenv("GOOGLE_CALLBACK_PATH", "/auth/google/callback")

AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/v2/auth"
TOKEN_URL = "https://oauth2.googleapis.com/token"
USERINFO_URL = "https://openidconnect.googleapis.com/v1/userinfo"
SCOPES = ["profile", "email"]

logger = logging.getLogger(__name__)


class GoogleAuthError(Exception):
    """Google refused or failed to complete the sign-in."""


class GoogleToken(BaseModel):
    """An OAuth token returned by Google's token endpoint."""

    access_token: str
    expires_in: int | None = None
    token_type: str = "Bearer"
    scope: str | None = None
    id_token: str | None = None


def get_redirect_uri() -> str:
    """The absolute callback URL registered with Google."""
    return f"{PUBLIC_API_BASE_URL.rstrip('/')}{GOOGLE_CALLBACK_PATH}"


def build_oauth_authorize_url(redirect_uri: str, state: str | None = None) -> str:
    """Build the Google consent screen URL.

    Args:
        redirect_uri: The redirect URI to use after authorization
        state: Optional state parameter for CSRF protection

    Raises:
        ValueError: If GOOGLE_CLIENT_ID is not configured
    """
    if not GOOGLE_CLIENT_ID:
        raise ValueError("GOOGLE_CLIENT_ID environment variable is not set")

    params = {
        "client_id": GOOGLE_CLIENT_ID,
        "redirect_uri": redirect_uri,
        "scope": " ".join(SCOPES),
        "response_type": "code",
    }
    if state is not None:
        params["state"] = state

    url = f"{AUTHORIZE_URL}?{urlencode(params)}"
    logger.debug(f"Built Google OAuth authorize URL: {url}")
    return url


async def exchange_code_for_token(code: str) -> GoogleToken:
    """Exchange a Google authorization code for an access token.

    Raises:
        GoogleAuthError: If the client is not configured or Google rejects the code.
    """
    if not GOOGLE_CLIENT_ID or not GOOGLE_CLIENT_SECRET:
        raise GoogleAuthError(
            "Google OAuth not configured. Missing GOOGLE_CLIENT_ID or GOOGLE_CLIENT_SECRET"
        )

    try:
        async with httpx.AsyncClient(timeout=10) as client:
            response = await client.post(
                TOKEN_URL,
                data={
                    "client_id": GOOGLE_CLIENT_ID,
                    "client_secret": GOOGLE_CLIENT_SECRET,
                    "code": code,
                    "grant_type": "authorization_code",
                    "redirect_uri": get_redirect_uri(),
                },
                headers={"Content-Type": "application/x-www-form-urlencoded"},
            )
    except httpx.HTTPError as e:
        raise GoogleAuthError(f"Google token request failed: {e}") from e

    if response.status_code != 200:
        logger.error(
            f"Failed to exchange Google code: {response.status_code} - {response.text}"
        )
        raise GoogleAuthError(
            f"Failed to exchange Google code (status {response.status_code})"
        )

    try:
        return GoogleToken.model_validate(response.json())
    except ValueError as e:
        raise GoogleAuthError(f"Unexpected token response from Google: {e}") from e


async def fetch_user_profile(access_token: str) -> GoogleProfile:
    """Fetch the signed-in user's profile from Google's userinfo endpoint.

    Raises:
        GoogleAuthError: If the request fails or the response is not a profile.
    """
    try:
        async with httpx.AsyncClient(timeout=10) as client:
            response = await client.get(
                USERINFO_URL,
                headers={"Authorization": f"Bearer {access_token}"},
            )
    except httpx.HTTPError as e:
        raise GoogleAuthError(f"Google userinfo request failed: {e}") from e

    if response.status_code != 200:
        logger.error(
            f"Failed to fetch Google profile: {response.status_code} - {response.text}"
        )
        raise GoogleAuthError(
            f"Failed to fetch Google profile (status {response.status_code})"
        )

    try:
        return GoogleProfile.model_validate(response.json())
    except ValueError as e:
        raise GoogleAuthError(f"Unexpected userinfo response from Google: {e}") from e
