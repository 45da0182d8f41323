"""Sign-in through Google and the mapping onto local user records."""

import logging
from typing import Optional

import psycopg

from userhub.integrations import google
from userhub.models.user import GoogleProfile, Identity, User
from .store import UserStore

logger = logging.getLogger(__name__)


class AuthRejected(Exception):
    """The sign-in could not be completed. Reported by redirect, not by error body."""


class GoogleIdentityBridge:
    """Delegates authentication to Google and resolves the local user."""

    def __init__(self, store: UserStore) -> None:
        self.store = store

    def begin_auth(self, state: str) -> str:
        """URL of Google's consent screen asking for the profile and email scopes."""
        return google.build_oauth_authorize_url(
            redirect_uri=google.get_redirect_uri(), state=state
        )

    async def complete_auth(
        self,
        code: Optional[str],
        state: Optional[str],
        error: Optional[str] = None,
        expected_state: Optional[str] = None,
    ) -> Identity:
        """Finish the OAuth flow and return the signed-in identity.

        Raises:
            AuthRejected: the user denied consent, the state did not match,
                Google failed, or the user record could not be resolved.
        """
        if error:
            logger.warning(f"Google OAuth error: {error}")
            raise AuthRejected(f"Provider returned error: {error}")
        if not code:
            raise AuthRejected("No code provided")
        if expected_state is None or state != expected_state:
            logger.warning("Google OAuth state mismatch")
            raise AuthRejected("State mismatch")

        try:
            token = await google.exchange_code_for_token(code)
            profile = await google.fetch_user_profile(token.access_token)
        except google.GoogleAuthError as e:
            logger.error(f"Google sign-in failed: {e}")
            raise AuthRejected(str(e)) from e

        try:
            user = self.resolve_user(profile)
        except psycopg.Error as e:
            logger.exception(f"Error resolving user for Google subject {profile.sub}")
            raise AuthRejected("Could not resolve user") from e
        return user.to_identity()

    def resolve_user(self, profile: GoogleProfile) -> User:
        """Find the user for a Google profile, linking or creating as needed.

        Matches on the Google subject first, then on email (unless Google says
        the email is unverified). Unmatched profiles get a new record with the
        'user' role. Emails are unique, so an unverified email already held by
        another record is not stored on the new one.
        """
        user = self.store.get_user_by_google_id(profile.sub)
        if user is not None:
            return user

        email = profile.email
        if email:
            user = self.store.get_user_by_email(email)
            if user is not None:
                if profile.email_verified is not False:
                    logger.info(
                        f"Linking Google subject {profile.sub} to user {user.id}"
                    )
                    linked = self.store.link_google_account(user.id, profile.sub)
                    return linked or user
                logger.warning(
                    f"Unverified email for Google subject {profile.sub} belongs "
                    f"to user {user.id}; creating the new user without it"
                )
                email = None

        return self.store.create_user(
            username=profile.display_username(),
            email=email,
            google_id=profile.sub,
            role="user",
        )
