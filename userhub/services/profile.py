"""Read and update the caller's own user record."""

import logging
from typing import Optional
from uuid import UUID

import psycopg

from userhub.app.errors import NotFound, InternalError, Conflict
from userhub.models.user import Identity, User
from .store import UserStore

logger = logging.getLogger(__name__)


class ProfileService:
    def __init__(self, store: UserStore) -> None:
        self.store = store

    def get_profile(self, identity: Identity) -> User:
        """Look up the record for `identity.id`.

        Raises:
            NotFound: no record has this id.
            InternalError: the store failed.
        """
        user_id = _parse_user_id(identity)
        try:
            user = self.store.get_user_by_id(user_id)
        except psycopg.Error:
            logger.exception(f"Error getting user profile for {identity.id}")
            raise InternalError()
        if user is None:
            raise NotFound("User not found")
        return user

    def update_profile(
        self,
        identity: Identity,
        username: Optional[str] = None,
        email: Optional[str] = None,
    ) -> User:
        """Update username/email on the existing record for `identity.id`.

        Fields passed as None keep their stored value. This never creates a
        record.

        Raises:
            NotFound: no record has this id.
            Conflict: another record already uses the new email.
            InternalError: the store failed.
        """
        user_id = _parse_user_id(identity)
        try:
            user = self.store.update_user_profile(user_id, username, email)
        except psycopg.errors.UniqueViolation:
            logger.info(f"Email already in use, not updating user {identity.id}")
            raise Conflict("Email already in use")
        except psycopg.Error:
            logger.exception(f"Error updating user profile for {identity.id}")
            raise InternalError()
        if user is None:
            raise NotFound("User not found")
        logger.info(f"Updated profile for user {user.id}")
        return user


def _parse_user_id(identity: Identity) -> UUID:
    # Ids that are not UUIDs can't match any stored record.
    try:
        return UUID(identity.id)
    except ValueError:
        raise NotFound("User not found")
