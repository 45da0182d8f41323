"""Database operations for user records."""

import logging
from typing import Optional
from uuid import UUID

from userhub.models.user import User, Role
from .connection import get_db_cursor

logger = logging.getLogger(__name__)

USER_COLUMNS = "id, username, email, role, google_id, created_at, updated_at"


class PostgresUserStore:
    """User store backed by the `users` table.

    Every method opens its own connection; there is no shared state.
    """

    def get_user_by_id(self, user_id: UUID) -> Optional[User]:
        with get_db_cursor() as cursor:
            cursor.execute(
                f"SELECT {USER_COLUMNS} FROM users WHERE id = %s",
                (str(user_id),),
            )
            row = cursor.fetchone()
            return _row_to_user(row) if row else None

    def get_user_by_google_id(self, google_id: str) -> Optional[User]:
        """Get a user by the Google subject id recorded at login."""
        with get_db_cursor() as cursor:
            cursor.execute(
                f"SELECT {USER_COLUMNS} FROM users WHERE google_id = %s",
                (google_id,),
            )
            row = cursor.fetchone()
            return _row_to_user(row) if row else None

    def get_user_by_email(self, email: str) -> Optional[User]:
        """Get a user by email, ignoring case."""
        with get_db_cursor() as cursor:
            cursor.execute(
                f"SELECT {USER_COLUMNS} FROM users WHERE lower(email) = lower(%s)",
                (email,),
            )
            row = cursor.fetchone()
            return _row_to_user(row) if row else None

    def create_user(
        self,
        username: Optional[str],
        email: Optional[str],
        google_id: Optional[str] = None,
        role: Role = "user",
    ) -> User:
        """Create a new user record with a database-assigned id."""
        logger.info(f"Creating new user with google_id={google_id}, email={email}")
        with get_db_cursor() as cursor:
            cursor.execute(
                f"""
                INSERT INTO users (username, email, google_id, role)
                VALUES (%s, %s, %s, %s)
                RETURNING {USER_COLUMNS}
                """,
                (username, email, google_id, role),
            )
            row = cursor.fetchone()
            user = _row_to_user(row)
            logger.info(f"Created user id={user.id}")
            return user

    def update_user_profile(
        self,
        user_id: UUID,
        username: Optional[str],
        email: Optional[str],
    ) -> Optional[User]:
        """Update username and/or email of an existing user.

        A None argument leaves that column unchanged. Never inserts: returns
        None if no user has this id.
        """
        with get_db_cursor() as cursor:
            cursor.execute(
                f"""
                UPDATE users
                SET username = COALESCE(%s, username),
                    email = COALESCE(%s, email)
                WHERE id = %s
                RETURNING {USER_COLUMNS}
                """,
                (username, email, str(user_id)),
            )
            row = cursor.fetchone()
            return _row_to_user(row) if row else None

    def link_google_account(self, user_id: UUID, google_id: str) -> Optional[User]:
        """Attach a Google subject id to an existing user."""
        with get_db_cursor() as cursor:
            cursor.execute(
                f"""
                UPDATE users
                SET google_id = %s
                WHERE id = %s
                RETURNING {USER_COLUMNS}
                """,
                (google_id, str(user_id)),
            )
            row = cursor.fetchone()
            return _row_to_user(row) if row else None


def _row_to_user(row) -> User:
    """Convert a database row to a User object."""
    id, username, email, role, google_id, created_at, updated_at = row
    return User(
        id=id,
        username=username,
        email=email,
        role=role,
        google_id=google_id,
        created_at=created_at,
        updated_at=updated_at,
    )
