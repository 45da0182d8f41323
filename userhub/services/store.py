from typing import Optional, Protocol
from uuid import UUID

from userhub.models.user import User, Role


class UserStore(Protocol):
    """The user persistence operations the services rely on.

    `userhub.db.users.PostgresUserStore` is the production implementation.
    """

    def get_user_by_id(self, user_id: UUID) -> Optional[User]: ...

    def get_user_by_google_id(self, google_id: str) -> Optional[User]: ...

    def get_user_by_email(self, email: str) -> Optional[User]: ...

    def create_user(
        self,
        username: Optional[str],
        email: Optional[str],
        google_id: Optional[str] = None,
        role: Role = "user",
    ) -> User: ...

    def update_user_profile(
        self, user_id: UUID, username: Optional[str], email: Optional[str]
    ) -> Optional[User]: ...

    def link_google_account(self, user_id: UUID, google_id: str) -> Optional[User]: ...
