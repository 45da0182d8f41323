"""User and identity models for authentication and role-based access control."""

from __future__ import annotations
from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel


Role = Literal["user", "admin"]


class User(BaseModel):
    """A stored user record.

    Records are created on first Google login. The id is assigned by the
    database and never changes; `google_id` links to the provider's subject.
    """

    id: UUID
    username: str | None
    email: str | None
    role: Role
    google_id: str | None = None
    created_at: datetime
    updated_at: datetime

    def to_identity(self) -> Identity:
        return Identity(
            id=str(self.id), role=self.role, email=self.email, username=self.username
        )


class UserProfile(BaseModel):
    """The user fields exposed over the API."""

    id: UUID
    username: str | None
    email: str | None
    role: Role

    @classmethod
    def from_user(cls, user: User) -> UserProfile:
        return cls(id=user.id, username=user.username, email=user.email, role=user.role)


class Identity(BaseModel):
    """The authenticated caller, re-derived on every request.

    `role` is kept as a plain string: tokens may carry roles this service
    does not know about, and the role gate only compares labels. A token
    without a role still authenticates but passes no role gate.
    """

    id: str
    role: str | None = None
    email: str | None = None
    username: str | None = None


class GoogleProfile(BaseModel):
    """Profile assertion returned by Google's userinfo endpoint."""

    sub: str
    email: str | None = None
    email_verified: bool | None = None
    name: str | None = None
    given_name: str | None = None
    picture: str | None = None

    def display_username(self) -> str | None:
        """Pick a username for a newly created user."""
        if self.name:
            return self.name
        if self.email:
            return self.email.split("@", 1)[0]
        return None
