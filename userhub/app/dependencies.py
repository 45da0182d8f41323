"""Providers for the collaborators the routes depend on.

Routes receive every collaborator through `Depends`, so tests (or another
deployment) can swap any of them with `app.dependency_overrides`.
"""

import os
import logging
from functools import lru_cache

from fastapi import Depends

from userhub.db.users import PostgresUserStore
from userhub.services import ProfileService, ExportService, GoogleIdentityBridge
from userhub.services.store import UserStore
from .tokens import TokenVerifier, DEFAULT_ALGORITHM, DEFAULT_EXPIRE_MINUTES

logger = logging.getLogger(__name__)


@lru_cache
def get_user_store() -> UserStore:
    """Get the Postgres-backed user store."""
    return PostgresUserStore()


@lru_cache
def get_token_verifier() -> TokenVerifier:
    """Build the token verifier from JWT_* environment variables."""
    return TokenVerifier(
        secret=os.environ["JWT_SECRET"],
        algorithm=os.getenv("JWT_ALGORITHM", DEFAULT_ALGORITHM),
        expire_minutes=int(os.getenv("JWT_EXPIRE_MINUTES", DEFAULT_EXPIRE_MINUTES)),
    )


def get_profile_service(store: UserStore = Depends(get_user_store)) -> ProfileService:
    return ProfileService(store)


def get_identity_bridge(
    store: UserStore = Depends(get_user_store),
) -> GoogleIdentityBridge:
    return GoogleIdentityBridge(store)


@lru_cache
def get_export_service() -> ExportService:
    """Export service writing to EXPORT_DIR, or the system temp dir if unset."""
    return ExportService(os.getenv("EXPORT_DIR") or None)
