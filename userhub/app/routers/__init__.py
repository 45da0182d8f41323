from .auth import router as auth_router
from .profile import router as profile_router
from .admin import router as admin_router
from .export import router as export_router

__all__ = [
    "auth_router",
    "profile_router",
    "admin_router",
    "export_router",
]
