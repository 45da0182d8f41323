from .profile import ProfileService
from .export import ExportService
from .identity import GoogleIdentityBridge, AuthRejected
from .store import UserStore

__all__ = [
    "ProfileService",
    "ExportService",
    "GoogleIdentityBridge",
    "AuthRejected",
    "UserStore",
]
