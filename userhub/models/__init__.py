from .user import User, UserProfile, Identity, GoogleProfile, Role
from .export import ExportColumn, ExportRow


__all__ = [
    "User",
    "UserProfile",
    "Identity",
    "GoogleProfile",
    "Role",
    "ExportColumn",
    "ExportRow",
]
