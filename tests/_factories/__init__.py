from .user import UserFactory, InMemoryUserStore
from .session import make_session_cookie

__all__ = [
    "UserFactory",
    "InMemoryUserStore",
    "make_session_cookie",
]
