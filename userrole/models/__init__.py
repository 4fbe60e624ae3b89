"""Database models module."""
from .base import Base
from .role import Role
from .session import UserSession
from .user import User

__all__ = [
    "Base",
    "Role",
    "User",
    "UserSession",
]
