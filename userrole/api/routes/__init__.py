"""API routers."""
from . import roles, users

__all__ = ["roles", "users"]
