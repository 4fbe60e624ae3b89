"""Pydantic schemas module."""
from .auth import (
    AuthorizeStatusRequest,
    AuthResponse,
    AuthType,
    SigninRequest,
    SignupRequest,
    UserListResponse,
    UserResponse,
)
from .role import (
    RoleCreate,
    RoleCreatedResponse,
    RoleListResponse,
    RoleResponse,
)
from .common import (
    HealthResponse,
    MessageResponse,
)

__all__ = [
    # Auth
    "AuthorizeStatusRequest",
    "AuthResponse",
    "AuthType",
    "SigninRequest",
    "SignupRequest",
    "UserListResponse",
    "UserResponse",
    # Role
    "RoleCreate",
    "RoleCreatedResponse",
    "RoleListResponse",
    "RoleResponse",
    # Common
    "HealthResponse",
    "MessageResponse",
]
