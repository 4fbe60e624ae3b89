"""Account and session schemas."""
import uuid
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field

from .common import BaseSchema


class SignupRequest(BaseSchema):
    """Signup request schema."""

    user_name: str = Field(..., min_length=1, description="Unique user name")
    email: str = Field(..., min_length=1, description="Email address for a user")
    password: str = Field(..., min_length=1, description="User password")
    mobile_number: Optional[str] = Field(None, description="Mobile number")
    user_roles: Optional[uuid.UUID] = Field(None, description="Role id for the user")


class SigninRequest(BaseSchema):
    """Signin request schema. Missing fields are rejected by the service."""

    user_name: Optional[str] = Field(None, description="User name")
    password: Optional[str] = Field(None, description="User password")


class UserResponse(BaseSchema):
    """User as shown to callers: no password hash, no session tokens."""

    id: uuid.UUID = Field(..., description="User ID")
    user_name: str = Field(..., description="User name")
    email: str = Field(..., description="Email address")
    mobile_number: Optional[str] = Field(None, description="Mobile number")
    role_id: Optional[uuid.UUID] = Field(None, description="Role id")
    authorize: bool = Field(..., description="Authorize status")
    created_at: datetime = Field(..., description="Account creation time")
    updated_at: datetime = Field(..., description="Account last update time")


class AuthResponse(BaseSchema):
    """Signup/signin response with the newly issued token."""

    message: str = Field(..., description="Confirmation message")
    user: UserResponse = Field(..., description="User information")
    token: str = Field(..., description="Bearer token for this session")


class AuthType(str, Enum):
    """Filter on the authorize flag."""

    TRUE = "true"
    FALSE = "false"
    ALL = "all"

    @property
    def flag(self) -> Optional[bool]:
        return {"true": True, "false": False}.get(self.value)


class UserListResponse(BaseSchema):
    """Users matching an authorize filter."""

    count: int = Field(..., description="Number of users")
    users: List[UserResponse] = Field(..., description="Users")


class AuthorizeStatusRequest(BaseSchema):
    """Change authorize status request schema."""

    user_id: Optional[uuid.UUID] = Field(None, description="Target user id")
    authorize: Optional[bool] = Field(None, description="New authorize status")
