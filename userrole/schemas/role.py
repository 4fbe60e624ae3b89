"""Role schemas."""
import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from .common import BaseSchema


class RoleCreate(BaseSchema):
    """Role creation schema."""

    name: Optional[str] = Field(None, description="Name of a role")


class RoleResponse(BaseSchema):
    """Role response schema."""

    id: uuid.UUID = Field(..., description="Role ID")
    name: str = Field(..., description="Role name")
    created_at: datetime = Field(..., description="Creation time")


class RoleCreatedResponse(BaseSchema):
    message: str = Field(..., description="Confirmation message")
    role: RoleResponse = Field(..., description="Created role")


class RoleListResponse(BaseSchema):
    count: int = Field(..., description="Number of roles")
    roles: List[RoleResponse] = Field(..., description="Roles")
