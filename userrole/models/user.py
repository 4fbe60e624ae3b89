"""User model."""
import uuid
from typing import Optional

from sqlalchemy import Boolean, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, IdentityMixin
from .role import Role


class User(IdentityMixin, Base):
    """User model for authentication and authorization.

    Active session tokens live in ``user_sessions`` and are managed through
    the session registry rather than loaded with the user.
    """

    __tablename__ = "users"

    user_name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    mobile_number: Mapped[Optional[str]] = mapped_column(String(32))
    role_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid, ForeignKey("roles.id"), nullable=True
    )
    authorize: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    role: Mapped[Optional[Role]] = relationship(Role, lazy="joined")

    def __repr__(self) -> str:
        return f"<User(user_name={self.user_name}, authorize={self.authorize})>"
