"""Role model."""
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, IdentityMixin


class Role(IdentityMixin, Base):
    """Named role. Immutable once created and referenced, never owned, by users."""

    __tablename__ = "roles"

    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<Role(name={self.name})>"
