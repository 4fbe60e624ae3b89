"""Session token model."""
import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, utcnow


class UserSession(Base):
    """One issued bearer token registered to a user.

    Rows are appended with a single INSERT and removed with a single DELETE,
    so concurrent signins for the same user never overwrite each other.
    The autoincrement id preserves issue order.
    """

    __tablename__ = "user_sessions"
    __table_args__ = (
        UniqueConstraint("user_id", "token", name="uq_user_sessions_user_token"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    token: Mapped[str] = mapped_column(Text, nullable=False)
    issued_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )

    def __repr__(self) -> str:
        return f"<UserSession(user_id={self.user_id}, issued_at={self.issued_at})>"
