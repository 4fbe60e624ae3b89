"""Per-user registry of currently valid session tokens."""
from datetime import datetime, timezone
from typing import List, Optional

from ..models.session import UserSession
from ..models.user import User
from .credential_store import CredentialStore


class SessionRegistry:
    """View over a user's registered tokens.

    A token that verifies cryptographically is only usable while it is
    registered here. Removing it is how a session is revoked.
    """

    def __init__(self, store: CredentialStore):
        self.store = store

    async def add_session(
        self, user: User, token: str, issued_at: Optional[datetime] = None
    ) -> None:
        """Append ``token`` to the user's sessions."""
        await self.store.append_session(
            user.id, token, issued_at or datetime.now(timezone.utc)
        )

    async def revoke_session(self, user: User, token: str) -> bool:
        """Remove ``token`` from the user's sessions.

        Unknown or already revoked tokens are ignored. Returns whether a
        session was actually removed.
        """
        if not token:
            return False
        return await self.store.remove_session(user.id, token) > 0

    async def is_active(self, user: User, token: str) -> bool:
        if not token:
            return False
        return await self.store.has_session(user.id, token)

    async def sessions(self, user: User) -> List[UserSession]:
        """The user's sessions, most recent last."""
        return await self.store.list_sessions(user.id)
