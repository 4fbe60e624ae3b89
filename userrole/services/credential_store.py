"""Durable storage and lookup of users, roles and their session tokens."""
import asyncio
import uuid
from datetime import datetime
from typing import Awaitable, List, Optional, TypeVar

from sqlalchemy import delete, exists, insert, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from ..core.exceptions import PersistenceError, ValidationError
from ..models.role import Role
from ..models.session import UserSession
from ..models.user import User

T = TypeVar("T")


class CredentialStore:
    """Repository over the users, roles and user_sessions tables.

    Every call is bounded by ``timeout`` seconds. Driver failures and
    timeouts surface as PersistenceError, unique-constraint violations as
    ValidationError. Nothing is cached: each call reads current state.

    A failed write rolls the session back, which expires every instance
    loaded through it. Copy attributes you still need before such a call.
    """

    def __init__(self, db: AsyncSession, timeout: float = 5.0):
        self.db = db
        self.timeout = timeout

    async def _guard(self, operation: str, awaitable: Awaitable[T]) -> T:
        try:
            return await asyncio.wait_for(awaitable, timeout=self.timeout)
        except asyncio.TimeoutError as exc:
            await self.db.rollback()
            raise PersistenceError(
                f"{operation} timed out",
                details={"timeout_seconds": self.timeout},
            ) from exc
        except SQLAlchemyError as exc:
            await self.db.rollback()
            raise PersistenceError(f"{operation} failed") from exc

    # Users

    async def create_user(
        self,
        user_name: str,
        email: str,
        password_hash: str,
        mobile_number: Optional[str] = None,
        role_id: Optional[uuid.UUID] = None,
    ) -> User:
        """Persist a new user with ``authorize=False`` and no sessions."""
        user_name = (user_name or "").strip()
        if not user_name:
            raise ValidationError("userName is required")
        if not email:
            raise ValidationError("email is required")
        if not password_hash:
            raise ValidationError("password is required")

        async def _create() -> uuid.UUID:
            if await self._user_name_taken(user_name):
                raise ValidationError(
                    "userName already exists", details={"userName": user_name}
                )
            if role_id is not None and await self._find_role(role_id) is None:
                raise ValidationError(
                    "Unknown role", details={"userRoles": str(role_id)}
                )

            user = User(
                user_name=user_name,
                email=email,
                password_hash=password_hash,
                mobile_number=mobile_number,
                role_id=role_id,
                authorize=False,
            )
            self.db.add(user)
            try:
                await self.db.commit()
            except IntegrityError as exc:
                await self.db.rollback()
                raise ValidationError(
                    "userName already exists", details={"userName": user_name}
                ) from exc
            return user.id

        user_id = await self._guard("create user", _create())
        return await self.find_user_by_id(user_id)

    async def _user_name_taken(self, user_name: str) -> bool:
        stmt = select(exists().where(User.user_name == user_name))
        return bool(await self.db.scalar(stmt))

    async def _load_user(self, *criteria) -> Optional[User]:
        stmt = (
            select(User)
            .options(joinedload(User.role))
            .where(*criteria)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def find_user_by_name(self, user_name: str) -> Optional[User]:
        """Get user by user name, normalized the same way as on create."""
        user_name = (user_name or "").strip()
        return await self._guard(
            "find user", self._load_user(User.user_name == user_name)
        )

    async def find_user_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        """Get user by ID."""
        return await self._guard("find user", self._load_user(User.id == user_id))

    async def list_users_by_auth_flag(self, flag: Optional[bool]) -> List[User]:
        """List users with the given ``authorize`` value, or all users for None."""
        stmt = select(User).options(joinedload(User.role))
        if flag is not None:
            stmt = stmt.where(User.authorize.is_(flag))
        stmt = stmt.order_by(User.created_at, User.id)

        async def _list() -> List[User]:
            result = await self.db.execute(stmt)
            return list(result.scalars().unique().all())

        return await self._guard("list users", _list())

    async def save_user(self, user: User) -> User:
        """Persist mutations made to a loaded user."""
        async def _save() -> None:
            self.db.add(user)
            await self.db.commit()

        await self._guard("save user", _save())
        return user

    # Sessions

    async def append_session(
        self, user_id: uuid.UUID, token: str, issued_at: datetime
    ) -> None:
        """Register a token for a user in one INSERT."""
        stmt = insert(UserSession).values(
            user_id=user_id, token=token, issued_at=issued_at
        )

        async def _append() -> None:
            try:
                await self.db.execute(stmt)
                await self.db.commit()
            except IntegrityError as exc:
                await self.db.rollback()
                raise ValidationError("Token is already registered") from exc

        await self._guard("add session", _append())

    async def remove_session(self, user_id: uuid.UUID, token: str) -> int:
        """Delete the exact token for a user. Returns the number of rows removed."""
        stmt = delete(UserSession).where(
            UserSession.user_id == user_id, UserSession.token == token
        )

        async def _remove() -> int:
            result = await self.db.execute(stmt)
            await self.db.commit()
            return result.rowcount or 0

        return await self._guard("revoke session", _remove())

    async def has_session(self, user_id: uuid.UUID, token: str) -> bool:
        stmt = select(
            exists().where(UserSession.user_id == user_id, UserSession.token == token)
        )

        async def _has() -> bool:
            return bool(await self.db.scalar(stmt))

        return await self._guard("check session", _has())

    async def list_sessions(self, user_id: uuid.UUID) -> List[UserSession]:
        """Sessions for a user, oldest first."""
        stmt = (
            select(UserSession)
            .where(UserSession.user_id == user_id)
            .order_by(UserSession.id)
        )

        async def _list() -> List[UserSession]:
            result = await self.db.execute(stmt)
            return list(result.scalars().all())

        return await self._guard("list sessions", _list())

    # Roles

    async def create_role(self, name: str) -> Role:
        """Create a uniquely named role."""
        name = (name or "").strip()
        if not name:
            raise ValidationError("Role name is required")

        async def _create() -> Role:
            taken = await self.db.scalar(select(exists().where(Role.name == name)))
            if taken:
                raise ValidationError("Role already exists", details={"name": name})

            role = Role(name=name)
            self.db.add(role)
            try:
                await self.db.commit()
            except IntegrityError as exc:
                await self.db.rollback()
                raise ValidationError(
                    "Role already exists", details={"name": name}
                ) from exc
            return role

        return await self._guard("create role", _create())

    async def _find_role(self, role_id: uuid.UUID) -> Optional[Role]:
        return await self.db.get(Role, role_id)

    async def find_role_by_name(self, name: str) -> Optional[Role]:
        async def _find() -> Optional[Role]:
            result = await self.db.execute(select(Role).where(Role.name == name))
            return result.scalar_one_or_none()

        return await self._guard("find role", _find())

    async def list_roles(self) -> List[Role]:
        async def _list() -> List[Role]:
            result = await self.db.execute(
                select(Role).order_by(Role.created_at, Role.id)
            )
            return list(result.scalars().all())

        return await self._guard("list roles", _list())
