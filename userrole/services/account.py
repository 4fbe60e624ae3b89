"""Account service: signup, signin, signout and role administration."""
import asyncio
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional, Union

from ..core.exceptions import (
    InvalidCredentialsError,
    MissingParametersError,
    NotFoundError,
    ValidationError,
)
from ..core.hashing import PasswordHasher
from ..core.tokens import TokenIssuer
from ..models.role import Role
from ..models.user import User
from ..schemas.auth import AuthType, SignupRequest, UserResponse
from ..schemas.role import RoleResponse
from .credential_store import CredentialStore
from .session_registry import SessionRegistry


@dataclass
class AuthResult:
    """A redacted user plus the token issued for this session."""

    user: UserResponse
    token: str


def display_user(user: User) -> UserResponse:
    """Project a user for callers, dropping the password hash and tokens."""
    return UserResponse.model_validate(user)


class AccountService:
    """Orchestrates the credential store, hasher, token issuer and registry."""

    def __init__(
        self,
        store: CredentialStore,
        hasher: PasswordHasher,
        issuer: TokenIssuer,
        registry: Optional[SessionRegistry] = None,
    ):
        self.store = store
        self.hasher = hasher
        self.issuer = issuer
        self.registry = registry or SessionRegistry(store)

    async def _open_session(self, user: User) -> str:
        issued_at = datetime.now(timezone.utc)
        token = self.issuer.issue(user.id, issued_at=issued_at)
        await self.registry.add_session(user, token, issued_at=issued_at)
        return token

    async def signup(self, fields: SignupRequest) -> AuthResult:
        """Create an unauthorized user and open its first session."""
        # bcrypt is CPU bound; keep it off the event loop
        password_hash = await asyncio.to_thread(self.hasher.hash, fields.password)
        user = await self.store.create_user(
            user_name=fields.user_name,
            email=fields.email,
            password_hash=password_hash,
            mobile_number=fields.mobile_number,
            role_id=fields.user_roles,
        )
        token = await self._open_session(user)
        return AuthResult(user=display_user(user), token=token)

    async def signin(self, user_name: Optional[str], password: Optional[str]) -> AuthResult:
        """Check credentials and open an additional session.

        Unknown user names and wrong passwords fail identically.
        """
        if not (user_name and password):
            raise MissingParametersError()

        user = await self.store.find_user_by_name(user_name)
        hashed = user.password_hash if user is not None else self.hasher.dummy_hash
        matched = await asyncio.to_thread(self.hasher.verify, password, hashed)
        if user is None or not matched:
            raise InvalidCredentialsError()

        token = await self._open_session(user)
        return AuthResult(user=display_user(user), token=token)

    async def signout(self, user: User, token: str) -> None:
        """Revoke only the presented token. Repeated calls are harmless."""
        await self.registry.revoke_session(user, token)

    async def list_users_by_auth_type(
        self, auth_type: Union[AuthType, str]
    ) -> List[UserResponse]:
        try:
            auth_type = AuthType(auth_type)
        except ValueError as exc:
            raise ValidationError(
                "authType must be one of true, false, all",
                details={"authType": str(auth_type)},
            ) from exc

        users = await self.store.list_users_by_auth_flag(auth_type.flag)
        return [display_user(user) for user in users]

    async def change_authorize_status(
        self, user_id: Optional[uuid.UUID], authorize: Optional[bool]
    ) -> UserResponse:
        """Set a user's authorize flag. Callers must already be vetted as admin."""
        if user_id is None or authorize is None:
            raise MissingParametersError()

        user = await self.store.find_user_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found", details={"userId": str(user_id)})

        user.authorize = bool(authorize)
        await self.store.save_user(user)
        return display_user(user)

    async def create_role(self, name: Optional[str]) -> RoleResponse:
        role = await self.store.create_role(name)
        return RoleResponse.model_validate(role)

    async def list_roles(self) -> List[RoleResponse]:
        roles = await self.store.list_roles()
        return [RoleResponse.model_validate(role) for role in roles]

    async def ensure_role(self, name: str) -> Role:
        """Return the named role, creating it when missing."""
        role = await self.store.find_role_by_name(name)
        if role is None:
            role = await self.store.create_role(name)
        return role

    async def ensure_admin(
        self, user_name: str, password: str, email: str, admin_role_name: str
    ) -> User:
        """Make sure an account holding the admin role exists.

        An existing account with that name keeps its password but is moved
        onto the admin role.
        """
        role = await self.ensure_role(admin_role_name)
        user = await self.store.find_user_by_name(user_name)
        if user is None:
            password_hash = await asyncio.to_thread(self.hasher.hash, password)
            return await self.store.create_user(
                user_name=user_name,
                email=email,
                password_hash=password_hash,
                role_id=role.id,
            )

        if user.role_id != role.id:
            user.role_id = role.id
            await self.store.save_user(user)
            user = await self.store.find_user_by_id(user.id)
        return user
