"""Authorization gate and the FastAPI dependencies that wire it up."""
from dataclasses import dataclass, replace
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_db
from ..models.user import User
from ..services.account import AccountService
from ..services.credential_store import CredentialStore
from ..services.session_registry import SessionRegistry
from .exceptions import AuthenticationError, AuthorizationError
from .hashing import PasswordHasher
from .tokens import TokenIssuer


@dataclass(frozen=True)
class RequestContext:
    """What the gate knows about a request. Each stage returns a new copy."""

    bearer_token: Optional[str] = None
    user: Optional[User] = None
    token: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None


def is_admin(user: User, admin_role_name: str) -> bool:
    """Admin rights come from holding the role named ``admin_role_name``."""
    return user.role is not None and user.role.name == admin_role_name


class AuthorizationGate:
    """Two sequential stages: ``authenticate`` then ``authorize_admin``.

    Both either return the context or raise. Neither touches stored data.
    """

    def __init__(
        self,
        issuer: TokenIssuer,
        store: CredentialStore,
        admin_role_name: str = "admin",
    ):
        self.issuer = issuer
        self.store = store
        self.registry = SessionRegistry(store)
        self.admin_role_name = admin_role_name

    async def authenticate(self, context: RequestContext) -> RequestContext:
        """Resolve the bearer token to a user whose session is still registered."""
        token = context.bearer_token
        if not token:
            raise AuthenticationError("Please authenticate")

        claims = self.issuer.verify(token)

        user = await self.store.find_user_by_id(claims.user_id)
        if user is None:
            raise AuthenticationError("Please authenticate")

        if not await self.registry.is_active(user, token):
            raise AuthenticationError("Session has been revoked")

        return replace(context, user=user, token=token)

    def authorize_admin(self, context: RequestContext) -> RequestContext:
        """Let only admin role holders through."""
        if not context.is_authenticated:
            raise AuthenticationError("Please authenticate")

        if not is_admin(context.user, self.admin_role_name):
            raise AuthorizationError("Admin access required")

        return context


# Security scheme
security = HTTPBearer(auto_error=False)


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.token_issuer


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_credential_store(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> CredentialStore:
    """Request-scoped store. Never reused across requests."""
    timeout = request.app.state.settings.database.operation_timeout
    return CredentialStore(db, timeout=timeout)


def get_account_service(
    store: CredentialStore = Depends(get_credential_store),
    hasher: PasswordHasher = Depends(get_password_hasher),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> AccountService:
    return AccountService(store, hasher, issuer)


def get_authorization_gate(
    request: Request,
    store: CredentialStore = Depends(get_credential_store),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> AuthorizationGate:
    return AuthorizationGate(
        issuer,
        store,
        admin_role_name=request.app.state.settings.auth.admin_role_name,
    )


async def get_auth_context(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    gate: AuthorizationGate = Depends(get_authorization_gate),
) -> RequestContext:
    """Stage ``auth``: authenticate the presented bearer token."""
    bearer_token = credentials.credentials if credentials else None
    context = await gate.authenticate(RequestContext(bearer_token=bearer_token))
    # Plain id only: the ORM instance is detached once the session closes
    request.state.user_id = str(context.user.id)
    return context


def require_admin(
    context: RequestContext = Depends(get_auth_context),
    gate: AuthorizationGate = Depends(get_authorization_gate),
) -> RequestContext:
    """Stage ``adminAuth``: composed after ``auth`` for privileged routes."""
    return gate.authorize_admin(context)
