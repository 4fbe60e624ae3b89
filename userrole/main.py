"""Main FastAPI application."""
from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings, settings as default_settings
from .core.hashing import PasswordHasher
from .core.logging import configure_logging
from .core.tokens import TokenIssuer
from .database import Database
from .schemas.common import HealthResponse
from .services.account import AccountService
from .services.credential_store import CredentialStore
from .api.middleware import (
    RequestLoggingMiddleware,
    ErrorHandlingMiddleware,
    SecurityHeadersMiddleware
)
from .api.routes import roles, users

logger = structlog.get_logger("userrole.startup")


async def bootstrap(
    database: Database,
    app_settings: Settings,
    hasher: PasswordHasher,
    issuer: TokenIssuer,
) -> None:
    """Create tables, the admin role and, if configured, the admin account."""
    await database.init_models()

    auth = app_settings.auth
    async with database.transaction() as session:
        store = CredentialStore(session, timeout=app_settings.database.operation_timeout)
        accounts = AccountService(store, hasher, issuer)

        role = await accounts.ensure_role(auth.admin_role_name)
        logger.info("Admin role ready", role_id=str(role.id), name=role.name)

        if auth.admin_username and auth.admin_password:
            admin = await accounts.ensure_admin(
                user_name=auth.admin_username,
                password=auth.admin_password,
                email=auth.admin_email,
                admin_role_name=auth.admin_role_name,
            )
            logger.info("Admin account ready", user_id=str(admin.id))


def create_app(
    app_settings: Optional[Settings] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    """Create and configure FastAPI application."""
    app_settings = app_settings or default_settings
    database = database or Database.from_settings(app_settings.database)

    hasher = PasswordHasher(rounds=app_settings.auth.bcrypt_rounds)
    issuer = TokenIssuer(
        secret_key=app_settings.auth.secret_key,
        algorithm=app_settings.auth.algorithm,
        expire_minutes=app_settings.auth.token_expire_minutes,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan events."""
        # Startup
        configure_logging(app_settings.monitoring.log_level)
        await database.connect()
        await bootstrap(database, app_settings, hasher, issuer)
        yield
        # Shutdown
        await database.dispose()

    app = FastAPI(
        title=app_settings.api.title,
        description=app_settings.api.description,
        version=app_settings.api.version,
        docs_url=app_settings.api.docs_url,
        lifespan=lifespan
    )

    app.state.settings = app_settings
    app.state.database = database
    app.state.password_hasher = hasher
    app.state.token_issuer = issuer

    # Add middleware
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(ErrorHandlingMiddleware, debug=app_settings.debug)
    app.add_middleware(RequestLoggingMiddleware)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.api.cors_origins,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
        allow_headers=[
            "Origin", "X-Requested-With", "Content-Type", "Accept", "Authorization"
        ],
    )

    # Include routers
    app.include_router(users.router, prefix=app_settings.api.prefix)
    app.include_router(roles.router, prefix=app_settings.api.prefix)

    # Health check endpoint
    @app.get("/health", response_model=HealthResponse)
    async def health():
        return HealthResponse(
            status="healthy" if database.is_connected else "starting",
            version=app_settings.api.version,
            services={"database": "connected" if database.is_connected else "disconnected"},
        )

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "userrole.main:app",
        host=default_settings.api.host,
        port=default_settings.api.port,
        reload=default_settings.api.reload,
        workers=default_settings.api.workers if not default_settings.api.reload else 1,
    )
