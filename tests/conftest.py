"""Test configuration and fixtures."""
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from userrole.config import AuthSettings, DatabaseSettings, Settings
from userrole.core.hashing import PasswordHasher
from userrole.core.tokens import TokenIssuer
from userrole.database import Database
from userrole.main import create_app
from userrole.schemas.auth import SignupRequest
from userrole.services import AccountService, CredentialStore, SessionRegistry

TEST_SECRET_KEY = "test-secret-key"
ADMIN_USERNAME = "root"
ADMIN_PASSWORD = "rootpassword123"


@pytest.fixture
def database_url(tmp_path):
    """SQLite file per test; shared by every connection the app opens."""
    return f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"


@pytest.fixture
def test_settings(database_url):
    return Settings(
        environment="test",
        debug=True,
        database=DatabaseSettings(url=database_url),
        auth=AuthSettings(
            secret_key=TEST_SECRET_KEY,
            bcrypt_rounds=4,
            admin_username=ADMIN_USERNAME,
            admin_password=ADMIN_PASSWORD,
            admin_email="root@example.com",
        ),
    )


# Core fixtures

@pytest_asyncio.fixture
async def database(database_url):
    """Connected database with tables created."""
    db = Database(database_url)
    await db.connect()
    await db.init_models()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def db_session(database):
    session = database.session()
    try:
        yield session
    finally:
        await session.close()


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture
def issuer():
    return TokenIssuer(secret_key=TEST_SECRET_KEY, expire_minutes=60)


@pytest.fixture
def store(db_session):
    return CredentialStore(db_session)


@pytest.fixture
def registry(store):
    return SessionRegistry(store)


@pytest.fixture
def accounts(store, hasher, issuer, registry):
    return AccountService(store, hasher, issuer, registry)


@pytest_asyncio.fixture
async def admin_user(accounts):
    """Account holding the admin role."""
    return await accounts.ensure_admin(
        user_name=ADMIN_USERNAME,
        password=ADMIN_PASSWORD,
        email="root@example.com",
        admin_role_name="admin",
    )


@pytest_asyncio.fixture
async def alice(accounts):
    """Freshly signed up, unauthorized user with one session."""
    return await accounts.signup(
        SignupRequest(
            user_name="alice",
            email="alice@example.com",
            password="p1",
            mobile_number="5550100000",
        )
    )


# HTTP fixtures

@pytest.fixture
def client(test_settings):
    """Test client over an app whose lifespan bootstraps the admin account."""
    app = create_app(test_settings)

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_token(client):
    response = client.post(
        "/api/v2/users/signin",
        json={"userName": ADMIN_USERNAME, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200
    return response.json()["token"]


@pytest.fixture
def admin_headers(admin_token):
    return {"Authorization": f"Bearer {admin_token}"}