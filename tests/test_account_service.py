"""Tests for signup, signin, signout and authorization management."""
import asyncio
import uuid

import pytest

from userrole.core.exceptions import (
    InvalidCredentialsError,
    MissingParametersError,
    NotFoundError,
    ValidationError,
)
from userrole.schemas.auth import SignupRequest
from userrole.services import AccountService, CredentialStore


async def _tokens(registry, store, user_id):
    user = await store.find_user_by_id(user_id)
    return [s.token for s in await registry.sessions(user)]


async def test_signup_starts_unauthorized_with_one_session(alice, store, registry):
    assert alice.user.authorize is False
    assert alice.user.user_name == "alice"
    assert await _tokens(registry, store, alice.user.id) == [alice.token]


async def test_signup_hides_credentials(alice):
    shown = alice.user.model_dump()

    assert "password_hash" not in shown
    assert "sessions" not in shown
    assert "p1" not in str(shown)


async def test_signup_stores_hash_not_password(alice, store, hasher):
    user = await store.find_user_by_name("alice")

    assert user.password_hash != "p1"
    assert hasher.verify("p1", user.password_hash)


async def test_signup_duplicate_user_name(alice, accounts):
    with pytest.raises(ValidationError):
        await accounts.signup(
            SignupRequest(user_name="alice", email="other@example.com", password="p2")
        )


async def test_signup_with_role(accounts):
    role = await accounts.create_role("editor")

    result = await accounts.signup(
        SignupRequest(
            user_name="bob", email="bob@example.com", password="pw", user_roles=role.id
        )
    )

    assert result.user.role_id == role.id


async def test_signin_appends_new_session(alice, accounts, store, registry):
    """Test signin adds a distinct token and keeps earlier sessions."""
    second = await accounts.signin("alice", "p1")

    assert second.token != alice.token
    assert await _tokens(registry, store, alice.user.id) == [alice.token, second.token]


@pytest.mark.parametrize(
    "user_name,password",
    [(None, "p1"), ("alice", None), ("", "p1"), ("alice", "")],
)
async def test_signin_missing_parameters(alice, accounts, user_name, password):
    with pytest.raises(MissingParametersError) as exc_info:
        await accounts.signin(user_name, password)

    assert exc_info.value.status_code == 401


async def test_signin_failures_look_the_same(alice, accounts):
    """Test wrong password and unknown user raise the same error."""
    with pytest.raises(InvalidCredentialsError) as wrong_password:
        await accounts.signin("alice", "nope")
    with pytest.raises(InvalidCredentialsError) as unknown_user:
        await accounts.signin("mallory", "p1")

    assert wrong_password.value.message == unknown_user.value.message
    assert wrong_password.value.status_code == unknown_user.value.status_code


async def test_signout_revokes_only_presented_token(alice, accounts, store, registry):
    second = await accounts.signin("alice", "p1")
    user = await store.find_user_by_id(alice.user.id)

    await accounts.signout(user, alice.token)

    assert not await registry.is_active(user, alice.token)
    assert await registry.is_active(user, second.token)


async def test_signout_is_idempotent(alice, accounts, store, registry):
    user = await store.find_user_by_id(alice.user.id)

    await accounts.signout(user, alice.token)
    await accounts.signout(user, alice.token)
    await accounts.signout(user, "never-issued")

    assert await registry.sessions(user) == []


async def test_concurrent_signins_keep_every_session(alice, database, hasher, issuer, store, registry):
    """Test parallel signins for one user do not lose each other's sessions."""
    async def signin_in_own_request():
        async with database.transaction() as session:
            service = AccountService(CredentialStore(session), hasher, issuer)
            return await service.signin("alice", "p1")

    results = await asyncio.gather(*(signin_in_own_request() for _ in range(3)))

    tokens = await _tokens(registry, store, alice.user.id)
    assert len(tokens) == 4
    assert set(tokens) == {alice.token, *(r.token for r in results)}


async def test_list_users_by_auth_type(alice, accounts):
    await accounts.change_authorize_status(alice.user.id, True)
    await accounts.signup(
        SignupRequest(user_name="bob", email="bob@example.com", password="pw")
    )

    authorized = await accounts.list_users_by_auth_type("true")
    unauthorized = await accounts.list_users_by_auth_type("false")
    everyone = await accounts.list_users_by_auth_type("all")

    assert [u.user_name for u in authorized] == ["alice"]
    assert [u.user_name for u in unauthorized] == ["bob"]
    assert len(everyone) == 2


async def test_list_users_rejects_unknown_auth_type(accounts):
    with pytest.raises(ValidationError):
        await accounts.list_users_by_auth_type("maybe")


async def test_change_authorize_status(alice, accounts, store):
    shown = await accounts.change_authorize_status(alice.user.id, True)

    assert shown.authorize is True
    assert (await store.find_user_by_id(alice.user.id)).authorize is True

    await accounts.change_authorize_status(alice.user.id, False)
    assert (await store.find_user_by_id(alice.user.id)).authorize is False


@pytest.mark.parametrize("missing", ["user_id", "authorize"])
async def test_change_authorize_status_missing_field(alice, accounts, store, missing):
    """Test a missing argument fails and leaves the user untouched."""
    args = {"user_id": alice.user.id, "authorize": True}
    args[missing] = None

    with pytest.raises(MissingParametersError):
        await accounts.change_authorize_status(**args)

    assert (await store.find_user_by_id(alice.user.id)).authorize is False


async def test_change_authorize_status_unknown_user(accounts):
    with pytest.raises(NotFoundError):
        await accounts.change_authorize_status(uuid.uuid4(), True)


async def test_roles(accounts):
    created = await accounts.create_role("auditor")

    with pytest.raises(ValidationError):
        await accounts.create_role("auditor")

    roles = await accounts.list_roles()
    assert [r.name for r in roles] == ["auditor"]
    assert roles[0].id == created.id


async def test_ensure_admin(admin_user, accounts):
    again = await accounts.ensure_admin("root", "ignored", "root@example.com", "admin")

    assert admin_user.role.name == "admin"
    assert again.id == admin_user.id
    assert [r.name for r in await accounts.list_roles()] == ["admin"]
