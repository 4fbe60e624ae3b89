"""Tests for the two-stage authorization gate."""
import uuid
from datetime import timedelta

import pytest

from userrole.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    InvalidTokenError,
)
from userrole.core.security import AuthorizationGate, RequestContext


@pytest.fixture
def gate(issuer, store):
    return AuthorizationGate(issuer, store, admin_role_name="admin")


async def test_authenticate_attaches_user_and_token(gate, alice):
    context = await gate.authenticate(RequestContext(bearer_token=alice.token))

    assert context.is_authenticated
    assert context.user.id == alice.user.id
    assert context.token == alice.token


async def test_missing_token(gate):
    with pytest.raises(AuthenticationError):
        await gate.authenticate(RequestContext())


async def test_revoked_token_rejected(gate, alice, accounts, store):
    """Test a well-signed, unexpired token fails once removed from the registry."""
    user = await store.find_user_by_id(alice.user.id)
    await accounts.signout(user, alice.token)

    with pytest.raises(AuthenticationError) as exc_info:
        await gate.authenticate(RequestContext(bearer_token=alice.token))

    assert not isinstance(exc_info.value, InvalidTokenError)


async def test_unregistered_token_rejected(gate, alice, issuer):
    forged = issuer.issue(alice.user.id)

    with pytest.raises(AuthenticationError):
        await gate.authenticate(RequestContext(bearer_token=forged))


async def test_token_for_unknown_user_rejected(gate, issuer):
    with pytest.raises(AuthenticationError):
        await gate.authenticate(RequestContext(bearer_token=issuer.issue(uuid.uuid4())))


async def test_expired_registered_token_rejected(gate, alice, issuer, store, registry):
    user = await store.find_user_by_id(alice.user.id)
    expired = issuer.issue(user.id, expires_delta=timedelta(seconds=-1))
    await registry.add_session(user, expired)

    with pytest.raises(InvalidTokenError):
        await gate.authenticate(RequestContext(bearer_token=expired))


async def test_admin_stage_rejects_non_admin(gate, alice):
    context = await gate.authenticate(RequestContext(bearer_token=alice.token))

    with pytest.raises(AuthorizationError) as exc_info:
        gate.authorize_admin(context)

    assert exc_info.value.status_code == 403


async def test_authorize_flag_does_not_grant_admin(gate, alice, accounts):
    await accounts.change_authorize_status(alice.user.id, True)
    context = await gate.authenticate(RequestContext(bearer_token=alice.token))

    with pytest.raises(AuthorizationError):
        gate.authorize_admin(context)


async def test_admin_stage_passes_admin(gate, admin_user, accounts):
    signed_in = await accounts.signin("root", "rootpassword123")
    context = await gate.authenticate(RequestContext(bearer_token=signed_in.token))

    assert gate.authorize_admin(context) is context


async def test_admin_stage_requires_authentication(gate):
    with pytest.raises(AuthenticationError):
        gate.authorize_admin(RequestContext(bearer_token="whatever"))
