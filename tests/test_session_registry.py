"""Tests for the session registry."""
from userrole.schemas.auth import SignupRequest


async def test_add_and_check(registry, store, alice):
    user = await store.find_user_by_id(alice.user.id)

    await registry.add_session(user, "device-2")

    assert await registry.is_active(user, alice.token)
    assert await registry.is_active(user, "device-2")
    assert [s.token for s in await registry.sessions(user)] == [alice.token, "device-2"]


async def test_revoke_reports_whether_anything_was_removed(registry, store, alice):
    user = await store.find_user_by_id(alice.user.id)

    assert await registry.revoke_session(user, alice.token) is True
    assert await registry.revoke_session(user, alice.token) is False
    assert await registry.revoke_session(user, "") is False


async def test_sessions_are_per_user(registry, store, accounts, alice):
    bob = await accounts.signup(
        SignupRequest(user_name="bob", email="bob@example.com", password="pw")
    )
    alice_user = await store.find_user_by_id(alice.user.id)
    bob_user = await store.find_user_by_id(bob.user.id)

    assert not await registry.is_active(bob_user, alice.token)
    await registry.revoke_session(bob_user, alice.token)
    assert await registry.is_active(alice_user, alice.token)


async def test_empty_token_is_never_active(registry, store, alice):
    user = await store.find_user_by_id(alice.user.id)

    assert await registry.is_active(user, "") is False
