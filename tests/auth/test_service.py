import datetime as dt
import re

import pytest  # type: ignore[import-not-found]

from portfolio.auth.exceptions import (
    AuthServiceNotFoundException,
    InvalidOrExpiredTokenException,
    MagicLinkDeliveryException,
)
from portfolio.auth.repository import SessionsRepository
from portfolio.commons.ids import new_id
from portfolio.core.db import StorageFaultException

pytestmark = pytest.mark.anyio


async def _session_count(session, user_id) -> int:  # type: ignore[no-untyped-def]
    return await SessionsRepository().count(session, user_id=user_id)


async def test_create_verification_issues_short_lived_token(
    session, auth_service, clock, make_user
) -> None:  # type: ignore[no-untyped-def]
    user = await make_user("a@x.com", role="editor")
    record = await auth_service.create_verification(session, user_id=user.id)

    assert re.fullmatch(r"[0-9a-f]{64}", record.token)
    assert record.kind == "verification"
    assert record.expires_at - clock() == dt.timedelta(minutes=15)


async def test_verification_resolves_until_expiry_then_fails(
    session, auth_service, clock, make_user
) -> None:  # type: ignore[no-untyped-def]
    user = await make_user("a@x.com", role="editor")
    record = await auth_service.create_verification(session, user_id=user.id)
    expires_at = record.expires_at

    clock.advance(minutes=14, seconds=59)
    resolved_user, resolved = await auth_service.resolve(session, token=record.token)
    assert resolved_user.id == user.id
    # Verification sessions never slide.
    assert resolved.expires_at == expires_at

    clock.now = expires_at
    with pytest.raises(InvalidOrExpiredTokenException):
        await auth_service.resolve(session, token=record.token)
    # Expired rows are deleted on lookup.
    assert await SessionsRepository().find_by_token(session, token=record.token) is None


async def test_resolve_unknown_token_fails(session, auth_service) -> None:  # type: ignore[no-untyped-def]
    with pytest.raises(InvalidOrExpiredTokenException):
        await auth_service.resolve(session, token="0" * 64)
    with pytest.raises(InvalidOrExpiredTokenException):
        await auth_service.resolve(session, token="")


async def test_verify_is_single_use(session, auth_service, clock, make_user) -> None:  # type: ignore[no-untyped-def]
    user = await make_user("a@x.com", role="editor")
    pending = await auth_service.create_verification(session, user_id=user.id)

    verified_user, record = await auth_service.verify(session, token=pending.token)
    assert verified_user.id == user.id
    assert record.kind == "authenticated"
    assert record.token != pending.token
    assert record.expires_at - clock() == dt.timedelta(days=30)
    assert verified_user.last_login_at == clock()

    with pytest.raises(InvalidOrExpiredTokenException):
        await auth_service.verify(session, token=pending.token)


async def test_verify_rejects_expired_token(session, auth_service, clock, make_user) -> None:  # type: ignore[no-untyped-def]
    user = await make_user("a@x.com", role="editor")
    pending = await auth_service.create_verification(session, user_id=user.id)
    clock.advance(minutes=16)
    with pytest.raises(InvalidOrExpiredTokenException):
        await auth_service.verify(session, token=pending.token)
    assert await _session_count(session, user.id) == 0


async def test_verify_rejects_authenticated_token(session, auth_service, make_user, login) -> None:  # type: ignore[no-untyped-def]
    user = await make_user("a@x.com", role="editor")
    token = await login(user)
    with pytest.raises(InvalidOrExpiredTokenException):
        await auth_service.verify(session, token=token)


async def test_sliding_renewal_extends_near_expiry(
    session, auth_service, clock, make_user, login
) -> None:  # type: ignore[no-untyped-def]
    user = await make_user("a@x.com", role="editor")
    token = await login(user)
    _, record = await auth_service.resolve(session, token=token)
    original = record.expires_at

    clock.now = original - dt.timedelta(minutes=50)
    _, renewed = await auth_service.resolve(session, token=token)
    assert renewed.expires_at == original + dt.timedelta(hours=24)

    stored = await SessionsRepository().find_by_token(session, token=token)
    assert stored is not None
    assert stored.expires_at == original + dt.timedelta(hours=24)


async def test_sliding_renewal_leaves_fresh_sessions_alone(
    session, auth_service, clock, make_user, login
) -> None:  # type: ignore[no-untyped-def]
    user = await make_user("a@x.com", role="editor")
    token = await login(user)
    _, record = await auth_service.resolve(session, token=token)
    original = record.expires_at

    clock.now = original - dt.timedelta(hours=2)
    _, same = await auth_service.resolve(session, token=token)
    assert same.expires_at == original


async def test_extend_expiry_never_shortens(session, auth_service, make_user, login) -> None:  # type: ignore[no-untyped-def]
    user = await make_user("a@x.com", role="editor")
    token = await login(user)
    repo = SessionsRepository()
    record = await repo.find_by_token(session, token=token)
    assert record is not None
    original = record.expires_at

    record = await repo.extend_expiry(
        session, record=record, expires_at=original - dt.timedelta(days=1)
    )
    assert record.expires_at == original


async def test_end_to_end_magic_link_flow(session, auth_service, clock, make_user) -> None:  # type: ignore[no-untyped-def]
    user = await make_user("a@x.com", role="editor")

    a = await auth_service.create_verification(session, user_id=user.id)
    assert a.expires_at - a.created_at == dt.timedelta(minutes=15)

    verified_user, b = await auth_service.verify(session, token=a.token)
    assert verified_user.id == user.id
    with pytest.raises(InvalidOrExpiredTokenException):
        await auth_service.resolve(session, token=a.token)

    resolved_user, _ = await auth_service.resolve(session, token=b.token)
    assert resolved_user.id == user.id

    assert await auth_service.revoke_all_for_user(session, user_id=user.id) == 1
    with pytest.raises(InvalidOrExpiredTokenException):
        await auth_service.resolve(session, token=b.token)


async def test_revoke_is_idempotent(session, auth_service, make_user, login) -> None:  # type: ignore[no-untyped-def]
    user = await make_user("a@x.com", role="editor")
    token = await login(user)
    assert await auth_service.revoke(session, token=token) is True
    assert await auth_service.revoke(session, token=token) is False

    other = await login(user)
    _, record = await auth_service.resolve(session, token=other)
    assert await auth_service.revoke_by_id(session, session_id=record.id) is True
    assert await auth_service.revoke_by_id(session, session_id=record.id) is False


async def test_sweep_removes_only_expired(session, auth_service, clock, make_user, login) -> None:  # type: ignore[no-untyped-def]
    user = await make_user("a@x.com", role="editor")
    token = await login(user)
    await auth_service.create_verification(session, user_id=user.id)
    assert await _session_count(session, user.id) == 2

    clock.advance(minutes=20)
    assert await auth_service.sweep_expired(session) == 1
    assert await _session_count(session, user.id) == 1
    resolved_user, _ = await auth_service.resolve(session, token=token)
    assert resolved_user.id == user.id


async def test_sweep_if_due_runs_once_per_interval(
    session, auth_service, clock, make_user
) -> None:  # type: ignore[no-untyped-def]
    user = await make_user("a@x.com", role="editor")
    assert await auth_service.sweep_expired_if_due(session) == 0

    await auth_service.create_verification(session, user_id=user.id)
    clock.advance(minutes=30)
    # Expired, but the last sweep was too recent.
    assert await auth_service.sweep_expired_if_due(session) is None
    assert await _session_count(session, user.id) == 1

    clock.advance(minutes=30)
    assert await auth_service.sweep_expired_if_due(session) == 1


async def test_failed_sweep_is_retried_on_next_request(
    session, auth_service, clock, make_user, monkeypatch
) -> None:  # type: ignore[no-untyped-def]
    user = await make_user("a@x.com", role="editor")
    await auth_service.create_verification(session, user_id=user.id)
    clock.advance(minutes=20)

    async def broken(*args, **kwargs):  # type: ignore[no-untyped-def]
        raise StorageFaultException("Storage failure", "disk I/O error")

    monkeypatch.setattr(auth_service.sessions, "delete_expired", broken)
    with pytest.raises(StorageFaultException):
        await auth_service.sweep_expired_if_due(session)

    monkeypatch.undo()
    await session.rollback()
    assert await auth_service.sweep_expired_if_due(session) == 1
    assert await _session_count(session, user.id) == 0


async def test_magic_link_for_unknown_email_is_silent(session, auth_service, delivery) -> None:  # type: ignore[no-untyped-def]
    await auth_service.request_magic_link(session, email="nobody@x.com", delivery=delivery)
    assert delivery.sent == []
    assert await SessionsRepository().count(session) == 0


async def test_magic_link_is_delivered(session, auth_service, delivery, make_user) -> None:  # type: ignore[no-untyped-def]
    user = await make_user("a@x.com", role="editor")
    await auth_service.request_magic_link(session, email="A@X.com", delivery=delivery)

    assert len(delivery.sent) == 1
    sent = delivery.sent[0]
    assert sent["email"] == "a@x.com"
    match = re.fullmatch(
        r"http://localhost:3000/admin/verify\?token=([0-9a-f]{64})", sent["link"]
    )
    assert match is not None
    verified_user, _ = await auth_service.verify(session, token=match.group(1))
    assert verified_user.id == user.id


async def test_failed_delivery_discards_verification(
    session, auth_service, make_user
) -> None:  # type: ignore[no-untyped-def]
    user = await make_user("a@x.com", role="editor")

    class Refusing:
        async def send_magic_link(self, *, email, name, link):  # type: ignore[no-untyped-def]
            return False

    class Broken:
        async def send_magic_link(self, *, email, name, link):  # type: ignore[no-untyped-def]
            raise ConnectionError("smtp down")

    for delivery in (Refusing(), Broken()):
        with pytest.raises(MagicLinkDeliveryException):
            await auth_service.request_magic_link(session, email=user.email, delivery=delivery)
    assert await _session_count(session, user.id) == 0


async def test_list_sessions_shows_only_active_logins(
    session, auth_service, clock, make_user, login
) -> None:  # type: ignore[no-untyped-def]
    user = await make_user("a@x.com", role="editor")
    first = await login(user)
    clock.advance(minutes=1)
    second = await login(user)
    await auth_service.create_verification(session, user_id=user.id)

    records = await auth_service.list_sessions(session, user_id=user.id)
    assert [r.token for r in records] == [second, first]


async def test_revoke_session_for_user_checks_owner(
    session, auth_service, make_user, login
) -> None:  # type: ignore[no-untyped-def]
    alice = await make_user("alice@x.com", role="editor")
    bob = await make_user("bob@x.com", role="editor")
    await login(alice)
    (record,) = await auth_service.list_sessions(session, user_id=alice.id)

    with pytest.raises(AuthServiceNotFoundException):
        await auth_service.revoke_session_for_user(
            session, user_id=bob.id, session_id=record.id
        )
    with pytest.raises(AuthServiceNotFoundException):
        await auth_service.revoke_session_for_user(
            session, user_id=alice.id, session_id=new_id()
        )

    await auth_service.revoke_session_for_user(
        session, user_id=alice.id, session_id=record.id
    )
    assert await auth_service.list_sessions(session, user_id=alice.id) == []
