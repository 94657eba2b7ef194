import pytest  # type: ignore[import-not-found]

from portfolio.auth.exceptions import (
    INVALID_SESSION_MESSAGE,
    ForbiddenException,
    UnauthenticatedException,
)
from portfolio.auth.gate import AuthGate, Principal

pytestmark = pytest.mark.anyio


async def test_authenticate_returns_principal(session, auth_service, make_user, login) -> None:  # type: ignore[no-untyped-def]
    user = await make_user("ed@x.com", role="editor")
    token = await login(user)

    principal = await AuthGate(auth_service).authenticate(session, token, required=True)
    assert isinstance(principal, Principal)
    assert principal.user_id == user.id
    assert principal.role == "editor"
    assert not principal.is_admin


async def test_optional_mode_returns_none_for_bad_token(session, auth_service) -> None:  # type: ignore[no-untyped-def]
    gate = AuthGate(auth_service)
    assert await gate.authenticate(session, None, required=False) is None
    assert await gate.authenticate(session, "f" * 64, required=False) is None


async def test_mandatory_mode_raises_with_generic_message(session, auth_service) -> None:  # type: ignore[no-untyped-def]
    gate = AuthGate(auth_service)
    with pytest.raises(UnauthenticatedException) as missing:
        await gate.authenticate(session, None, required=True)
    with pytest.raises(UnauthenticatedException) as invalid:
        await gate.authenticate(session, "f" * 64, required=True)
    assert missing.value.message == invalid.value.message == INVALID_SESSION_MESSAGE


async def test_verification_token_is_not_a_bearer(session, auth_service, make_user) -> None:  # type: ignore[no-untyped-def]
    user = await make_user("ed@x.com", role="editor")
    pending = await auth_service.create_verification(session, user_id=user.id)
    gate = AuthGate(auth_service)
    assert await gate.authenticate(session, pending.token, required=False) is None
    with pytest.raises(UnauthenticatedException):
        await gate.authenticate(session, pending.token, required=True)


async def test_authorize_checks_role(session, auth_service, make_user, login) -> None:  # type: ignore[no-untyped-def]
    editor = await make_user("ed@x.com", role="editor")
    principal = await AuthGate(auth_service).authenticate(
        session, await login(editor), required=True
    )

    assert AuthGate.authorize(principal, ("admin", "editor")) is principal
    with pytest.raises(ForbiddenException):
        AuthGate.authorize(principal, ("admin",))
    with pytest.raises(UnauthenticatedException):
        AuthGate.authorize(None, ("admin",))
