import pytest  # type: ignore[import-not-found]

from portfolio.api.main import seed_admin
from portfolio.users.repository import UsersRepository

pytestmark = pytest.mark.anyio


async def test_seed_admin_makes_a_fresh_install_loggable(db, auth_service) -> None:  # type: ignore[no-untyped-def]
    await seed_admin(db, "owner@example.com")
    await seed_admin(db, "owner@example.com")

    async with db.session() as session:
        repo = UsersRepository()
        assert await repo.count(session, role="admin") == 1
        admin = await repo.find_by_email(session, email="owner@example.com")
        assert admin is not None
        record = await auth_service.create_verification(session, user_id=admin.id)
        user, _ = await auth_service.verify(session, token=record.token)
        assert user.id == admin.id


async def test_seed_admin_without_email_does_nothing(db) -> None:  # type: ignore[no-untyped-def]
    await seed_admin(db, "")
    async with db.session() as session:
        assert await UsersRepository().count(session) == 0
