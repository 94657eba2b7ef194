import pytest  # type: ignore[import-not-found]

from portfolio.core.db import DatabaseManager
from portfolio.health import repository, service

pytestmark = pytest.mark.anyio


async def test_get_health_payload_shape(monkeypatch, db) -> None:  # type: ignore[no-untyped-def]
    monkeypatch.setattr(repository, "database_manager", db)
    payload = await service.get_health_payload()
    assert payload["status"] == "ok"
    assert isinstance(payload["version"], str)
    assert payload["db"]["ok"] is True


async def test_health_reports_unusable_database(monkeypatch, tmp_path) -> None:  # type: ignore[no-untyped-def]
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    # Parent "directory" is a regular file, so the database cannot be opened.
    monkeypatch.setattr(
        repository, "database_manager", DatabaseManager(db_path=str(blocker / "portfolio.db"))
    )
    payload = await service.get_health_payload()
    assert payload["status"] == "error"
    assert payload["db"]["ok"] is False
    assert payload["db"]["detail"]
