import pytest  # type: ignore[import-not-found]

from portfolio.about.repository import AboutRepository
from portfolio.about.schemas import DEFAULT_EXERGUE, AboutReplaceRequest
from portfolio.about.service import AboutService
from portfolio.core.db import StorageFaultException

pytestmark = pytest.mark.anyio


class FailingContactsRepository(AboutRepository):
    async def replace_contacts(self, session, contacts) -> None:  # type: ignore[no-untyped-def]
        await super().replace_contacts(session, contacts)
        raise StorageFaultException("Storage failure", "disk I/O error")


def _request(exergue: str, clients: list[str], contacts: list[tuple[str, str]]) -> AboutReplaceRequest:
    return AboutReplaceRequest(
        exergue=exergue,
        sections=[{"title": "Bio", "content": "Shoots people."}],
        clients=[{"name": n} for n in clients],
        contacts=[{"label": label, "value": value} for label, value in contacts],
    )


async def test_empty_store_serves_default_page(session) -> None:  # type: ignore[no-untyped-def]
    about = await AboutService.create().get_about(session, public=True)
    assert about.exergue == DEFAULT_EXERGUE
    assert about.sections == []
    assert about.clients == []
    assert about.updated_at is None


async def test_replace_rewrites_children_in_order(session) -> None:  # type: ignore[no-untyped-def]
    svc = AboutService.create()
    await svc.replace_about(
        session,
        req=_request("First version of the page", ["Acme", "Globex"], [("Mail", "me@x.com")]),
    )
    about = await svc.replace_about(
        session,
        req=_request(
            "Second version of the page",
            ["Initech"],
            [("Insta", "https://instagram.com/me"), ("Phone", "+33 6 00 00 00 00")],
        ),
    )

    assert about.exergue == "Second version of the page"
    assert [c.name for c in about.clients] == ["Initech"]
    assert [(c.label, c.type) for c in about.contacts] == [
        ("Insta", "instagram"),
        ("Phone", "phone"),
    ]
    assert about.sections[0].title == "Bio"


async def test_failed_child_write_keeps_previous_page(db) -> None:  # type: ignore[no-untyped-def]
    async with db.session() as session:
        await AboutService.create().replace_about(
            session,
            req=_request("Original about page", ["Acme"], [("Mail", "me@x.com")]),
        )

    failing = AboutService(repo=FailingContactsRepository())
    async with db.session() as session:
        with pytest.raises(StorageFaultException):
            await failing.replace_about(
                session,
                req=_request("Half written page", ["Globex", "Initech"], [("Web", "x.org")]),
            )

    async with db.session() as session:
        about = await AboutService.create().get_about(session)
    assert about.exergue == "Original about page"
    assert [c.name for c in about.clients] == ["Acme"]
    assert [c.value for c in about.contacts] == ["me@x.com"]


async def test_public_view_hides_invisible_contacts_and_empty_sections(session) -> None:  # type: ignore[no-untyped-def]
    svc = AboutService.create()
    await svc.replace_about(
        session,
        req=AboutReplaceRequest(
            exergue="A page with hidden bits",
            sections=[{"title": "Bio", "content": "Hi"}, {"title": "Draft", "content": ""}],
            contacts=[
                {"label": "Mail", "value": "me@x.com"},
                {"label": "Phone", "value": "0600000000", "is_visible": False},
            ],
        ),
    )

    admin = await svc.get_about(session)
    public = await svc.get_about(session, public=True)
    assert len(admin.contacts) == 2
    assert [c.label for c in public.contacts] == ["Mail"]
    assert [s.title for s in public.sections] == ["Bio"]

