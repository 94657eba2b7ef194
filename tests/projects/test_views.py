import pytest  # type: ignore[import-not-found]

from portfolio.projects.schemas import CreateProjectRequest, ProjectUpdate
from portfolio.projects.service import ProjectsService
from portfolio.seo.schemas import SEOInput

pytestmark = pytest.mark.anyio


@pytest.fixture()
def svc() -> ProjectsService:
    return ProjectsService.create()


async def test_images_round_trip_in_order(session, svc, make_media) -> None:  # type: ignore[no-untyped-def]
    m1, m2, m3 = await make_media("1.jpg"), await make_media("2.jpg"), await make_media("3.jpg")
    created = await svc.create_project(
        session, req=CreateProjectRequest(status="published", images=[m1.id, m2.id, m3.id])
    )

    fresh = await svc.get_project(session, project_id=created.id)
    assert [m.id for m in await fresh.images(session)] == [m1.id, m2.id, m3.id]

    await svc.update_project(
        session, project_id=created.id, changes=ProjectUpdate(images=[m2.id])
    )
    fresh = await svc.get_project(session, project_id=created.id)
    assert [m.id for m in await fresh.images(session)] == [m2.id]


async def test_update_of_images_invalidates_cache(session, svc, make_media) -> None:  # type: ignore[no-untyped-def]
    m1, m2 = await make_media("1.jpg"), await make_media("2.jpg")
    view = await svc.create_project(
        session, req=CreateProjectRequest(status="published", images=[m1.id])
    )
    assert [m.id for m in await view.images(session)] == [m1.id]

    await view.update(session, ProjectUpdate(images=[m2.id, m1.id]))
    assert [m.id for m in await view.images(session)] == [m2.id, m1.id]


async def test_unrelated_update_keeps_images_consistent(session, svc, make_media) -> None:  # type: ignore[no-untyped-def]
    m1, m2 = await make_media("1.jpg"), await make_media("2.jpg")
    view = await svc.create_project(
        session, req=CreateProjectRequest(status="published", images=[m1.id, m2.id])
    )
    await view.images(session)

    await view.update(session, ProjectUpdate(title="x"))
    await session.commit()

    assert view.project.title == "x"
    assert [m.id for m in await view.images(session)] == view.image_ids == [m1.id, m2.id]


async def test_set_images_updates_cache_and_ids(session, svc, make_media) -> None:  # type: ignore[no-untyped-def]
    m1, m2 = await make_media("1.jpg"), await make_media("2.jpg")
    view = await svc.create_project(
        session, req=CreateProjectRequest(status="published", images=[m1.id])
    )
    view.set_images([m2])
    await session.commit()

    assert view.image_ids == [m2.id]
    fresh = await svc.get_project(session, project_id=view.id)
    assert [m.id for m in await fresh.images(session)] == [m2.id]


async def test_dangling_image_and_og_image_are_dropped(session, svc, make_media) -> None:  # type: ignore[no-untyped-def]
    keep, gone, og = await make_media("k.jpg"), await make_media("g.jpg"), await make_media("o.jpg")
    view = await svc.create_project(
        session,
        req=CreateProjectRequest(
            status="published",
            images=[gone.id, keep.id],
            seo=SEOInput(title="Hello", keywords=["a", "b"], og_image_id=og.id),
        ),
    )
    # Bypass the in-use check to simulate rows removed out of band.
    await session.delete(gone)
    await session.delete(og)
    await session.commit()

    fresh = await svc.get_project(session, project_id=view.id)
    assert [m.id for m in await fresh.images(session)] == [keep.id]
    seo = await fresh.seo(session)
    assert seo.title == "Hello"
    assert seo.keywords == ["a", "b"]
    assert seo.og_image is None


async def test_to_public_shape(session, svc, make_media) -> None:  # type: ignore[no-untyped-def]
    m1 = await make_media("1.jpg")
    view = await svc.create_project(
        session,
        req=CreateProjectRequest(
            title="Wedding", status="invisible", images=[m1.id], seo=SEOInput(og_image_id=m1.id)
        ),
    )
    public = await view.to_public(session)
    assert public.title == "Wedding"
    assert public.status == "invisible"
    assert [m.id for m in public.images] == [m1.id]
    assert public.seo.og_image is not None
    assert public.seo.og_image.id == m1.id
