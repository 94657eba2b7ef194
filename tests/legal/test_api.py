import pytest  # type: ignore[import-not-found]
from httpx import AsyncClient  # type: ignore[import-not-found]

pytestmark = pytest.mark.anyio


def _auth(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


async def test_legal_page_upsert_and_visibility(client: AsyncClient, make_user, login) -> None:  # type: ignore[no-untyped-def]
    h = _auth(await login(await make_user()))
    body = {"title": "Mentions légales", "content": "Publisher: ..."}

    assert (await client.put("/api/legal/mentions-legales", json=body)).status_code == 401
    assert (await client.get("/api/legal/mentions-legales")).status_code == 404

    created = await client.put("/api/legal/mentions-legales", json=body, headers=h)
    assert created.status_code == 200
    assert created.json()["is_published"] is True

    hidden = await client.put(
        "/api/legal/mentions-legales",
        json={"title": "Mentions légales", "content": "v2", "is_published": False},
        headers=h,
    )
    assert hidden.json()["content"] == "v2"

    # Unpublished: gone for visitors, still visible to signed-in users.
    assert (await client.get("/api/legal/mentions-legales")).status_code == 404
    assert (await client.get("/api/legal")).json()["items"] == []
    assert (await client.get("/api/legal/mentions-legales", headers=h)).status_code == 200

    republished = await client.put(
        "/api/legal/mentions-legales",
        json={"title": "Mentions légales", "content": "v3"},
        headers=h,
    )
    # Omitted flag keeps the current value.
    assert republished.json()["is_published"] is False


async def test_legal_type_must_be_a_slug(client: AsyncClient, make_user, login) -> None:  # type: ignore[no-untyped-def]
    h = _auth(await login(await make_user()))
    resp = await client.put(
        "/api/legal/Not A Slug", json={"title": "x", "content": "y"}, headers=h
    )
    assert resp.status_code == 422
