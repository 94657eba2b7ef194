import pytest  # type: ignore[import-not-found]
from httpx import AsyncClient  # type: ignore[import-not-found]

pytestmark = pytest.mark.anyio


def _auth(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


async def test_media_requires_auth(client: AsyncClient) -> None:
    assert (await client.get("/api/media")).status_code == 401


async def test_media_crud(client: AsyncClient, make_user, login) -> None:  # type: ignore[no-untyped-def]
    token = await login(await make_user("ed@x.com", role="editor"))
    h = _auth(token)

    types = await client.get("/api/media/types", headers=h)
    assert "image/jpeg" in types.json()["types"]

    bad = await client.post(
        "/api/media",
        json={"filename": "a.gif", "url": "/u/a.gif", "mime_type": "image/gif", "size": 1},
        headers=h,
    )
    assert bad.status_code == 422

    created = await client.post(
        "/api/media",
        json={"filename": "a.png", "url": "/u/a.png", "mime_type": "image/png", "size": 1},
        headers=h,
    )
    assert created.status_code == 201
    media_id = created.json()["id"]

    listed = await client.get("/api/media", params={"mime_type": "image/png"}, headers=h)
    body = listed.json()
    assert [m["id"] for m in body["items"]] == [media_id]
    assert body["pagination"]["limit"] == 42
    assert body["pagination"]["total"] == 1

    too_big = await client.get("/api/media", params={"limit": 101}, headers=h)
    assert too_big.status_code == 422

    updated = await client.put(f"/api/media/{media_id}", json={"alt": "logo"}, headers=h)
    assert updated.json()["alt"] == "logo"
    assert updated.json()["filename"] == "a.png"

    assert (await client.delete(f"/api/media/{media_id}", headers=h)).status_code == 200
    assert (await client.get(f"/api/media/{media_id}", headers=h)).status_code == 404
