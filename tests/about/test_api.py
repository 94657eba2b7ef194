import pytest  # type: ignore[import-not-found]
from httpx import AsyncClient  # type: ignore[import-not-found]

pytestmark = pytest.mark.anyio


def _auth(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


async def test_about_page_admin_and_public(client: AsyncClient, make_user, login) -> None:  # type: ignore[no-untyped-def]
    h = _auth(await login(await make_user("ed@x.com", role="editor")))
    payload = {
        "exergue": "Photographer based in Tarbes",
        "sections": [{"title": "Bio", "content": "Portraits and brands."}],
        "clients": [{"name": "Acme", "website_url": "https://acme.test"}],
        "contacts": [
            {"label": "Mail", "value": "hello@x.com"},
            {"label": "Secret", "value": "0600000000", "is_visible": False},
        ],
    }

    assert (await client.put("/api/about", json=payload)).status_code == 401
    assert (await client.get("/api/about")).status_code == 401

    saved = await client.put("/api/about", json=payload, headers=h)
    assert saved.status_code == 200
    body = saved.json()
    assert body["exergue"] == "Photographer based in Tarbes"
    assert [c["type"] for c in body["contacts"]] == ["email", "phone"]

    public = await client.get("/api/public/about")
    assert public.status_code == 200
    data = public.json()
    assert [c["label"] for c in data["contacts"]] == ["Mail"]
    assert data["clients"][0]["name"] == "Acme"


async def test_about_rejects_short_exergue(client: AsyncClient, make_user, login) -> None:  # type: ignore[no-untyped-def]
    h = _auth(await login(await make_user()))
    resp = await client.put("/api/about", json={"exergue": "short"}, headers=h)
    assert resp.status_code == 422
