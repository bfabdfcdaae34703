"""Tests for bookmark CRUD and its authorization rules."""

from datetime import datetime, timedelta

import pytest
from httpx import ASGITransport, AsyncClient

from app.db_handlers.bookmark import BookmarkDBHandler
from tests.conftest import ADMIN_PASSWORD
from tests.helpers import bearer, create_bookmark


async def _make_admin(client, token):
    response = await client.post(
        "/api/admin/login", json={"password": ADMIN_PASSWORD}, headers=bearer(token)
    )
    assert response.status_code == 200, response.text


@pytest.mark.asyncio
async def test_create_bookmark(client, alice_token):
    bookmark = await create_bookmark(
        client, alice_token, "Python docs", description="reference"
    )
    assert bookmark["title"] == "Python docs"
    assert bookmark["url"] == "https://example.com/Python-docs"
    assert bookmark["description"] == "reference"
    assert bookmark["isPublic"] is False
    assert bookmark["username"] == "alice"
    assert bookmark["userId"]


@pytest.mark.asyncio
async def test_create_requires_authentication(client):
    response = await client.post(
        "/api/bookmarks", json={"title": "x", "url": "https://example.com"}
    )
    assert response.status_code == 401


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload, field",
    [
        ({"title": "   ", "url": "https://example.com"}, "title"),
        ({"title": "ok", "url": "not a url"}, "url"),
        ({"url": "https://example.com"}, "title"),
    ],
)
async def test_create_validation(client, alice_token, payload, field):
    response = await client.post(
        "/api/bookmarks", json=payload, headers=bearer(alice_token)
    )
    assert response.status_code == 400
    assert response.json()["field"] == field


@pytest.mark.asyncio
async def test_read_rules(client, alice_token, bob_token):
    private = await create_bookmark(client, alice_token, "secret")
    public = await create_bookmark(client, alice_token, "shared", is_public=True)

    own = await client.get(f"/api/bookmarks/{private['id']}", headers=bearer(alice_token))
    assert own.status_code == 200

    other = await client.get(f"/api/bookmarks/{private['id']}", headers=bearer(bob_token))
    assert other.status_code == 403
    assert other.json() == {"message": "Forbidden"}

    anonymous = await client.get(f"/api/bookmarks/{private['id']}")
    assert anonymous.status_code == 401

    anonymous_public = await client.get(f"/api/bookmarks/{public['id']}")
    assert anonymous_public.status_code == 200
    assert anonymous_public.json()["username"] == "alice"

    missing = await client.get("/api/bookmarks/9999")
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_partial_update_changes_only_sent_fields(client, alice_token):
    bookmark = await create_bookmark(client, alice_token, "draft", description="keep me")

    response = await client.patch(
        f"/api/bookmarks/{bookmark['id']}",
        json={"title": "final", "isPublic": True},
        headers=bearer(alice_token),
    )
    assert response.status_code == 200
    updated = response.json()
    assert updated["title"] == "final"
    assert updated["isPublic"] is True
    assert updated["description"] == "keep me"
    assert updated["url"] == bookmark["url"]
    assert updated["username"] == "alice"

    cleared = await client.patch(
        f"/api/bookmarks/{bookmark['id']}",
        json={"description": None},
        headers=bearer(alice_token),
    )
    assert cleared.json()["description"] is None


@pytest.mark.asyncio
async def test_update_rejects_null_title(client, alice_token):
    bookmark = await create_bookmark(client, alice_token, "draft")
    response = await client.patch(
        f"/api/bookmarks/{bookmark['id']}",
        json={"title": None},
        headers=bearer(alice_token),
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_write_by_another_user_is_forbidden(client, alice_token, bob_token):
    bookmark = await create_bookmark(client, alice_token, "mine", is_public=True)

    patch = await client.patch(
        f"/api/bookmarks/{bookmark['id']}",
        json={"title": "hijacked"},
        headers=bearer(bob_token),
    )
    assert patch.status_code == 403

    delete = await client.delete(
        f"/api/bookmarks/{bookmark['id']}", headers=bearer(bob_token)
    )
    assert delete.status_code == 403

    unchanged = await client.get(f"/api/bookmarks/{bookmark['id']}")
    assert unchanged.json()["title"] == "mine"


@pytest.mark.asyncio
async def test_missing_bookmark_is_not_found_before_forbidden(client, bob_token):
    patch = await client.patch(
        "/api/bookmarks/9999", json={"title": "x"}, headers=bearer(bob_token)
    )
    assert patch.status_code == 404
    delete = await client.delete("/api/bookmarks/9999", headers=bearer(bob_token))
    assert delete.status_code == 404


@pytest.mark.asyncio
async def test_anonymous_write_is_unauthorized(client, alice_token):
    bookmark = await create_bookmark(client, alice_token, "mine")
    assert (
        await client.patch(f"/api/bookmarks/{bookmark['id']}", json={"title": "x"})
    ).status_code == 401
    assert (await client.delete(f"/api/bookmarks/{bookmark['id']}")).status_code == 401
    assert (await client.delete("/api/bookmarks/9999")).status_code == 401


@pytest.mark.asyncio
async def test_owner_deletes_bookmark(client, alice_token):
    bookmark = await create_bookmark(client, alice_token, "temporary")

    response = await client.delete(
        f"/api/bookmarks/{bookmark['id']}", headers=bearer(alice_token)
    )
    assert response.status_code == 204
    assert response.content == b""

    gone = await client.get(f"/api/bookmarks/{bookmark['id']}", headers=bearer(alice_token))
    assert gone.status_code == 404


@pytest.mark.asyncio
async def test_admin_may_modify_any_bookmark(client, alice_token, bob_token):
    bookmark = await create_bookmark(client, alice_token, "alice's")
    await _make_admin(client, bob_token)

    read = await client.get(f"/api/bookmarks/{bookmark['id']}", headers=bearer(bob_token))
    assert read.status_code == 200

    patch = await client.patch(
        f"/api/bookmarks/{bookmark['id']}",
        json={"title": "moderated"},
        headers=bearer(bob_token),
    )
    assert patch.status_code == 200
    assert patch.json()["title"] == "moderated"
    assert patch.json()["username"] == "alice"

    delete = await client.delete(
        f"/api/bookmarks/{bookmark['id']}", headers=bearer(bob_token)
    )
    assert delete.status_code == 204


@pytest.mark.asyncio
async def test_unexpected_error_returns_generic_message(app, monkeypatch):
    async def failing_search(self, **kwargs):
        raise RuntimeError("SELECT secret FROM bookmarks")

    monkeypatch.setattr(BookmarkDBHandler, "search_bookmarks", failing_search)

    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://testserver",
    ) as c:
        response = await c.get("/api/bookmarks", params={"isPublic": "true"})

    assert response.status_code == 500
    assert response.json() == {"message": "Internal server error"}
    assert "secret" not in response.text


@pytest.mark.asyncio
async def test_timestamps_carry_a_utc_offset(client, alice_token):
    bookmark = await create_bookmark(client, alice_token, "dated")
    created_at = datetime.fromisoformat(bookmark["createdAt"].replace("Z", "+00:00"))
    assert created_at.utcoffset() == timedelta(0)

    fetched = await client.get(
        f"/api/bookmarks/{bookmark['id']}", headers=bearer(alice_token)
    )
    assert fetched.json()["createdAt"] == bookmark["createdAt"]
