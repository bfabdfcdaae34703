"""Tests for bookmark listing: pagination, search and visibility."""

import pytest

from app.errors import UnauthorizedError, ValidationError
from app.services.bookmark_query import BookmarkFilter, build_list_filter, total_pages
from app.services.identity import ANONYMOUS
from tests.helpers import bearer, create_bookmark


def test_total_pages():
    assert total_pages(0, 10) == 0
    assert total_pages(1, 10) == 1
    assert total_pages(10, 10) == 1
    assert total_pages(25, 10) == 3


def test_filter_rejects_bad_windows():
    with pytest.raises(ValidationError):
        BookmarkFilter(is_public=True, page=0)
    with pytest.raises(ValidationError):
        BookmarkFilter(is_public=True, limit=0)


def test_filter_without_owner_must_be_public():
    with pytest.raises(ValidationError):
        BookmarkFilter(is_public=False)
    with pytest.raises(ValidationError):
        BookmarkFilter()
    assert BookmarkFilter(is_public=True, page=3, limit=10).offset == 20


def test_anonymous_may_only_list_the_public_feed():
    public = build_list_filter(ANONYMOUS, is_public=True, search=None, page=1, limit=10)
    assert public.owner_id is None
    with pytest.raises(UnauthorizedError):
        build_list_filter(ANONYMOUS, is_public=None, search=None, page=1, limit=10)
    with pytest.raises(UnauthorizedError):
        build_list_filter(ANONYMOUS, is_public=False, search=None, page=1, limit=10)


@pytest.mark.asyncio
async def test_pages_cover_every_bookmark_exactly_once(client, alice_token):
    for i in range(25):
        await create_bookmark(client, alice_token, f"bookmark {i}")

    seen = []
    for page in (1, 2, 3):
        response = await client.get(
            "/api/bookmarks",
            params={"page": page, "limit": 10},
            headers=bearer(alice_token),
        )
        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 25
        assert body["totalPages"] == 3
        assert body["page"] == page
        seen.extend(item["id"] for item in body["items"])

    assert len(seen) == 25
    assert len(set(seen)) == 25

    beyond = await client.get(
        "/api/bookmarks", params={"page": 4}, headers=bearer(alice_token)
    )
    assert beyond.json()["items"] == []


@pytest.mark.asyncio
async def test_newest_bookmark_comes_first(client, alice_token):
    first = await create_bookmark(client, alice_token, "older")
    second = await create_bookmark(client, alice_token, "newer")

    response = await client.get("/api/bookmarks", headers=bearer(alice_token))
    ids = [item["id"] for item in response.json()["items"]]
    assert ids == [second["id"], first["id"]]


@pytest.mark.asyncio
async def test_search_is_case_insensitive_across_fields(client, alice_token):
    await create_bookmark(client, alice_token, "Rust Book", description="systems")
    await create_bookmark(client, alice_token, "Go tour", description="learn the rust way")
    await create_bookmark(client, alice_token, "Python docs")

    response = await client.get(
        "/api/bookmarks", params={"search": "rust"}, headers=bearer(alice_token)
    )
    titles = {item["title"] for item in response.json()["items"]}
    assert titles == {"Rust Book", "Go tour"}

    response = await client.get(
        "/api/bookmarks", params={"search": "BOOK"}, headers=bearer(alice_token)
    )
    assert [item["title"] for item in response.json()["items"]] == ["Rust Book"]


@pytest.mark.asyncio
async def test_search_treats_wildcards_literally(client, alice_token):
    await create_bookmark(
        client, alice_token, "100% coverage", url="https://example.com/coverage"
    )
    await create_bookmark(client, alice_token, "plain title")

    response = await client.get(
        "/api/bookmarks", params={"search": "%"}, headers=bearer(alice_token)
    )
    assert [item["title"] for item in response.json()["items"]] == ["100% coverage"]


@pytest.mark.asyncio
async def test_public_feed_contains_only_public_bookmarks(client, alice_token, bob_token):
    await create_bookmark(client, alice_token, "alice public", is_public=True)
    await create_bookmark(client, alice_token, "alice private")
    await create_bookmark(client, bob_token, "bob public", is_public=True)
    await create_bookmark(client, bob_token, "bob private")

    response = await client.get("/api/bookmarks", params={"isPublic": "true"})
    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 2
    assert {item["title"] for item in body["items"]} == {"alice public", "bob public"}
    assert {item["username"] for item in body["items"]} == {"alice", "bob"}


@pytest.mark.asyncio
async def test_private_listing_is_scoped_to_the_caller(client, alice_token, bob_token):
    await create_bookmark(client, alice_token, "alice public", is_public=True)
    await create_bookmark(client, alice_token, "alice private")
    await create_bookmark(client, bob_token, "bob private")

    own = await client.get("/api/bookmarks", headers=bearer(alice_token))
    assert {item["title"] for item in own.json()["items"]} == {
        "alice public",
        "alice private",
    }

    private = await client.get(
        "/api/bookmarks", params={"isPublic": "false"}, headers=bearer(alice_token)
    )
    assert [item["title"] for item in private.json()["items"]] == ["alice private"]


@pytest.mark.asyncio
async def test_empty_listing_has_zero_pages(client, alice_token):
    response = await client.get("/api/bookmarks", headers=bearer(alice_token))
    body = response.json()
    assert body["total"] == 0
    assert body["totalPages"] == 0
    assert body["items"] == []


@pytest.mark.asyncio
async def test_anonymous_private_listing_is_unauthorized(client):
    response = await client.get("/api/bookmarks")
    assert response.status_code == 401
    assert response.json() == {"message": "Unauthorized"}


@pytest.mark.asyncio
async def test_limit_above_maximum_is_rejected(client, alice_token):
    response = await client.get(
        "/api/bookmarks", params={"limit": 101}, headers=bearer(alice_token)
    )
    assert response.status_code == 400
    assert response.json()["field"] == "limit"

    response = await client.get(
        "/api/bookmarks", params={"page": 0}, headers=bearer(alice_token)
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_search_folds_case_beyond_ascii(client, alice_token):
    await create_bookmark(
        client, alice_token, "École Guide", url="https://example.com/guide"
    )
    await create_bookmark(client, alice_token, "Other")

    response = await client.get(
        "/api/bookmarks", params={"search": "école"}, headers=bearer(alice_token)
    )
    body = response.json()
    assert body["total"] == 1
    assert body["items"][0]["title"] == "École Guide"


@pytest.mark.asyncio
async def test_search_term_keeps_its_spaces(client, alice_token):
    await create_bookmark(client, alice_token, "therust")
    await create_bookmark(client, alice_token, "learn rust")

    response = await client.get(
        "/api/bookmarks", params={"search": " rust"}, headers=bearer(alice_token)
    )
    assert [item["title"] for item in response.json()["items"]] == ["learn rust"]

    blank = await client.get(
        "/api/bookmarks", params={"search": "   "}, headers=bearer(alice_token)
    )
    assert blank.json()["total"] == 2
