"""Tests for the authorization predicates."""

from app.models import Bookmark, User
from app.services.access_policy import (
    can_administer,
    can_list_private,
    can_read_bookmark,
    can_write_bookmark,
)
from app.services.identity import ANONYMOUS, AuthMode, Principal

OWNER = Principal(User(id=1, username="owner", is_admin=False), AuthMode.SESSION)
OTHER = Principal(User(id=2, username="other", is_admin=False), AuthMode.TOKEN)
ADMIN = Principal(User(id=3, username="root", is_admin=True), AuthMode.SESSION)


def _bookmark(is_public: bool) -> Bookmark:
    return Bookmark(id=10, user_id=1, title="t", url="https://example.com", is_public=is_public)


def test_public_bookmark_is_readable_by_everyone():
    bookmark = _bookmark(is_public=True)
    for principal in (ANONYMOUS, OWNER, OTHER, ADMIN):
        assert can_read_bookmark(principal, bookmark)


def test_private_bookmark_is_readable_by_owner_and_admin_only():
    bookmark = _bookmark(is_public=False)
    assert can_read_bookmark(OWNER, bookmark)
    assert can_read_bookmark(ADMIN, bookmark)
    assert not can_read_bookmark(OTHER, bookmark)
    assert not can_read_bookmark(ANONYMOUS, bookmark)


def test_write_requires_owner_or_admin_even_when_public():
    bookmark = _bookmark(is_public=True)
    assert can_write_bookmark(OWNER, bookmark)
    assert can_write_bookmark(ADMIN, bookmark)
    assert not can_write_bookmark(OTHER, bookmark)
    assert not can_write_bookmark(ANONYMOUS, bookmark)


def test_listing_private_needs_authentication():
    assert can_list_private(OWNER)
    assert not can_list_private(ANONYMOUS)


def test_only_admins_administer():
    assert can_administer(ADMIN)
    assert not can_administer(OWNER)
    assert not can_administer(ANONYMOUS)
