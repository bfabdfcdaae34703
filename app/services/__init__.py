"""
Bookmark service layer.

Core Services:
- identity: resolves a request's bearer token or session cookie to a Principal
- access_policy: read/write/admin predicates over principals and bookmarks
- bookmark_query: filtered, searchable, paginated bookmark listings
- admin: admin master password seeding, verification and rotation
"""
