"""
Bookmark model: a saved link owned by exactly one user.

Visibility is binary. Public bookmarks appear in the shared feed and can be
read by anyone; private bookmarks are visible to their owner and to admins.
"""

from sqlalchemy import Boolean, Column, ForeignKey, Index, Integer, Text, false
from sqlalchemy.orm import relationship, validates

from app.models.base import Base, CreatedAtMixin, IntegerIDMixin


class Bookmark(Base, IntegerIDMixin, CreatedAtMixin):
    """A titled URL with an optional description and a public flag."""

    __tablename__ = "bookmarks"
    __table_args__ = (
        Index("ix_bookmarks_user_id", "user_id"),
        Index("ix_bookmarks_is_public", "is_public"),
        Index("ix_bookmarks_created_at_id", "created_at", "id"),
    )

    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        comment="Owning user",
    )

    title = Column(Text, nullable=False, comment="Display title")

    url = Column(Text, nullable=False, comment="Bookmarked URL")

    description = Column(Text, nullable=True, comment="Optional free-text notes")

    is_public = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
        comment="Whether the bookmark appears in the public feed",
    )

    owner = relationship("User", back_populates="bookmarks")

    @validates("title", "url")
    def validate_not_blank(self, key, value):
        if value is None or not str(value).strip():
            raise ValueError(f"Bookmark {key} must not be empty")
        return value

    def __repr__(self):
        return f"<Bookmark(id={self.id}, user_id={self.user_id}, public={self.is_public})>"
