"""
User model for authentication and bookmark ownership.

Architecture:
    User → Bookmarks
    User → ApiTokens
    User → Sessions

Key Features:
    - Integer surrogate key as the single canonical principal identity
    - Unique username and email
    - Optional bcrypt password hash (null for accounts without local login)
    - Admin flag gating the admin surface
"""

from sqlalchemy import Boolean, Column, Index, String, false
from sqlalchemy.orm import relationship

from app.models.base import Base, IntegerIDMixin, TimestampMixin


class User(Base, IntegerIDMixin, TimestampMixin):
    """
    Registered account that owns bookmarks and API tokens.
    """

    __tablename__ = "users"
    __table_args__ = (
        Index("ix_users_username", "username", unique=True),
        Index("ix_users_email", "email", unique=True),
    )

    username = Column(
        String(50),
        nullable=False,
        comment="Unique username for identification and login",
    )

    email = Column(
        String(255),
        nullable=True,
        comment="Unique email address",
    )

    password_hash = Column(
        String(255),
        nullable=True,
        comment="bcrypt password hash; never returned by the API",
    )

    is_admin = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
        comment="Grants access to the admin surface and to every bookmark",
    )

    bookmarks = relationship(
        "Bookmark",
        back_populates="owner",
        cascade="all, delete-orphan",
        passive_deletes=True,
        doc="Bookmarks created by this user",
    )

    api_tokens = relationship(
        "ApiToken",
        back_populates="owner",
        cascade="all, delete-orphan",
        passive_deletes=True,
        doc="API tokens issued to this user",
    )

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}')>"
