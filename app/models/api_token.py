"""
API token model for programmatic access with ``Authorization: Bearer``.

Token values are generated once and never rotated; revoking a token deletes
the row. Values are stored as issued so that a user's token list can show
them again.
"""

from sqlalchemy import Column, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship

from app.models.base import Base, CreatedAtMixin, IntegerIDMixin


class ApiToken(Base, IntegerIDMixin, CreatedAtMixin):
    """Opaque bearer credential owned by a user."""

    __tablename__ = "api_tokens"
    __table_args__ = (
        Index("ix_api_tokens_token", "token", unique=True),
        Index("ix_api_tokens_user_id", "user_id"),
    )

    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        comment="Owning user",
    )

    token = Column(
        String(64),
        nullable=False,
        comment="64-character hex token value",
    )

    label = Column(String(100), nullable=True, comment="Optional human label")

    owner = relationship("User", back_populates="api_tokens")

    def __repr__(self):
        # The token value is a credential; keep it out of reprs and logs
        return f"<ApiToken(id={self.id}, user_id={self.user_id}, label={self.label!r})>"
