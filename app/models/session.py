"""
Server-side login sessions keyed by the identifier stored in the session
cookie. A session resolves to its user until ``expire`` has passed.
"""

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship

from app.models.base import Base, CreatedAtMixin


class Session(Base, CreatedAtMixin):
    __tablename__ = "sessions"
    __table_args__ = (
        Index("ix_sessions_expire", "expire"),
        Index("ix_sessions_user_id", "user_id"),
    )

    sid = Column(String(64), primary_key=True, comment="Opaque session identifier")

    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        comment="Logged-in user",
    )

    expire = Column(
        DateTime(timezone=True),
        nullable=False,
        comment="Instant after which the session no longer authenticates",
    )

    user = relationship("User")

    def __repr__(self):
        return f"<Session(user_id={self.user_id}, expire={self.expire})>"
