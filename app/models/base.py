"""
Base configurations and mixins for database models.

This module provides the declarative base shared by every table of the
bookmark service, together with mixins for integer surrogate keys and
database-managed timestamps.
"""

from sqlalchemy import Column, DateTime, Integer
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql.functions import now as db_now


# Create the base class for all models
Base = declarative_base()


class IntegerIDMixin:
    """Auto-incrementing integer primary key."""

    id = Column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Integer surrogate key",
    )


class CreatedAtMixin:
    """Creation timestamp set by the database on insert."""

    created_at = Column(
        DateTime(timezone=True),
        server_default=db_now(),
        nullable=False,
        comment="Timestamp when the record was created",
    )


class TimestampMixin(CreatedAtMixin):
    """
    Adds ``updated_at`` on top of ``created_at``; the database refreshes it
    whenever the row is modified through the ORM.
    """

    updated_at = Column(
        DateTime(timezone=True),
        server_default=db_now(),
        onupdate=db_now(),
        nullable=False,
        comment="Timestamp when the record was last updated",
    )


__all__ = ["Base", "IntegerIDMixin", "CreatedAtMixin", "TimestampMixin"]
