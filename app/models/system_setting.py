"""
Key/value rows for small persisted configuration, such as the admin
master password hash.
"""

from sqlalchemy import Column, Index, String, Text

from app.models.base import Base, IntegerIDMixin

ADMIN_PASSWORD_HASH_KEY = "admin_password_hash"


class SystemSetting(Base, IntegerIDMixin):
    __tablename__ = "system_settings"
    __table_args__ = (Index("ix_system_settings_key", "key", unique=True),)

    key = Column(String(100), nullable=False, comment="Unique setting name")
    value = Column(Text, nullable=False, comment="Setting value")

    def __repr__(self):
        return f"<SystemSetting(key='{self.key}')>"
