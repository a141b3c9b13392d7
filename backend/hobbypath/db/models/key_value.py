"""Key-value ORM model backing the local document store."""
from __future__ import annotations

from sqlalchemy import Column, DateTime, String, Text, func

from hobbypath.db.base import Base


class KeyValueEntry(Base):
    __tablename__ = "key_value_store"

    key = Column(String(length=100), primary_key=True)
    value = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
