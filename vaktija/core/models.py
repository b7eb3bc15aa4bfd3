"""
Core DB models: key-value cache entries for the database-backed cache store.
"""
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Column, String, DateTime, Text, select, delete

from vaktija.core.db import Base, session_scope


def _utc_now() -> datetime:
    """UTC now as naive datetime for DateTime(timezone=False) columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class CacheEntry(Base):
    """One cached value, e.g. key vaktija_cache_77_2026 -> JSON of the yearly record."""
    __tablename__ = "cache_entries"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=False), default=_utc_now, nullable=False)
    updated_at = Column(DateTime(timezone=False), default=_utc_now, onupdate=_utc_now, nullable=False)


def get_cache_value(key: str) -> Optional[str]:
    """Return the stored value for key, or None."""
    with session_scope() as session:
        row = session.execute(select(CacheEntry).where(CacheEntry.key == key)).scalars().first()
        return row.value if row else None


def put_cache_value(key: str, value: str) -> None:
    """Insert or replace the value stored under key."""
    with session_scope() as session:
        row = session.execute(select(CacheEntry).where(CacheEntry.key == key)).scalars().first()
        now = _utc_now()
        if row:
            row.value = value
            row.updated_at = now
        else:
            session.add(CacheEntry(key=key, value=value, created_at=now, updated_at=now))


def delete_cache_values(prefix: str = "") -> int:
    """Delete entries whose key starts with prefix. Returns number of rows removed."""
    with session_scope() as session:
        result = session.execute(delete(CacheEntry).where(CacheEntry.key.startswith(prefix, autoescape=True)))
        return result.rowcount or 0
