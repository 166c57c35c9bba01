"""
SQLAlchemy ORM models.

Reviews are stored as opaque blobs in a single key-value table so the
review store never depends on the database schema beyond get/set.
"""
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, LargeBinary, String
from sqlalchemy.orm import DeclarativeBase


# ── Base ──────────────────────────────────────────────────────────────────────

class Base(DeclarativeBase):
    pass


# ── Timestamp helper ──────────────────────────────────────────────────────────

def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ── Key-value entries ─────────────────────────────────────────────────────────

class KeyValueEntry(Base):
    __tablename__ = "kv_entries"

    key = Column(String(255), primary_key=True)
    value = Column(LargeBinary, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    def __repr__(self) -> str:
        return f"<KeyValueEntry key={self.key!r} size={len(self.value or b'')}>"
