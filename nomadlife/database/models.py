"""
nomadlife.database.models — SQLAlchemy 2.0 Data Models
========================================================

Tables:
- documents — Generic JSON document store used by :class:`SqlBackend`.
  One row per storage key (``blogs/<id>.json``, ``teams.json``, …).
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------
class Base(DeclarativeBase):
    """Shared base for all NomadLife ORM models."""


# ---------------------------------------------------------------------------
# Documents — key/value rows holding serialized JSON
# ---------------------------------------------------------------------------
class Document(Base):
    """A stored JSON document.

    ``body`` is kept as text, never parsed by the database, so large
    numeric identifiers inside it round-trip byte-for-byte.
    """
    __tablename__ = "documents"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<Document key={self.key!r}>"
