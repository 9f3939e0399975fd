"""
nomadlife.database.engine — Database Connection & Session Helper
==================================================================

Used only when ``storage_backend`` is ``sql``.  The engine is created once
at startup from ``DATABASE_URL`` and shared by every request.

Usage::

    from nomadlife.database.engine import create_db_engine, init_db

    engine = create_db_engine(cfg.database_url)
    init_db(engine)                      # CREATE TABLE IF NOT EXISTS …
"""

from __future__ import annotations

import logging
from contextlib import contextmanager

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session

from nomadlife.database.models import Base

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Engine creation
# ---------------------------------------------------------------------------
def create_db_engine(url: str) -> Engine:
    """Build a SQLAlchemy :class:`Engine` for *url*.

    SQLite URLs get the default pool; server databases get a small pool
    sized for a serverless function:
    * ``pool_size=2`` — two persistent connections.
    * ``max_overflow=5`` — up to 5 extra connections under load.
    * ``pool_pre_ping=True`` — reconnect stale connections automatically.
    * ``pool_recycle=3600`` — recycle connections after 1 hour.
    """
    if url.startswith("sqlite"):
        engine = create_engine(url, echo=False)
    else:
        engine = create_engine(
            url,
            echo=False,
            pool_size=2,
            max_overflow=5,
            pool_pre_ping=True,
            pool_recycle=3600,
        )
    logger.info("Database engine created → %s", engine.url.host or engine.url.database)
    return engine


# ---------------------------------------------------------------------------
# Schema initialization
# ---------------------------------------------------------------------------
def init_db(engine: Engine) -> None:
    """Create all tables defined in :mod:`nomadlife.database.models`.

    Safe to call on every startup — ``CREATE TABLE IF NOT EXISTS`` under the
    hood.  There are no migrations; the schema is a single table.
    """
    Base.metadata.create_all(engine)
    logger.info("Database tables verified / created.")


# ---------------------------------------------------------------------------
# Session helper
# ---------------------------------------------------------------------------
@contextmanager
def get_session(engine: Engine):
    """Yield a :class:`Session` that auto-commits on success and rolls back
    on exception.

    Usage::

        with get_session(engine) as session:
            session.merge(Document(key="teams.json", body="{}"))
            # commit happens automatically on block exit
    """
    session = Session(engine)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
