"""
nomadlife.storage.sql — Relational backend
============================================

Keeps every key as a row in the ``documents`` table.  ``put`` is an
upsert through :meth:`Session.merge`.
"""

from __future__ import annotations

import logging

from sqlalchemy import Engine, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from nomadlife.database.engine import get_session
from nomadlife.database.models import Document
from nomadlife.storage.base import StorageBackend, StorageError, validate_key

logger = logging.getLogger(__name__)


class SqlBackend(StorageBackend):
    name = "sql"

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def get(self, key: str) -> bytes | None:
        validate_key(key)
        try:
            with Session(self.engine) as session:
                row = session.get(Document, key)
                return None if row is None else row.body.encode("utf-8")
        except SQLAlchemyError as exc:
            raise StorageError(f"Could not read {key}: {exc}") from exc

    def put(self, key: str, data: bytes) -> None:
        validate_key(key)
        try:
            with get_session(self.engine) as session:
                session.merge(Document(key=key, body=data.decode("utf-8")))
        except SQLAlchemyError as exc:
            raise StorageError(f"Could not write {key}: {exc}") from exc

    def delete(self, key: str) -> bool:
        validate_key(key)
        try:
            with get_session(self.engine) as session:
                row = session.get(Document, key)
                if row is None:
                    return False
                session.delete(row)
                return True
        except SQLAlchemyError as exc:
            raise StorageError(f"Could not delete {key}: {exc}") from exc

    def list(self, prefix: str = "") -> list[str]:
        try:
            with Session(self.engine) as session:
                stmt = select(Document.key).order_by(Document.key)
                if prefix:
                    stmt = stmt.where(Document.key.startswith(prefix, autoescape=True))
                return list(session.scalars(stmt).all())
        except SQLAlchemyError as exc:
            raise StorageError(f"Could not list {prefix!r}: {exc}") from exc
