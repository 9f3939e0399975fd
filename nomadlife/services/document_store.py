"""
nomadlife.services.document_store — JSON documents over any backend
=====================================================================

Two storage shapes share one store:

* **Per-item collections** (blog posts, player stats): each document is
  its own key, ``<collection>/<id>.json``.  Use :meth:`load_all`,
  :meth:`load_one`, :meth:`save`, :meth:`delete`.
* **Wholesale documents** (config, events, teams, player mappings): the
  entire collection is one key, ``<name>.json``, overwritten in one go.
  Use :meth:`load_document` and :meth:`replace_document`.

Failure policy: reads log and degrade (empty result / default) when the
backend is unreachable or the stored JSON is malformed; writes propagate
:class:`StorageError` so the handler can report a 500.  The store imposes
no ordering on what it returns.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from nomadlife.storage.base import StorageBackend, StorageError, validate_key

logger = logging.getLogger(__name__)

_SUFFIX = ".json"


def encode(value: Any) -> bytes:
    return json.dumps(value, indent=2, ensure_ascii=False).encode("utf-8")


def decode(data: bytes) -> Any:
    return json.loads(data.decode("utf-8"))


class DocumentStore:
    """JSON (de)serialization and key naming on top of a backend."""

    def __init__(self, backend: StorageBackend) -> None:
        self.backend = backend

    # ------------------------------------------------------------------
    # Key naming
    # ------------------------------------------------------------------
    @staticmethod
    def item_key(collection: str, doc_id: str) -> str:
        doc_id = str(doc_id)
        if not doc_id or "/" in doc_id:
            raise ValueError(f"Invalid document id: {doc_id!r}")
        return validate_key(f"{collection}/{doc_id}{_SUFFIX}")

    @staticmethod
    def document_key(name: str) -> str:
        return f"{name}{_SUFFIX}"

    # ------------------------------------------------------------------
    # Per-item collections
    # ------------------------------------------------------------------
    def load_all(self, collection: str) -> list[dict]:
        """Every document in *collection*; ``[]`` on any backend failure."""
        prefix = f"{collection}/"
        try:
            keys = self.backend.list(prefix)
        except StorageError:
            logger.exception("Error listing collection %s", collection)
            return []

        documents: list[dict] = []
        for key in keys:
            if not key.endswith(_SUFFIX) or "/" in key[len(prefix):]:
                continue
            try:
                data = self.backend.get(key)
                if data is None:
                    # Deleted between list and get
                    continue
                document = decode(data)
                if not isinstance(document, dict):
                    logger.warning("Skipping non-object document %s", key)
                    continue
                documents.append(document)
            except StorageError:
                logger.exception("Error loading %s", key)
            except ValueError:
                logger.warning("Skipping malformed document %s", key)
        return documents

    def load_one(self, collection: str, doc_id: str) -> dict | None:
        """A single document, or ``None`` when it does not exist."""
        try:
            key = self.item_key(collection, doc_id)
        except ValueError:
            return None
        try:
            data = self.backend.get(key)
        except StorageError:
            logger.exception("Error loading %s", key)
            return None
        if data is None:
            return None
        try:
            document = decode(data)
        except ValueError:
            logger.warning("Malformed document %s", key)
            return None
        return document if isinstance(document, dict) else None

    def save(self, collection: str, document: dict, id_field: str = "id") -> dict:
        """Write *document* at the key derived from ``document[id_field]``.

        Saving the same id twice overwrites the same key.
        Raises :class:`StorageError` on backend failure.
        """
        doc_id = document.get(id_field)
        if doc_id is None or doc_id == "":
            raise ValueError(f"Document has no {id_field!r}")
        self.backend.put(self.item_key(collection, doc_id), encode(document))
        return document

    def delete(self, collection: str, doc_id: str) -> bool:
        """Remove a document.  Returns ``True`` if it existed."""
        return self.backend.delete(self.item_key(collection, doc_id))

    # ------------------------------------------------------------------
    # Wholesale documents
    # ------------------------------------------------------------------
    def load_document(self, name: str, default: Any = None, *, strict: bool = False) -> Any:
        """The whole-collection document *name*, or *default* if absent/unreadable.

        With *strict*, a backend failure or malformed JSON raises
        :class:`StorageError` instead of looking like an absent document.
        """
        key = self.document_key(name)
        try:
            data = self.backend.get(key)
        except StorageError:
            if strict:
                raise
            logger.exception("Error loading %s", key)
            return default
        if data is None:
            return default
        try:
            return decode(data)
        except ValueError as exc:
            if strict:
                raise StorageError(f"Malformed document {key}") from exc
            logger.warning("Malformed document %s", key)
            return default

    def replace_document(self, name: str, value: Any) -> None:
        """Overwrite *name* with *value* in a single put.  Last writer wins."""
        self.backend.put(self.document_key(name), encode(value))
        logger.info("Replaced %s", self.document_key(name))
