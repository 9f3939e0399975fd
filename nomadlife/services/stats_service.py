"""
nomadlife.services.stats_service — Player statistics
======================================================

The Minecraft mod posts a batch of ``{uuid, username, stats}`` records.
Each record is upserted on its own, keyed by uuid, so a batch that only
contains online players does not erase everyone else.
"""

from __future__ import annotations

import logging

from nomadlife.constants import STATS_COLLECTION
from nomadlife.services.document_store import DocumentStore

logger = logging.getLogger(__name__)


def upsert_stats(store: DocumentStore, records) -> int:
    """Save every record by uuid.  Returns how many were written.

    The whole batch is checked before anything is written.
    """
    if not isinstance(records, list):
        raise ValueError("Stats data must be an array")
    for record in records:
        if not isinstance(record, dict) or not record.get("uuid"):
            raise ValueError("Every stats entry needs a uuid")
        DocumentStore.item_key(STATS_COLLECTION, str(record["uuid"]))

    for record in records:
        store.save(STATS_COLLECTION, {**record, "uuid": str(record["uuid"])}, id_field="uuid")
    logger.info("Player stats updated - %d players", len(records))
    return len(records)


def list_stats(store: DocumentStore) -> list[dict]:
    """All players, sorted by username."""
    players = store.load_all(STATS_COLLECTION)
    players.sort(key=lambda p: str(p.get("username") or "").casefold())
    return players
