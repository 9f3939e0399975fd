"""
nomadlife.services.mappings_service — Discord ↔ Minecraft player mappings
===========================================================================

Stored as one object keyed by Discord user id::

    {"<discordId>": {"java": "Steve", "bedrock": "Steve123",
                     "discord_username": "steve"}}
"""

from __future__ import annotations

import logging

from nomadlife.constants import MAPPINGS_DOCUMENT, placeholder_username
from nomadlife.services.document_store import DocumentStore

logger = logging.getLogger(__name__)


def replace_mappings(store: DocumentStore, mappings) -> int:
    """Overwrite the stored mappings.  Returns the player count."""
    if not isinstance(mappings, dict):
        raise ValueError("No mappings data provided")
    # JSON object keys are always strings already; str() covers direct callers.
    normalised = {str(discord_id): data for discord_id, data in mappings.items()}
    store.replace_document(MAPPINGS_DOCUMENT, normalised)
    logger.info("Player mappings updated by bot - %d players", len(normalised))
    return len(normalised)


def load_mappings(store: DocumentStore) -> dict:
    mappings = store.load_document(MAPPINGS_DOCUMENT, default={})
    if not isinstance(mappings, dict):
        logger.warning("Stored mappings document is not an object; ignoring it")
        return {}
    return mappings


def mapping_views(mappings: dict) -> list[dict]:
    views = []
    for discord_id, data in mappings.items():
        if not isinstance(data, dict):
            continue
        views.append({
            "discordId": discord_id,
            "java": data.get("java"),
            "bedrock": data.get("bedrock") or None,
            "discordUsername": data.get("discord_username") or placeholder_username(discord_id),
        })
    return views
