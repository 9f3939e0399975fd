"""
nomadlife.services.events_service — Discord scheduled events
==============================================================

The bot pushes the full event list; the website shows only events that
are still scheduled or running, soonest first.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from nomadlife.constants import EVENTS_DOCUMENT, VISIBLE_EVENT_STATUSES
from nomadlife.services.document_store import DocumentStore

logger = logging.getLogger(__name__)

_FAR_FUTURE = datetime.max.replace(tzinfo=UTC)


def _start_key(event: dict) -> datetime:
    """Sortable start time; unparseable values sort last.

    Accepts ISO-8601 strings or epoch milliseconds.
    """
    raw = event.get("start_time")
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        try:
            return datetime.fromtimestamp(raw / 1000, tz=UTC)
        except (ValueError, OverflowError, OSError):
            return _FAR_FUTURE
    if not isinstance(raw, str):
        return _FAR_FUTURE
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        return _FAR_FUTURE
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def load_events(store: DocumentStore) -> list[dict]:
    events = store.load_document(EVENTS_DOCUMENT, default=[])
    if not isinstance(events, list):
        logger.warning("Stored events document is not a list; ignoring it")
        return []
    return [e for e in events if isinstance(e, dict)]


def visible_events(events: list[dict]) -> list[dict]:
    """Scheduled/active events ordered by start time."""
    shown = [e for e in events if e.get("status") in VISIBLE_EVENT_STATUSES]
    shown.sort(key=_start_key)
    return shown


def replace_events(store: DocumentStore, events) -> int:
    """Overwrite the stored event list.  Returns how many were stored."""
    if not isinstance(events, list):
        raise ValueError("Events data must be an array")
    store.replace_document(EVENTS_DOCUMENT, events)
    logger.info("Events data updated by bot - %d events", len(events))
    return len(events)
