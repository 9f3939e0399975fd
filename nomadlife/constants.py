"""
nomadlife.constants — Shared Constants
========================================

Collection / document names and resource defaults.  Import from here
instead of repeating string literals in services and routes.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Per-item collections (one JSON document per item)
# ---------------------------------------------------------------------------
BLOGS_COLLECTION = "blogs"
STATS_COLLECTION = "player-stats"

# ---------------------------------------------------------------------------
# Wholesale-replaced documents (one JSON document for the whole collection)
# ---------------------------------------------------------------------------
CONFIG_DOCUMENT = "config"
EVENTS_DOCUMENT = "events"
TEAMS_DOCUMENT = "teams"
MAPPINGS_DOCUMENT = "player-mappings"

# ---------------------------------------------------------------------------
# Resource defaults
# ---------------------------------------------------------------------------
DEFAULT_ADMIN_PASSWORD = "admin123"
EXCERPT_LENGTH = 150

EVENT_STATUSES = ("scheduled", "active", "completed", "cancelled")
VISIBLE_EVENT_STATUSES = frozenset({"scheduled", "active"})

LIST_CACHE_CONTROL = "s-maxage=60, stale-while-revalidate"


def placeholder_username(user_id: str) -> str:
    """Display name used when the bot did not resolve a Discord username."""
    return f"User_{user_id}"
