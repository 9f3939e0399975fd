"""
nomadlife.services.blog_service — Blog posts
==============================================

Posts are created and deleted, never edited.  Each post is its own
document in the ``blogs`` collection.
"""

from __future__ import annotations

import logging
import threading
import time
from datetime import UTC, datetime

from nomadlife.constants import BLOGS_COLLECTION, EXCERPT_LENGTH
from nomadlife.services.document_store import DocumentStore

logger = logging.getLogger(__name__)

_id_lock = threading.Lock()
_last_id = 0


def next_post_id() -> str:
    """Millisecond timestamp id, bumped so rapid calls never repeat."""
    global _last_id
    with _id_lock:
        candidate = time.time_ns() // 1_000_000
        if candidate <= _last_id:
            candidate = _last_id + 1
        _last_id = candidate
        return str(candidate)


def make_excerpt(content: str) -> str:
    return (content[:EXCERPT_LENGTH] + "...").strip()


def list_posts(store: DocumentStore) -> list[dict]:
    """All posts, newest first."""
    posts = store.load_all(BLOGS_COLLECTION)
    posts.sort(key=lambda p: (str(p.get("date", "")), str(p.get("id", ""))), reverse=True)
    return posts


def create_post(
    store: DocumentStore,
    *,
    title: str,
    content: str,
    excerpt: str | None = None,
    files: list | None = None,
) -> dict:
    """Build and persist a new post.

    Raises
    ------
    ValueError
        If *title* or *content* is missing.
    StorageError
        If the write fails.
    """
    if not isinstance(title, str) or not isinstance(content, str) or not title or not content:
        raise ValueError("Title and content are required")

    post = {
        "id": next_post_id(),
        "title": title.strip(),
        "content": content.strip(),
        "excerpt": excerpt.strip() if isinstance(excerpt, str) and excerpt else make_excerpt(content),
        "date": datetime.now(UTC).isoformat(),
        "files": files if isinstance(files, list) else [],
    }
    store.save(BLOGS_COLLECTION, post)
    logger.info("Created blog post %s", post["id"])
    return post


def delete_post(store: DocumentStore, post_id: str) -> bool:
    """Remove a post.  Returns ``False`` if it did not exist."""
    try:
        deleted = store.delete(BLOGS_COLLECTION, str(post_id))
    except ValueError:
        # An id that cannot be a storage key cannot name an existing post
        return False
    if deleted:
        logger.info("Deleted blog post %s", post_id)
    return deleted
