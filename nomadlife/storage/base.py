"""
nomadlife.storage.base — Storage Backend Contract
===================================================

Every persistence backend (filesystem, object storage, SQL table) offers
the same four byte-level operations.  The :class:`DocumentStore` above it
handles JSON and collection naming; backends only move bytes around.

Keys are ``/``-separated relative paths such as ``blogs/1718000000000.json``.
Any failure talking to the underlying system is raised as
:class:`StorageError` so callers can decide whether to degrade (reads) or
propagate (writes).
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class StorageError(RuntimeError):
    """The backing store is unreachable or rejected the operation."""


class StorageBackend(ABC):
    """Byte-level key/value storage."""

    name: str = "abstract"

    @abstractmethod
    def get(self, key: str) -> bytes | None:
        """Return the stored bytes, or ``None`` if *key* does not exist."""

    @abstractmethod
    def put(self, key: str, data: bytes) -> None:
        """Create or overwrite *key*.  Last writer wins."""

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove *key*.  Returns ``True`` if it existed."""

    @abstractmethod
    def list(self, prefix: str = "") -> list[str]:
        """Return every key starting with *prefix*, sorted."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r}>"


def validate_key(key: str) -> str:
    """Reject keys that could escape the store's namespace."""
    if not key or key.startswith("/") or "\\" in key:
        raise ValueError(f"Invalid storage key: {key!r}")
    if any(part in ("", ".", "..") for part in key.split("/")):
        raise ValueError(f"Invalid storage key: {key!r}")
    return key
