"""
nomadlife.services.config_store — Singleton admin config
==========================================================

Holds the admin panel password hash and when it last changed.  The
document is provisioned on first read with the well-known default
password, so a fresh deployment can always log in.

Two concurrent first reads may both provision and persist a default;
they write the same hash, and the last write wins.
"""

from __future__ import annotations

import hashlib
import logging
from datetime import UTC, datetime

from nomadlife.constants import CONFIG_DOCUMENT, DEFAULT_ADMIN_PASSWORD
from nomadlife.services.document_store import DocumentStore
from nomadlife.storage.base import StorageError

logger = logging.getLogger(__name__)


def hash_password(password: str, salt: str) -> str:
    """Hex sha256 of ``password + salt``."""
    return hashlib.sha256((password + salt).encode("utf-8")).hexdigest()


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


class ConfigStore:
    """Read/merge/write access to the ``config`` document."""

    def __init__(self, store: DocumentStore, salt: str) -> None:
        self.store = store
        self.salt = salt

    def default_config(self) -> dict:
        return {
            "password": hash_password(DEFAULT_ADMIN_PASSWORD, self.salt),
            "lastUpdated": _now_iso(),
        }

    def get(self) -> dict:
        """Return the config, provisioning and persisting the default on a miss."""
        try:
            config = self.store.load_document(CONFIG_DOCUMENT, strict=True)
        except StorageError:
            # Never overwrite a stored password we merely failed to read
            logger.exception("Could not read admin config; using the default")
            return self.default_config()
        if config is not None and not isinstance(config, dict):
            logger.warning("Stored admin config is not an object; using the default")
            return self.default_config()
        if config and config.get("password"):
            return config

        config = {**(config or {}), **self.default_config()}
        try:
            self.store.replace_document(CONFIG_DOCUMENT, config)
            logger.info("Provisioned default admin config")
        except StorageError:
            # Still usable for this request; the next read will try again.
            logger.exception("Could not persist default admin config")
        return config

    def set(self, **updates) -> dict:
        """Merge *updates* into the config and persist.  Refreshes ``lastUpdated``.

        Raises :class:`StorageError` if the write fails.
        """
        config = {**self.get(), **updates, "lastUpdated": _now_iso()}
        self.store.replace_document(CONFIG_DOCUMENT, config)
        return config

    def verify_password(self, candidate: str) -> bool:
        return hash_password(candidate, self.salt) == self.get()["password"]

    def change_password(self, old_password: str, new_password: str) -> bool:
        """Replace the password if *old_password* matches.  Returns success."""
        if not self.verify_password(old_password):
            return False
        self.set(password=hash_password(new_password, self.salt))
        logger.info("Admin password changed")
        return True
