"""
nomadlife.storage.factory — Backend selection
===============================================

The deployment picks one backend with ``storage_backend`` in the config;
handlers never know which one they are talking to.
"""

from __future__ import annotations

import logging

from nomadlife.config import ConfigurationError, NomadConfig
from nomadlife.storage.base import StorageBackend

logger = logging.getLogger(__name__)


def create_backend(cfg: NomadConfig) -> StorageBackend:
    """Build the :class:`StorageBackend` named by ``cfg.storage_backend``."""
    if cfg.storage_backend == "local":
        from nomadlife.storage.local import LocalBackend

        backend = LocalBackend(cfg.data_dir)
        backend.ensure_root()
    elif cfg.storage_backend == "blob":
        from nomadlife.storage.blob import BlobBackend

        if not cfg.blob_bucket:
            raise ConfigurationError("Blob storage not configured.")
        backend = BlobBackend(cfg.blob_bucket, cfg.blob_prefix)
    elif cfg.storage_backend == "sql":
        from nomadlife.database.engine import create_db_engine, init_db
        from nomadlife.storage.sql import SqlBackend

        if not cfg.database_url:
            raise ConfigurationError("Database not configured.")
        engine = create_db_engine(cfg.database_url)
        init_db(engine)
        backend = SqlBackend(engine)
    else:
        raise ConfigurationError(f"Unknown storage backend {cfg.storage_backend!r}")

    logger.info("Storage backend ready: %s", backend.name)
    return backend
