"""
nomadlife.api.deps — FastAPI dependency injection
===================================================

Configuration and the storage backend are built once per process and
handed to every route.  Tests swap them through
``app.dependency_overrides``.
"""

from __future__ import annotations

from functools import lru_cache

from fastapi import Depends

from nomadlife.config import NomadConfig, load_config
from nomadlife.services.auth import AuthGate
from nomadlife.services.config_store import ConfigStore
from nomadlife.services.document_store import DocumentStore
from nomadlife.storage.base import StorageBackend
from nomadlife.storage.factory import create_backend


@lru_cache(maxsize=1)
def get_config() -> NomadConfig:
    return load_config()


@lru_cache(maxsize=1)
def get_backend() -> StorageBackend:
    return create_backend(get_config())


def get_document_store(backend: StorageBackend = Depends(get_backend)) -> DocumentStore:
    return DocumentStore(backend)


def get_config_store(
    store: DocumentStore = Depends(get_document_store),
    cfg: NomadConfig = Depends(get_config),
) -> ConfigStore:
    return ConfigStore(store, cfg.blog_salt)


def get_auth_gate(cfg: NomadConfig = Depends(get_config)) -> AuthGate:
    return AuthGate(cfg)
