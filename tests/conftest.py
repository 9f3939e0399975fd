"""
tests/conftest.py — Shared Test Fixtures
=========================================
"""

from __future__ import annotations

import pytest
from sqlalchemy import Engine, create_engine

from nomadlife.config import NomadConfig
from nomadlife.database.models import Base
from nomadlife.services.config_store import ConfigStore
from nomadlife.services.document_store import DocumentStore
from nomadlife.storage.local import LocalBackend

ADMIN_TOKEN = "test-admin-token"
BOT_SECRET = "test-bot-secret"
SALT = "test-salt"


@pytest.fixture
def cfg(tmp_path) -> NomadConfig:
    return NomadConfig(
        admin_token=ADMIN_TOKEN,
        bot_secret=BOT_SECRET,
        blog_salt=SALT,
        storage_backend="local",
        data_dir=str(tmp_path / "data"),
    )


@pytest.fixture
def backend(tmp_path) -> LocalBackend:
    b = LocalBackend(tmp_path / "data")
    b.ensure_root()
    return b


@pytest.fixture
def store(backend) -> DocumentStore:
    return DocumentStore(backend)


@pytest.fixture
def config_store(store) -> ConfigStore:
    return ConfigStore(store, SALT)


@pytest.fixture
def db_engine() -> Engine:
    """In-memory SQLite engine with the ``documents`` table.

    Uses StaticPool so every session shares the same in-memory database.
    """
    from sqlalchemy.pool import StaticPool

    engine = create_engine(
        "sqlite://",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def make_client(backend):
    """Factory: a TestClient wired to the tmp backend and the given config."""
    from fastapi.testclient import TestClient

    from nomadlife.api.deps import get_backend, get_config
    from nomadlife.api.main import app

    def _make(config: NomadConfig) -> TestClient:
        app.dependency_overrides[get_config] = lambda: config
        app.dependency_overrides[get_backend] = lambda: backend
        return TestClient(app, raise_server_exceptions=False)

    yield _make
    app.dependency_overrides.clear()


@pytest.fixture
def client(make_client, cfg):
    return make_client(cfg)

