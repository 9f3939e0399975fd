"""
nomadlife.config — Environment + YAML Configuration Loader
============================================================

Builds one immutable :class:`NomadConfig` at process start.  Handlers never
read ``os.environ`` themselves; they receive the config object through
FastAPI dependency injection (see :mod:`nomadlife.api.deps`).

Secrets (admin token, bot secret, salt, credentials) come from the
environment.  Soft settings (which storage backend, where it lives) may
also be put in an optional ``config.yaml``; environment variables win.

Usage::

    from nomadlife.config import load_config

    cfg = load_config()              # reads ./config.yaml if present
    print(cfg.storage_backend)       # "local"
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

import yaml

STORAGE_BACKENDS = ("local", "blob", "sql")
DEFAULT_SALT = "default_salt_change_me"

# env var → config field
_ENV_KEYS: dict[str, str] = {
    "ADMIN_TOKEN": "admin_token",
    "BOT_SECRET": "bot_secret",
    "BLOG_SALT": "blog_salt",
    "NOMAD_STORAGE_BACKEND": "storage_backend",
    "NOMAD_DATA_DIR": "data_dir",
    "DATABASE_URL": "database_url",
    "BLOB_BUCKET": "blob_bucket",
    "BLOB_PREFIX": "blob_prefix",
}


class ConfigurationError(RuntimeError):
    """A required secret or credential is missing or invalid."""


# ---------------------------------------------------------------------------
# Typed settings object
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class NomadConfig:
    """Immutable process-wide configuration.

    ``admin_token`` and ``bot_secret`` may be ``None``: a missing secret is
    only an error for requests that need it, and is reported as a server
    configuration error rather than an auth failure.
    """

    # Secrets
    admin_token: str | None = None
    bot_secret: str | None = None
    blog_salt: str = DEFAULT_SALT

    # Storage
    storage_backend: str = "local"
    data_dir: str = "data"
    database_url: str | None = None
    blob_bucket: str | None = None
    blob_prefix: str = ""


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def load_config(
    path: str | Path = "config.yaml",
    environ: Mapping[str, str] | None = None,
) -> NomadConfig:
    """Build a :class:`NomadConfig` from *path* (optional) and the environment.

    Parameters
    ----------
    path:
        YAML file with soft settings.  A missing file is not an error.
    environ:
        Mapping to read variables from.  Defaults to ``os.environ``.

    Raises
    ------
    ConfigurationError
        If the storage backend is unknown or its credentials are missing.
    """
    env = os.environ if environ is None else environ

    raw: dict = {}
    config_path = Path(path)
    if config_path.exists():
        with open(config_path, encoding="utf-8") as fh:
            raw = yaml.safe_load(fh) or {}

    for env_key, field in _ENV_KEYS.items():
        value = env.get(env_key, "").strip()
        if value:
            raw[field] = value

    backend = str(raw.get("storage_backend", "local")).lower()
    if backend not in STORAGE_BACKENDS:
        raise ConfigurationError(
            f"Unknown storage backend {backend!r}. "
            f"Expected one of: {', '.join(STORAGE_BACKENDS)}"
        )
    if backend == "sql" and not raw.get("database_url"):
        raise ConfigurationError("storage_backend 'sql' requires DATABASE_URL.")
    if backend == "blob" and not raw.get("blob_bucket"):
        raise ConfigurationError("storage_backend 'blob' requires BLOB_BUCKET.")

    return NomadConfig(
        admin_token=_opt_str(raw.get("admin_token")),
        bot_secret=_opt_str(raw.get("bot_secret")),
        blog_salt=_opt_str(raw.get("blog_salt")) or DEFAULT_SALT,
        storage_backend=backend,
        data_dir=str(raw.get("data_dir", "data")),
        database_url=_opt_str(raw.get("database_url")),
        blob_bucket=_opt_str(raw.get("blob_bucket")),
        blob_prefix=str(raw.get("blob_prefix") or ""),
    )


def _opt_str(value) -> str | None:
    """YAML may hand back ints for numeric-looking secrets; keep them text."""
    if value is None or value == "":
        return None
    return str(value)
