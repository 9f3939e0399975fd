"""
nomadlife.storage.local — Filesystem backend
==============================================

Stores each key as a file under a root directory.  On serverless hosts
the root is usually ephemeral (``/tmp``), which is fine for previews and
local development but loses data between cold starts.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from nomadlife.storage.base import StorageBackend, StorageError, validate_key

logger = logging.getLogger(__name__)


class LocalBackend(StorageBackend):
    """One file per key under *root*."""

    name = "local"

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def ensure_root(self) -> None:
        """Create the root directory if it doesn't exist."""
        self.root.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.root / validate_key(key)

    def get(self, key: str) -> bytes | None:
        path = self._path(key)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise StorageError(f"Could not read {key}: {exc}") from exc

    def put(self, key: str, data: bytes) -> None:
        path = self._path(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            # Write beside the target then swap, so readers never see a partial file
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
            try:
                with os.fdopen(fd, "wb") as fh:
                    fh.write(data)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StorageError(f"Could not write {key}: {exc}") from exc

    def delete(self, key: str) -> bool:
        path = self._path(key)
        try:
            path.unlink()
            return True
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise StorageError(f"Could not delete {key}: {exc}") from exc

    def list(self, prefix: str = "") -> list[str]:
        if not self.root.exists():
            return []
        try:
            keys = [
                p.relative_to(self.root).as_posix()
                for p in self.root.rglob("*")
                if p.is_file() and not p.name.endswith(".tmp")
            ]
        except OSError as exc:
            raise StorageError(f"Could not list {prefix!r}: {exc}") from exc
        return sorted(k for k in keys if k.startswith(prefix))
