"""
nomadlife.storage.blob — S3-compatible object storage backend
===============================================================

Objects live in one bucket under an optional key prefix.  Overwriting a
key is a single ``put_object``: concurrent writers race and the last one
wins, but a reader never observes the key as missing mid-replace.
"""

from __future__ import annotations

import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from nomadlife.storage.base import StorageBackend, StorageError, validate_key

logger = logging.getLogger(__name__)

_MISSING_CODES = frozenset({"NoSuchKey", "404", "NotFound"})


class BlobBackend(StorageBackend):
    """Keys map to ``<prefix><key>`` objects in *bucket*."""

    name = "blob"

    def __init__(self, bucket: str, prefix: str = "", client=None) -> None:
        self.bucket = bucket
        self.prefix = prefix.strip("/") + "/" if prefix.strip("/") else ""
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = boto3.client("s3")
        return self._client

    def _object_key(self, key: str) -> str:
        return self.prefix + validate_key(key)

    def get(self, key: str) -> bytes | None:
        object_key = self._object_key(key)
        try:
            resp = self.client.get_object(Bucket=self.bucket, Key=object_key)
            return resp["Body"].read()
        except ClientError as exc:
            if exc.response.get("Error", {}).get("Code") in _MISSING_CODES:
                return None
            raise StorageError(f"Could not fetch {object_key}: {exc}") from exc
        except BotoCoreError as exc:
            raise StorageError(f"Could not fetch {object_key}: {exc}") from exc

    def put(self, key: str, data: bytes) -> None:
        object_key = self._object_key(key)
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=object_key,
                Body=data,
                ContentType="application/json",
            )
        except (BotoCoreError, ClientError) as exc:
            raise StorageError(f"Could not write {object_key}: {exc}") from exc
        logger.debug("Stored s3://%s/%s (%d bytes)", self.bucket, object_key, len(data))

    def delete(self, key: str) -> bool:
        # S3 deletes are idempotent and report nothing, so probe first.
        if self.get(key) is None:
            return False
        object_key = self._object_key(key)
        try:
            self.client.delete_object(Bucket=self.bucket, Key=object_key)
        except (BotoCoreError, ClientError) as exc:
            raise StorageError(f"Could not delete {object_key}: {exc}") from exc
        return True

    def list(self, prefix: str = "") -> list[str]:
        full_prefix = self.prefix + prefix
        keys: list[str] = []
        try:
            paginator = self.client.get_paginator("list_objects_v2")
            for page in paginator.paginate(Bucket=self.bucket, Prefix=full_prefix):
                for obj in page.get("Contents", []):
                    object_key = str(obj.get("Key") or "")
                    if not object_key.startswith(self.prefix) or object_key.endswith("/"):
                        continue
                    keys.append(object_key[len(self.prefix):])
        except (BotoCoreError, ClientError) as exc:
            raise StorageError(f"Could not list {full_prefix!r}: {exc}") from exc
        return sorted(set(keys))
