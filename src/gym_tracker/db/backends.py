"""Storage backend interface and the local fallback implementation."""

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

import aiosqlite

from ..errors import StorageError, WriteFailure
from . import paths
from .engine import get_db_path, init_db

logger = logging.getLogger(__name__)

KEY_SEPARATOR = ":"


@dataclass
class Document:
    """A stored document and its id within its collection."""

    id: str
    data: dict


class StorageBackend(ABC):
    """Document storage addressed by collection path + document id.

    Both implementations honor the same logical paths (see ``db.paths``).
    Reading something that does not exist yields ``None`` or ``[]``.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Short backend name for display."""
        pass

    @abstractmethod
    async def get(self, collection: str, doc_id: str) -> dict | None:
        """Read one document."""
        pass

    @abstractmethod
    async def set(
        self, collection: str, doc_id: str, data: dict, merge: bool = False
    ) -> None:
        """Write one document, replacing it unless ``merge`` is set."""
        pass

    @abstractmethod
    async def delete(self, collection: str, doc_id: str) -> None:
        """Delete one document; missing documents are a no-op."""
        pass

    @abstractmethod
    async def list_collection(self, collection: str) -> list[Document]:
        """List every document in a collection."""
        pass

    def is_local_fallback(self) -> bool:
        return False

    async def aclose(self) -> None:
        """Release any held resources."""


class LocalFallbackStore(StorageBackend):
    """On-device store keeping each collection root as one JSON blob.

    The blob key joins the root path segments with ``KEY_SEPARATOR``;
    document ids are the keys inside the blob. Bucketed collections
    (``.../{yearMonth}/days``) share their root blob and are told apart by
    the bucket of each document's ``date`` field. Every write reads and
    rewrites the whole blob; writes through one store are serialized, but
    separate processes sharing the file can still lose updates (last write
    wins).
    """

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()
        self._schema_ready = False
        self._write_lock = asyncio.Lock()

    @property
    def name(self) -> str:
        return "local"

    def is_local_fallback(self) -> bool:
        return True

    @staticmethod
    def blob_key(collection: str) -> tuple[str, str | None]:
        """Return the blob key and bucket (if any) for a collection path."""
        root, bucket = paths.split_bucket(collection)
        return KEY_SEPARATOR.join(paths.split(root)), bucket

    @staticmethod
    def _in_bucket(data: dict, bucket: str | None) -> bool:
        if bucket is None:
            return True
        date_value = data.get("date")
        return isinstance(date_value, str) and paths.bucket_key(date_value) == bucket

    async def _ensure_schema(self) -> None:
        if not self._schema_ready:
            await init_db(self.db_path)
            self._schema_ready = True

    async def _read_blob(self, key: str) -> dict:
        try:
            await self._ensure_schema()
            async with aiosqlite.connect(self.db_path) as db:
                cursor = await db.execute(
                    "SELECT value FROM kv_store WHERE key = ?", (key,)
                )
                row = await cursor.fetchone()
        except aiosqlite.Error as e:
            raise StorageError(f"Failed to read '{key}': {e}") from e
        if row is None:
            return {}
        return json.loads(row[0])

    async def _write_blob(self, key: str, blob: dict) -> None:
        try:
            await self._ensure_schema()
            async with aiosqlite.connect(self.db_path) as db:
                await db.execute(
                    """
                    INSERT INTO kv_store (key, value, updated_at)
                    VALUES (?, ?, CURRENT_TIMESTAMP)
                    ON CONFLICT(key) DO UPDATE SET
                        value = excluded.value,
                        updated_at = CURRENT_TIMESTAMP
                    """,
                    (key, json.dumps(blob, default=str)),
                )
                await db.commit()
        except aiosqlite.Error as e:
            raise WriteFailure(f"Failed to write '{key}': {e}", path=key) from e

    async def get(self, collection: str, doc_id: str) -> dict | None:
        key, bucket = self.blob_key(collection)
        data = (await self._read_blob(key)).get(doc_id)
        if data is None or not self._in_bucket(data, bucket):
            return None
        return data

    async def set(
        self, collection: str, doc_id: str, data: dict, merge: bool = False
    ) -> None:
        key, _ = self.blob_key(collection)
        async with self._write_lock:
            blob = await self._read_blob(key)
            if merge and isinstance(blob.get(doc_id), dict):
                blob[doc_id] = {**blob[doc_id], **data}
            else:
                blob[doc_id] = dict(data)
            await self._write_blob(key, blob)
        logger.debug("local set %s/%s", collection, doc_id)

    async def delete(self, collection: str, doc_id: str) -> None:
        key, bucket = self.blob_key(collection)
        async with self._write_lock:
            blob = await self._read_blob(key)
            data = blob.get(doc_id)
            if data is None or not self._in_bucket(data, bucket):
                return
            del blob[doc_id]
            await self._write_blob(key, blob)
        logger.debug("local delete %s/%s", collection, doc_id)

    async def list_collection(self, collection: str) -> list[Document]:
        key, bucket = self.blob_key(collection)
        blob = await self._read_blob(key)
        return [
            Document(id=doc_id, data=data)
            for doc_id, data in blob.items()
            if isinstance(data, dict) and self._in_bucket(data, bucket)
        ]
