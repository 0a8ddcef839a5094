"""Remote document store speaking the Firestore REST API."""

import logging
import re
from datetime import datetime, timezone
from urllib.parse import quote

import httpx

from ..config import DEFAULT_FIRESTORE_URL, Settings
from ..errors import BackendInitError, StorageError, WriteFailure
from . import paths
from .backends import Document, StorageBackend

logger = logging.getLogger(__name__)

SIMPLE_FIELD_RE = re.compile(r"^[A-Za-z_][A-Za-z_0-9]*$")
_FRACTION_RE = re.compile(r"\.(\d+)")


# ----------------------------------------------------------------------
# Typed value codec
# ----------------------------------------------------------------------


def encode_value(value) -> dict:
    """Encode a Python value as a Firestore typed value."""
    if value is None:
        return {"nullValue": None}
    if isinstance(value, bool):
        return {"booleanValue": value}
    if isinstance(value, int):
        return {"integerValue": str(value)}
    if isinstance(value, float):
        return {"doubleValue": value}
    if isinstance(value, str):
        return {"stringValue": value}
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return {"timestampValue": value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")}
    if isinstance(value, (list, tuple)):
        if not value:
            return {"arrayValue": {}}
        return {"arrayValue": {"values": [encode_value(v) for v in value]}}
    if isinstance(value, dict):
        return {"mapValue": {"fields": encode_fields(value)}}
    raise TypeError(f"Cannot store value of type {type(value).__name__}")


def encode_fields(data: dict) -> dict:
    return {str(key): encode_value(value) for key, value in data.items()}


def _parse_timestamp(text: str) -> datetime:
    text = text.replace("Z", "+00:00")
    # Firestore sends up to nanoseconds; datetime keeps microseconds
    text = _FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    return datetime.fromisoformat(text)


def decode_value(value: dict):
    """Decode a Firestore typed value into a Python value."""
    if "nullValue" in value:
        return None
    if "booleanValue" in value:
        return bool(value["booleanValue"])
    if "integerValue" in value:
        return int(value["integerValue"])
    if "doubleValue" in value:
        return float(value["doubleValue"])
    if "stringValue" in value:
        return value["stringValue"]
    if "timestampValue" in value:
        return _parse_timestamp(value["timestampValue"])
    if "arrayValue" in value:
        return [decode_value(v) for v in value["arrayValue"].get("values", [])]
    if "mapValue" in value:
        return decode_fields(value["mapValue"].get("fields", {}))
    # bytes, references and geo points are passed through untouched
    return next(iter(value.values()), None)


def decode_fields(fields: dict) -> dict:
    return {key: decode_value(value) for key, value in fields.items()}


def field_path(name: str) -> str:
    if SIMPLE_FIELD_RE.match(name):
        return name
    escaped = name.replace("\\", "\\\\").replace("`", "\\`")
    return f"`{escaped}`"


# ----------------------------------------------------------------------
# Store
# ----------------------------------------------------------------------


class RemoteStore(StorageBackend):
    """Networked document database addressed by collection/document paths.

    No server-side filtering is used; callers filter after bucket selection.
    """

    PAGE_SIZE = 300

    def __init__(
        self,
        project_id: str,
        api_key: str,
        database_id: str = "(default)",
        base_url: str = DEFAULT_FIRESTORE_URL,
        id_token: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if not project_id:
            raise BackendInitError("A Firebase project id is required")
        self.project_id = project_id
        self.api_key = api_key
        self.documents_url = (
            f"{base_url.rstrip('/')}/projects/{quote(project_id, safe='')}"
            f"/databases/{quote(database_id, safe='()')}/documents"
        )
        headers = {"Authorization": f"Bearer {id_token}"} if id_token else None
        self._client = httpx.AsyncClient(
            timeout=timeout, headers=headers, transport=transport
        )

    @classmethod
    def from_settings(
        cls, settings: Settings, transport: httpx.AsyncBaseTransport | None = None
    ) -> "RemoteStore":
        """Build a store from settings, raising BackendInitError when unusable."""
        if not settings.has_remote_config():
            raise BackendInitError("Firebase is not configured")
        try:
            return cls(
                project_id=settings.firebase_project_id,
                api_key=settings.firebase_api_key,
                database_id=settings.firebase_database_id,
                base_url=settings.firestore_base_url,
                id_token=settings.firebase_id_token,
                timeout=settings.http_timeout,
                transport=transport,
            )
        except (httpx.HTTPError, ValueError, TypeError) as e:
            raise BackendInitError(f"Failed to initialize remote store: {e}") from e

    @property
    def name(self) -> str:
        return "remote"

    def _url(self, collection: str, doc_id: str | None = None) -> str:
        segments = paths.split(collection)
        if doc_id is not None:
            segments.append(doc_id)
        return self.documents_url + "/" + "/".join(quote(s, safe="") for s in segments)

    def _params(self, extra: list[tuple[str, str]] | None = None) -> list[tuple[str, str]]:
        params = [("key", self.api_key)] if self.api_key else []
        return params + (extra or [])

    async def get(self, collection: str, doc_id: str) -> dict | None:
        try:
            response = await self._client.get(
                self._url(collection, doc_id), params=self._params()
            )
        except httpx.HTTPError as e:
            raise StorageError(f"Failed to read {collection}/{doc_id}: {e}") from e
        if response.status_code == 404:
            return None
        if response.is_error:
            raise StorageError(
                f"Failed to read {collection}/{doc_id}: HTTP {response.status_code}"
            )
        return decode_fields(response.json().get("fields", {}))

    async def set(
        self, collection: str, doc_id: str, data: dict, merge: bool = False
    ) -> None:
        path = f"{collection}/{doc_id}"
        extra = (
            [("updateMask.fieldPaths", field_path(name)) for name in data]
            if merge
            else None
        )
        try:
            body = {"fields": encode_fields(data)}
            response = await self._client.patch(
                self._url(collection, doc_id), params=self._params(extra), json=body
            )
        except (httpx.HTTPError, TypeError) as e:
            raise WriteFailure(f"Failed to write {path}: {e}", path=path) from e
        if response.is_error:
            raise WriteFailure(
                f"Failed to write {path}: HTTP {response.status_code}", path=path
            )
        logger.debug("remote set %s", path)

    async def delete(self, collection: str, doc_id: str) -> None:
        path = f"{collection}/{doc_id}"
        try:
            response = await self._client.delete(
                self._url(collection, doc_id), params=self._params()
            )
        except httpx.HTTPError as e:
            raise WriteFailure(f"Failed to delete {path}: {e}", path=path) from e
        if response.is_error and response.status_code != 404:
            raise WriteFailure(
                f"Failed to delete {path}: HTTP {response.status_code}", path=path
            )
        logger.debug("remote delete %s", path)

    async def list_collection(self, collection: str) -> list[Document]:
        documents: list[Document] = []
        page_token: str | None = None
        while True:
            extra = [("pageSize", str(self.PAGE_SIZE))]
            if page_token:
                extra.append(("pageToken", page_token))
            try:
                response = await self._client.get(
                    self._url(collection), params=self._params(extra)
                )
            except httpx.HTTPError as e:
                raise StorageError(f"Failed to list {collection}: {e}") from e
            if response.status_code == 404:
                return documents
            if response.is_error:
                raise StorageError(
                    f"Failed to list {collection}: HTTP {response.status_code}"
                )
            payload = response.json()
            for doc in payload.get("documents", []):
                documents.append(
                    Document(
                        id=doc["name"].rsplit("/", 1)[-1],
                        data=decode_fields(doc.get("fields", {})),
                    )
                )
            page_token = payload.get("nextPageToken")
            if not page_token:
                return documents

    async def aclose(self) -> None:
        await self._client.aclose()
