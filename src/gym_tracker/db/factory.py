"""One-time storage backend selection."""

import logging

import httpx

from ..config import Settings
from .backends import LocalFallbackStore, StorageBackend
from .remote import RemoteStore

logger = logging.getLogger(__name__)


def create_backend(
    settings: Settings, transport: httpx.AsyncBaseTransport | None = None
) -> StorageBackend:
    """Pick the backend for the whole process.

    Missing or placeholder remote configuration selects the local store;
    otherwise the remote store is initialized, falling back to the local
    store if that fails. Callers never re-check per operation.
    """
    local = LocalFallbackStore(settings.db_path)

    if settings.force_local:
        logger.info("Local storage forced by configuration")
        return local

    if not settings.has_remote_config():
        logger.warning("Firebase not configured. Using local storage for data persistence.")
        return local

    settings.warn_missing()
    try:
        backend = RemoteStore.from_settings(settings, transport=transport)
    except Exception:
        logger.exception("Failed to initialize remote store; falling back to local storage")
        return local

    logger.info("Remote document store initialized for project %s", settings.firebase_project_id)
    return backend
