"""Storage layer for gym-tracker."""

from .backends import Document, LocalFallbackStore, StorageBackend
from .engine import get_db_path, init_db
from .factory import create_backend
from .remote import RemoteStore
from .repositories import (
    AttendanceRepository,
    SupplementRepository,
    UserProfileRepository,
)

__all__ = [
    "AttendanceRepository",
    "create_backend",
    "Document",
    "get_db_path",
    "init_db",
    "LocalFallbackStore",
    "RemoteStore",
    "StorageBackend",
    "SupplementRepository",
    "UserProfileRepository",
]
