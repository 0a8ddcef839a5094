"""Error taxonomy for the storage and catalog layers."""

from dataclasses import dataclass


class StorageError(Exception):
    """A storage backend operation failed."""


class BackendInitError(StorageError):
    """The remote store could not be configured or initialized."""


class WriteFailure(StorageError):
    """A create, update or delete did not reach the backend.

    Propagated to the caller as-is; writes are never retried.
    """

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


@dataclass(frozen=True)
class InvalidReference:
    """An ingredient line points at a std id missing from the catalog.

    Returned instead of performing a product write.
    """

    std_id: str
    line_index: int | None = None

    @property
    def message(self) -> str:
        if self.line_index is None:
            return f"Unknown ingredient '{self.std_id}'"
        return f"Unknown ingredient '{self.std_id}' on line {self.line_index + 1}"

    def to_dict(self) -> dict:
        return {
            "error": "invalid_reference",
            "stdId": self.std_id,
            "lineIndex": self.line_index,
            "message": self.message,
        }
