"""Error types raised by the media catalog."""

from __future__ import annotations


class CatalogError(Exception):
    """Base error carrying the failing operation and, for batches, its position."""

    def __init__(self, operation: str, cause: BaseException | str | None = None, *, index: int | None = None) -> None:
        self.operation = operation
        self.index = index
        self.cause = cause
        super().__init__(self._render())

    def _render(self) -> str:
        label = self.operation if self.index is None else f"{self.operation} {self.index}"
        if self.cause is None:
            return label
        return f"{label}: {self.cause}"


class StoreError(CatalogError):
    """A Redis command or pipeline failed."""


class RecordDecodeError(CatalogError):
    """Stored record data could not be decoded."""


class UploadAuthorizationError(CatalogError):
    """The object store could not presign an upload."""


class IdentifierGenerationError(CatalogError):
    """A media identifier could not be generated."""
