"""StorageResult — the uniform outcome of every public storage operation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class StorageResult(Generic[T]):
    """Immutable result returned by every adapter method.

    Adapters never raise past their public surface; failures are carried
    in ``error`` instead.

    Attributes:
        success: ``True`` if the operation completed.
        value:   The read value (``get`` only).  ``None`` when the key is
                 absent or the operation returns nothing.
        error:   The exception that stopped the operation (failures only).
    """

    success: bool
    value: T | None = None
    error: Exception | None = None

    # ── Factory helpers ──────────────────────────────────────

    @staticmethod
    def ok(value: T | None = None) -> StorageResult[T]:
        return StorageResult(success=True, value=value)

    @staticmethod
    def fail(error: Exception) -> StorageResult[T]:
        return StorageResult(success=False, error=error)

    def value_or(self, default: T) -> T:
        """Return ``value`` on a successful, non-empty read, else *default*."""
        if self.success and self.value is not None:
            return self.value
        return default
