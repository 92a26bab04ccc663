"""Custom exceptions for the secure_storage package."""

from __future__ import annotations


class StorageError(Exception):
    """Base exception for all storage-related errors."""


class StorageUnavailableError(StorageError):
    """Raised when the device-local store is absent, disabled or full."""


class MissingContextError(StorageError):
    """Raised when a server-side cookie operation lacks its request or response."""


class AdapterNotReadyError(StorageError):
    """Raised when a runtime primitive an adapter needs is not available yet."""


class UnsupportedOperationError(StorageError):
    """Raised when an operation cannot run in the current execution mode."""

    def __init__(self, operation: str, mode: str) -> None:
        self.operation = operation
        self.mode = mode
        super().__init__(f"'{operation}' is not supported in {mode} mode")


class StoreError(StorageError):
    """Raised when a local store operation fails."""

    def __init__(self, operation: str, detail: str = "") -> None:
        self.operation = operation
        msg = f"Store error during '{operation}'"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)


class EnvelopeError(StorageError):
    """Raised when an encrypted envelope cannot be split into its parts."""


class PolicyConfigError(StorageError):
    """Raised when an encryption policy is misconfigured."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Encryption policy misconfigured: {message}")
