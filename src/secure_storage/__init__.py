"""secure_storage — cookie and device-local storage with selective encryption.

Two physical stores share one asynchronous contract
(``get`` / ``set`` / ``remove`` / ``clear``).  Values are serialized,
encrypted when the policy asks for it, and every call returns a
:class:`StorageResult` instead of raising.
"""

from secure_storage.adapters import CookieAdapter, LocalStorageAdapter, StorageAdapter
from secure_storage.config import (
    COOKIE_KEYS,
    LOCAL_STORAGE_KEYS,
    STORAGE_PREFIX,
    CookieOptions,
    default_cookie_options,
    secure_cookie_options,
)
from secure_storage.context import ClientContext, HeaderResponse, RequestContext
from secure_storage.crypto import EncryptionService
from secure_storage.exceptions import (
    AdapterNotReadyError,
    EnvelopeError,
    MissingContextError,
    PolicyConfigError,
    StorageError,
    StorageUnavailableError,
    StoreError,
    UnsupportedOperationError,
)
from secure_storage.factory import (
    Storage,
    create_balanced_storage,
    create_secure_storage,
    create_storage,
    create_storage_from_preset,
)
from secure_storage.policy import (
    BALANCED_POLICY,
    DISABLED_POLICY,
    SECURE_POLICY,
    EncryptionPolicy,
    KeyPatternMatcher,
)
from secure_storage.result import StorageResult

__all__ = [
    "BALANCED_POLICY",
    "COOKIE_KEYS",
    "DISABLED_POLICY",
    "LOCAL_STORAGE_KEYS",
    "SECURE_POLICY",
    "STORAGE_PREFIX",
    "AdapterNotReadyError",
    "ClientContext",
    "CookieAdapter",
    "CookieOptions",
    "EncryptionPolicy",
    "EncryptionService",
    "EnvelopeError",
    "HeaderResponse",
    "KeyPatternMatcher",
    "LocalStorageAdapter",
    "MissingContextError",
    "PolicyConfigError",
    "RequestContext",
    "Storage",
    "StorageAdapter",
    "StorageError",
    "StorageResult",
    "StorageUnavailableError",
    "StoreError",
    "UnsupportedOperationError",
    "create_balanced_storage",
    "create_secure_storage",
    "create_storage",
    "create_storage_from_preset",
    "default_cookie_options",
    "secure_cookie_options",
]
