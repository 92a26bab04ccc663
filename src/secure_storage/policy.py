"""EncryptionPolicy — decides whether, and how expensively, a key is encrypted."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field, fields, replace
from typing import Any

from secure_storage.exceptions import PolicyConfigError

KeyPredicate = Callable[[str], bool]

DEFAULT_SENSITIVE_PATTERNS = ("token", "password", "secret", "auth", "user", "email", "profile")
BALANCED_SENSITIVE_PATTERNS = ("token", "password", "secret", "auth", "user", "email", "credit")


class KeyPatternMatcher:
    """Predicate matching keys that contain any of *patterns* (case-insensitive)."""

    def __init__(self, patterns: tuple[str, ...] | list[str]) -> None:
        self.patterns = tuple(p.lower() for p in patterns)

    def __call__(self, key: str) -> bool:
        lowered = key.lower()
        return any(pattern in lowered for pattern in self.patterns)

    def __repr__(self) -> str:
        return f"KeyPatternMatcher({list(self.patterns)!r})"


def encrypt_every_key(key: str) -> bool:
    return True


@dataclass(frozen=True)
class EncryptionPolicy:
    """Pure configuration consumed by the adapter pipeline.

    Attributes:
        enabled:            Master switch.  When ``False`` the predicate is
                            never consulted.
        iterations:         PBKDF2 iteration count.
        should_encrypt_key: Predicate selecting the keys to encrypt.  ``None``
                            encrypts every key.
        cache_decrypted:    Keep decoded values in the per-adapter cache.
        passphrase:         Key-derivation secret; ``None`` defers to the
                            environment.
        cache_max_entries:  LRU bound of the decoded-value cache; ``None``
                            leaves it unbounded.
    """

    enabled: bool = False
    iterations: int = 10_000
    should_encrypt_key: KeyPredicate | None = field(
        default_factory=lambda: KeyPatternMatcher(DEFAULT_SENSITIVE_PATTERNS)
    )
    cache_decrypted: bool = True
    passphrase: str | None = field(default=None, repr=False)
    cache_max_entries: int | None = 256

    def __post_init__(self) -> None:
        if self.iterations < 1:
            raise PolicyConfigError("iterations must be a positive integer")
        if self.cache_max_entries is not None and self.cache_max_entries < 1:
            raise PolicyConfigError("cache_max_entries must be positive or None")

    def should_encrypt(self, key: str, force: bool | None = None) -> bool:
        """Return ``True`` if the value stored under *key* must be encrypted.

        A non-``None`` *force* wins outright, regardless of ``enabled`` or
        the predicate.
        """
        if force is not None:
            return force
        if not self.enabled:
            return False
        if self.should_encrypt_key is None:
            return True
        return bool(self.should_encrypt_key(key))

    def with_overrides(self, **overrides: Any) -> EncryptionPolicy:
        """Return a copy with *overrides* applied."""
        known = {f.name for f in fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise PolicyConfigError(f"unknown policy field(s): {', '.join(unknown)}")
        return replace(self, **overrides)

    def export(self) -> dict[str, Any]:
        """Return a JSON-serializable snapshot.  The passphrase is never included."""
        predicate = self.should_encrypt_key
        if predicate is None or predicate is encrypt_every_key:
            selector: dict[str, Any] = {"type": "all"}
        elif isinstance(predicate, KeyPatternMatcher):
            selector = {"type": "patterns", "patterns": list(predicate.patterns)}
        else:
            selector = {"type": "custom"}
        return {
            "enabled": self.enabled,
            "iterations": self.iterations,
            "keys": selector,
            "cache_decrypted": self.cache_decrypted,
            "cache_max_entries": self.cache_max_entries,
            "has_passphrase": self.passphrase is not None,
        }


DISABLED_POLICY = EncryptionPolicy()

SECURE_POLICY = EncryptionPolicy(
    enabled=True,
    iterations=100_000,
    should_encrypt_key=encrypt_every_key,
)

BALANCED_POLICY = EncryptionPolicy(
    enabled=True,
    iterations=10_000,
    should_encrypt_key=KeyPatternMatcher(BALANCED_SENSITIVE_PATTERNS),
)

PRESETS = {
    "disabled": DISABLED_POLICY,
    "secure": SECURE_POLICY,
    "balanced": BALANCED_POLICY,
}
