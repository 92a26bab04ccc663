"""Cipher ABC — one envelope contract, interchangeable backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar


class Cipher(ABC):
    """Turns a plaintext string into a single base64 envelope and back.

    Implementations are selected once, when the owning
    :class:`~secure_storage.crypto.service.EncryptionService` is built.
    Both methods may raise; the service decides how to degrade.
    """

    name: ClassVar[str] = "base"

    @property
    def secure(self) -> bool:
        """``True`` when envelopes are actually confidential."""
        return False

    @abstractmethod
    async def seal(self, plaintext: str) -> str:
        """Return the base64 envelope for *plaintext*."""
        ...

    @abstractmethod
    async def open(self, envelope: str) -> str:
        """Return the plaintext wrapped in *envelope*."""
        ...
