"""Base64Cipher — encoding-only stand-in used when AEAD is unavailable."""

from __future__ import annotations

import base64

from secure_storage.crypto.base import Cipher


def b64encode_text(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def b64decode_text(encoded: str) -> str:
    """Strictly decode base64 into UTF-8 text.

    Raises:
        binascii.Error: *encoded* is not valid base64.
        UnicodeDecodeError: the decoded bytes are not UTF-8.
    """
    return base64.b64decode(encoded, validate=True).decode("utf-8")


class Base64Cipher(Cipher):
    """Plain base64.  Provides no confidentiality whatsoever."""

    name = "base64"

    async def seal(self, plaintext: str) -> str:
        return b64encode_text(plaintext)

    async def open(self, envelope: str) -> str:
        return b64decode_text(envelope)
