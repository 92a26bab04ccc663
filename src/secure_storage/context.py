"""Execution contexts — what a storage instance runs against.

* :class:`ClientContext` — an interactive session: a client-side cookie jar
  plus a device-local store.  Its presence selects interactive mode.
* :class:`RequestContext` — one inbound server request: its ``Cookie``
  header plus a response able to accumulate ``Set-Cookie`` headers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

import httpx

from secure_storage._internal.cookie_header import parse_cookie_header
from secure_storage.stores.base import LocalStore
from secure_storage.stores.memory import InMemoryLocalStore

HeaderValue = str | list[str]


class CookieResponse(Protocol):
    """Outbound response handle used by server-mode cookie writes."""

    def get_header(self, name: str) -> HeaderValue | None: ...

    def set_header(self, name: str, value: HeaderValue) -> None: ...


class HeaderResponse:
    """Minimal :class:`CookieResponse` keeping headers in a dict.

    Header names are case-insensitive.
    """

    def __init__(self) -> None:
        self._headers: dict[str, HeaderValue] = {}

    def get_header(self, name: str) -> HeaderValue | None:
        return self._headers.get(name.lower())

    def set_header(self, name: str, value: HeaderValue) -> None:
        self._headers[name.lower()] = value

    def header_list(self, name: str) -> list[str]:
        """Return a header as a list, whatever shape it was stored in."""
        value = self.get_header(name)
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return list(value)

    @property
    def set_cookie_headers(self) -> list[str]:
        return self.header_list("Set-Cookie")


@dataclass
class RequestContext:
    """Server-side handle for one inbound request.

    Attributes:
        cookie_header: Raw inbound ``Cookie`` header (``None`` if absent).
        response:      Outbound response.  Required for writes and removals.
    """

    cookie_header: str | None = None
    response: CookieResponse | None = None

    def request_cookies(self) -> dict[str, str]:
        return parse_cookie_header(self.cookie_header)


@dataclass
class ClientContext:
    """Interactive-session handle.

    Attributes:
        cookies:     Cookie jar visible to the session.  ``None`` models a
                     jar that is not ready yet.
        local_store: Device-local store for the session's origin.
        domain:      Host the session runs on; default cookie domain.
    """

    cookies: httpx.Cookies | None = field(default_factory=httpx.Cookies)
    local_store: LocalStore | None = field(default_factory=InMemoryLocalStore)
    domain: str = ""
