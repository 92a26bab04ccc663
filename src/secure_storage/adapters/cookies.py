"""CookieAdapter — cookie storage for interactive sessions and server requests."""

from __future__ import annotations

from dataclasses import replace
from http.cookiejar import Cookie
from typing import TYPE_CHECKING, Any

from secure_storage._internal.clock import Clock, SystemClock
from secure_storage._internal.cookie_header import (
    EPOCH,
    decode_value,
    encode_value,
    format_set_cookie,
    resolve_expires,
)
from secure_storage.adapters.base import BaseStorageAdapter, OptionsArg
from secure_storage.config import CookieOptions, default_cookie_options
from secure_storage.context import ClientContext, CookieResponse, RequestContext
from secure_storage.exceptions import (
    AdapterNotReadyError,
    MissingContextError,
    UnsupportedOperationError,
)

if TYPE_CHECKING:
    import httpx

    from secure_storage.crypto.service import EncryptionService
    from secure_storage.policy import EncryptionPolicy

SET_COOKIE = "Set-Cookie"


class CookieAdapter(BaseStorageAdapter):
    """Cookie-backed storage with two mutually exclusive execution modes.

    * **Interactive** — *context* is a :class:`ClientContext`.  Cookies are
      read from and written to its jar; removal is a write with an expiry in
      the past.
    * **Server** — *context* is a :class:`RequestContext` (or missing).
      Reads parse the inbound ``Cookie`` header; writes and removals append
      hand-formatted ``Set-Cookie`` headers to the response.  ``clear`` is
      not supported.

    Parameters:
        context:    Execution context selecting the mode.
        policy:     Encryption policy.
        encryption: Explicit encryption service (mostly for tests).
        clock:      Injectable clock used for expiry computation.
    """

    def __init__(
        self,
        context: ClientContext | RequestContext | None = None,
        policy: EncryptionPolicy | None = None,
        encryption: EncryptionService | None = None,
        clock: Clock | None = None,
    ) -> None:
        super().__init__(policy, encryption)
        self.context = context
        self._clock = clock or SystemClock()

    @property
    def interactive(self) -> bool:
        return isinstance(self.context, ClientContext)

    # ── hooks ────────────────────────────────────────────────

    async def _get(self, key: str) -> Any:
        if self.interactive:
            raw = self._read_client_cookie(key)
        else:
            raw = self._request().request_cookies().get(key)

        if raw is None:
            return None
        return await self.process_from_storage(key, raw)

    async def _set(
        self, key: str, value: Any, options: OptionsArg, force_encrypt: bool | None
    ) -> None:
        merged = default_cookie_options().merge(options)

        if self.interactive:
            self._jar()
            processed = await self.process_for_storage(key, value, force_encrypt)
            self._write_client_cookie(key, processed, merged)
        else:
            response = self._response("setting")
            processed = await self.process_for_storage(key, value, force_encrypt)
            self._append_set_cookie(response, key, processed, merged)

        self.remember(key, value)

    async def _remove(self, key: str, options: OptionsArg) -> None:
        expired = replace(default_cookie_options().merge(options), expires=EPOCH, max_age=None)
        self.forget(key)

        if self.interactive:
            jar = self._jar()
            self._write_client_cookie(key, "", expired)
            jar.jar.clear_expired_cookies()
        else:
            self._append_set_cookie(self._response("removal"), key, "", expired)

    async def _clear(self) -> None:
        if not self.interactive:
            raise UnsupportedOperationError("clear", "server")

        # Entries are keyed by (domain, path, name); each goes under its own key
        jar = self._jar().jar
        for cookie in list(jar):
            self.forget(cookie.name)
            jar.clear(cookie.domain, cookie.path, cookie.name)

        self.clear_cache()

    # ── interactive mode ─────────────────────────────────────

    def _client(self) -> ClientContext:
        if not isinstance(self.context, ClientContext):
            raise MissingContextError("Client context required for interactive cookie access")
        return self.context

    def _jar(self) -> httpx.Cookies:
        cookies = self._client().cookies
        if cookies is None:
            raise AdapterNotReadyError("Cookie jar is not available yet")
        return cookies

    def _read_client_cookie(self, name: str) -> str | None:
        now = int(self._clock.now().timestamp())
        for cookie in self._jar().jar:
            if cookie.name == name and cookie.value is not None and not cookie.is_expired(now):
                return decode_value(cookie.value)
        return None

    def _write_client_cookie(self, name: str, value: str, options: CookieOptions) -> None:
        now = self._clock.now()
        expires: int | None = None
        if options.expires is not None:
            expires = int(resolve_expires(options.expires, now).timestamp())
        elif options.max_age is not None:
            expires = int(now.timestamp()) + options.max_age

        domain = options.domain or self._client().domain
        rest: dict[str, Any] = {}
        if options.http_only:
            rest["HttpOnly"] = None
        if options.same_site:
            rest["SameSite"] = options.same_site.capitalize()

        cookie = Cookie(
            version=0,
            name=name,
            value=encode_value(value),
            port=None,
            port_specified=False,
            domain=domain,
            domain_specified=bool(domain),
            domain_initial_dot=domain.startswith("."),
            path=options.path or "/",
            path_specified=True,
            secure=bool(options.secure),
            expires=expires,
            discard=expires is None,
            comment=None,
            comment_url=None,
            rest=rest,
        )
        self._jar().jar.set_cookie(cookie)

    # ── server mode ──────────────────────────────────────────

    def _request(self) -> RequestContext:
        if not isinstance(self.context, RequestContext):
            raise MissingContextError("Request context required for server-side cookie access")
        return self.context

    def _response(self, action: str) -> CookieResponse:
        response = self._request().response
        if response is None:
            raise MissingContextError(f"Response object required for server-side cookie {action}")
        return response

    def _append_set_cookie(
        self, response: CookieResponse, name: str, value: str, options: CookieOptions
    ) -> None:
        header = format_set_cookie(name, value, options, self._clock.now())

        existing = response.get_header(SET_COOKIE)
        if not existing:
            headers: list[str] = []
        elif isinstance(existing, str):
            headers = [existing]
        else:
            headers = list(existing)

        response.set_header(SET_COOKIE, [*headers, header])
