"""Hand-rolled ``Cookie`` / ``Set-Cookie`` header codec.

Values are percent-encoded the way ``encodeURIComponent`` does it, so that
cookies written here decode identically in any browser-side reader.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from email.utils import format_datetime
from urllib.parse import quote, unquote

from secure_storage.config import CookieOptions

# Characters encodeURIComponent leaves alone, beyond letters, digits and "_.-~"
_URI_COMPONENT_SAFE = "!*'()"

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def encode_value(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def decode_value(value: str) -> str:
    return unquote(value)


def resolve_expires(expires: datetime | int, now: datetime) -> datetime:
    """Turn an ``expires`` option into an absolute UTC datetime."""
    if isinstance(expires, datetime):
        return expires.astimezone(UTC)
    return now + timedelta(seconds=expires)


def http_date(moment: datetime) -> str:
    """Format *moment* as an IMF-fixdate (``Thu, 01 Jan 1970 00:00:00 GMT``)."""
    return format_datetime(moment.astimezone(UTC), usegmt=True)


def format_attributes(options: CookieOptions, now: datetime) -> str:
    """Render the attribute part of a ``Set-Cookie`` header.

    Only configured attributes appear.  ``Expires`` wins over ``Max-Age``.
    """
    parts: list[str] = []

    if options.path:
        parts.append(f"Path={options.path}")

    if options.domain:
        parts.append(f"Domain={options.domain}")

    if options.expires is not None:
        parts.append(f"Expires={http_date(resolve_expires(options.expires, now))}")
    elif options.max_age is not None:
        parts.append(f"Max-Age={options.max_age}")

    if options.secure:
        parts.append("Secure")

    if options.http_only:
        parts.append("HttpOnly")

    if options.same_site:
        parts.append(f"SameSite={options.same_site.capitalize()}")

    return "; ".join(parts)


def format_set_cookie(name: str, value: str, options: CookieOptions, now: datetime) -> str:
    """Build one ``Set-Cookie`` header value.  *value* is encoded here."""
    head = f"{name}={encode_value(value)}"
    attributes = format_attributes(options, now)
    return f"{head}; {attributes}" if attributes else head


def parse_cookie_header(header: str | None) -> dict[str, str]:
    """Parse an inbound ``Cookie`` header into ``{name: decoded value}``.

    Pairs without ``=`` are skipped; the first occurrence of a name wins.
    Surrounding double quotes on a value are dropped.
    """
    cookies: dict[str, str] = {}
    if not header:
        return cookies

    for pair in header.split(";"):
        name, sep, value = pair.partition("=")
        if not sep:
            continue
        name = name.strip()
        if not name or name in cookies:
            continue
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] == '"':
            value = value[1:-1]
        cookies[name] = decode_value(value)
    return cookies
