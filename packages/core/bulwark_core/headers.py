"""
bulwark_core.headers
~~~~~~~~~~~~~~~~~~~~
The immutable header set written onto every response, and the default
security header set.

A :class:`HeaderSet` is built once at process start and shared read-only
by every request. Construction validates each pair so nothing written to
the wire later can split a header or smuggle a second one::

    from bulwark_core.headers import HeaderSet

    headers = HeaderSet.from_pairs([("X-Frame-Options", "DENY")])
    headers.get("x-frame-options")  # "DENY"
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, field_validator

from bulwark_core.errors import DuplicateHeaderError, InvalidHeaderError

# RFC 9110 section 5.6.2 token characters.
_TOKEN_RE = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")

# Visible ASCII plus SP and HTAB. Excludes CR, LF and NUL.
_FIELD_VALUE_RE = re.compile(r"[\t\x20-\x7e]*")


class HeaderSet(BaseModel):
    """Ordered, validated ``(name, value)`` pairs.

    Names are unique case-insensitively and values carry no line
    terminators. Validation failures raise :exc:`InvalidHeaderError` or
    :exc:`DuplicateHeaderError` directly.
    """

    model_config = ConfigDict(frozen=True)

    entries: tuple[tuple[str, str], ...] = ()

    @field_validator("entries")
    @classmethod
    def _check_entries(
        cls, entries: tuple[tuple[str, str], ...]
    ) -> tuple[tuple[str, str], ...]:
        seen: set[str] = set()
        for name, value in entries:
            if not _TOKEN_RE.fullmatch(name):
                raise InvalidHeaderError(
                    f"Invalid header name: {name!r}", name=name
                )
            if not _FIELD_VALUE_RE.fullmatch(value):
                raise InvalidHeaderError(
                    f"Invalid value for header {name!r}: {value!r}",
                    name=name,
                    value=value,
                )
            key = name.lower()
            if key in seen:
                raise DuplicateHeaderError(
                    f"Header {name!r} appears more than once", name=name
                )
            seen.add(key)
        return entries

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]]) -> HeaderSet:
        """Build a header set from any iterable of ``(name, value)`` pairs."""
        return cls(entries=tuple((name, value) for name, value in pairs))

    def items(self) -> tuple[tuple[str, str], ...]:
        return self.entries

    def names(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self.entries)

    def get(self, name: str, default: str | None = None) -> str | None:
        """Return the value for *name*, compared case-insensitively."""
        key = name.lower()
        for header_name, value in self.entries:
            if header_name.lower() == key:
                return value
        return default

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        return self.get(name) is not None


SECURITY_HEADERS: HeaderSet = HeaderSet.from_pairs(
    [
        ("X-Content-Type-Options", "nosniff"),
        ("X-Frame-Options", "DENY"),
        ("X-XSS-Protection", "1; mode=block"),
        ("Strict-Transport-Security", "max-age=31536000; includeSubDomains"),
        ("Referrer-Policy", "strict-origin-when-cross-origin"),
        ("Permissions-Policy", "camera=(), microphone=(), geolocation=()"),
        (
            "Content-Security-Policy",
            "default-src 'self'; script-src 'self'; "
            "style-src 'self' 'unsafe-inline'; img-src 'self' data:; "
            "font-src 'self'; connect-src 'self'; frame-ancestors 'none'",
        ),
    ]
)
