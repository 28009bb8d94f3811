"""
bulwark_core.errors
~~~~~~~~~~~~~~~~~~~
Custom exception hierarchy for Bulwark.

All Bulwark exceptions inherit from BulwarkError so callers can catch the
full family with a single ``except BulwarkError`` clause. They are raised
only while a header set is being built at startup; the request path defines
no errors of its own.
"""

from __future__ import annotations


class BulwarkError(Exception):
    """Base class for all Bulwark exceptions."""


class InvalidHeaderError(BulwarkError):
    """Raised when a header name or value cannot be written safely.

    Attributes:
        name: The offending header name.
        value: The offending value, or None when the name itself is invalid.
    """

    def __init__(
        self,
        message: str,
        *,
        name: str = "",
        value: str | None = None,
    ) -> None:
        super().__init__(message)
        self.name = name
        self.value = value


class DuplicateHeaderError(BulwarkError):
    """Raised when a header set names the same header twice.

    Names are compared case-insensitively.

    Attributes:
        name: The repeated header name, as given the second time.
    """

    def __init__(self, message: str, *, name: str = "") -> None:
        super().__init__(message)
        self.name = name
