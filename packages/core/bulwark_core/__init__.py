"""
bulwark_core
~~~~~~~~~~~~
Security response headers for ASGI services.

Public surface
--------------
All public symbols are exported from the top-level namespace::

    from bulwark_core import SECURITY_HEADERS, SecurityHeadersMiddleware

    app.add_middleware(SecurityHeadersMiddleware, header_set=SECURITY_HEADERS)

Sub-module summary
------------------
:mod:`bulwark_core.headers`
    :class:`HeaderSet` and the default :data:`SECURITY_HEADERS`.

:mod:`bulwark_core.middleware`
    :class:`HeaderInjectionMiddleware` (the framework-neutral filter) and
    :class:`SecurityHeadersMiddleware` (its ASGI adapter).

:mod:`bulwark_core.errors`
    Exception hierarchy rooted at :exc:`BulwarkError`.

:mod:`bulwark_core.logging`
    JSON logging setup for host services.
"""

from __future__ import annotations

# --- Exceptions -------------------------------------------------------------
from bulwark_core.errors import BulwarkError, DuplicateHeaderError, InvalidHeaderError

# --- Header sets ------------------------------------------------------------
from bulwark_core.headers import SECURITY_HEADERS, HeaderSet

# --- Logging ----------------------------------------------------------------
from bulwark_core.logging import SENSITIVE_KEYS, JsonFormatter, configure_logging

# --- Middleware -------------------------------------------------------------
from bulwark_core.middleware import (
    HeaderInjectionMiddleware,
    ResponseFilter,
    SecurityHeadersMiddleware,
)

__all__: list[str] = [
    # Errors
    "BulwarkError",
    "DuplicateHeaderError",
    "InvalidHeaderError",
    # Header sets
    "HeaderSet",
    "SECURITY_HEADERS",
    # Middleware
    "HeaderInjectionMiddleware",
    "ResponseFilter",
    "SecurityHeadersMiddleware",
    # Logging
    "configure_logging",
    "JsonFormatter",
    "SENSITIVE_KEYS",
]

__version__: str = "0.1.0"
