"""
bulwark_core.middleware
~~~~~~~~~~~~~~~~~~~~~~~
Response filter that appends a fixed header set to every HTTP response.

HeaderInjectionMiddleware
    Framework-neutral filter. ``apply(request, response, call_next)``
    appends each header in its :class:`HeaderSet` to ``response.headers``
    and hands control to ``call_next``, returning whatever it returns.

SecurityHeadersMiddleware
    Raw ASGI adapter that runs a filter on the ``http.response.start``
    message of every HTTP response. Register it like any Starlette
    middleware::

        app.add_middleware(SecurityHeadersMiddleware)

Headers are appended, never replaced: if an earlier stage already set
``Referrer-Policy`` the response carries both values.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol, TypeVar

from starlette.datastructures import MutableHeaders
from starlette.requests import Request
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from bulwark_core.headers import SECURITY_HEADERS, HeaderSet

T = TypeVar("T")

CallNext = Callable[[Any, Any], T]


class ResponseFilter(Protocol):
    """A pipeline stage that may touch the response before passing it on."""

    def apply(self, request: Any, response: Any, call_next: CallNext[T]) -> T:
        ...


class HeaderInjectionMiddleware:
    """Append a static header set to a response, then continue the pipeline."""

    def __init__(self, header_set: HeaderSet | None = None) -> None:
        self.header_set = SECURITY_HEADERS if header_set is None else header_set

    def apply(self, request: Any, response: Any, call_next: CallNext[T]) -> T:
        """Add every header to *response* and return ``call_next``'s result.

        The request is not inspected. ``call_next`` is invoked exactly once;
        if it returns an awaitable, the caller awaits it.
        """
        headers = response.headers
        for name, value in self.header_set.items():
            headers.append(name, value)
        return call_next(request, response)


class _ResponseStart:
    """Header view over an ASGI ``http.response.start`` message."""

    __slots__ = ("message", "headers")

    def __init__(self, message: Message) -> None:
        message.setdefault("headers", [])
        self.message = message
        self.headers = MutableHeaders(scope=message)

    @property
    def status_code(self) -> int:
        return self.message["status"]


class SecurityHeadersMiddleware:
    """ASGI middleware running a :class:`ResponseFilter` on every HTTP response.

    Args:
        app: The downstream ASGI application.
        header_set: Headers for the default filter. Defaults to
            :data:`SECURITY_HEADERS`.
        response_filter: A filter to run instead of the default one.
    """

    def __init__(
        self,
        app: ASGIApp,
        header_set: HeaderSet | None = None,
        response_filter: ResponseFilter | None = None,
    ) -> None:
        self.app = app
        self.response_filter: ResponseFilter = (
            response_filter
            if response_filter is not None
            else HeaderInjectionMiddleware(header_set)
        )

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive)

        async def send_wrapper(message: Message) -> None:
            if message["type"] != "http.response.start":
                await send(message)
                return
            response = _ResponseStart(message)
            await self.response_filter.apply(
                request, response, lambda _request, start: send(start.message)
            )

        await self.app(scope, receive, send_wrapper)
