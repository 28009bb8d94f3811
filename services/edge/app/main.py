"""
app.main
~~~~~~~~
Bulwark edge service - ASGI application entry point.

The edge service is the host for :class:`SecurityHeadersMiddleware`. The
middleware wraps the whole FastAPI application, outside Starlette's own
error middleware, so every response leaving the service carries the full
security header set, including the JSON 500 page, in addition to whatever
the route itself sets.

Start with::

    uvicorn app.main:app --host 0.0.0.0 --port 8080
"""

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from bulwark_core.headers import SECURITY_HEADERS, HeaderSet
from bulwark_core.logging import configure_logging
from bulwark_core.middleware import SecurityHeadersMiddleware
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import RequestResponseEndpoint

from app.config import Settings, settings

logger = logging.getLogger(__name__)


def create_app(
    config: Settings | None = None,
    header_set: HeaderSet = SECURITY_HEADERS,
) -> FastAPI:
    """Build the edge FastAPI application.

    The security header filter is not part of this stack; see
    :func:`create_asgi_app`. *header_set* is only reported at startup.
    """
    config = config or settings

    # -----------------------------------------------------------------------
    # Lifespan
    # -----------------------------------------------------------------------

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Edge service starting",
            extra={
                "service_name": config.SERVICE_NAME,
                "environment": config.BULWARK_ENV,
                "security_headers": list(header_set.names()),
            },
        )
        yield
        logger.info("Edge service shutting down")

    # -----------------------------------------------------------------------
    # Application
    # -----------------------------------------------------------------------

    expose_docs = config.BULWARK_ENV in ("local", "test", "dev")
    app = FastAPI(
        title="Bulwark Edge",
        description="Serves every response with a fixed set of security headers.",
        version="0.1.0",
        docs_url="/docs" if expose_docs else None,
        redoc_url="/redoc" if expose_docs else None,
        openapi_url="/openapi.json" if expose_docs else None,
        lifespan=lifespan,
    )

    # -----------------------------------------------------------------------
    # Middleware
    # -----------------------------------------------------------------------

    origins = [o.strip() for o in config.ALLOWED_ORIGINS.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_id_middleware(
        request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        logger.debug(
            "Request headers",
            extra={"request_id": request_id, "headers": request.headers.items()},
        )
        start = time.monotonic()

        response = await call_next(request)
        duration_ms = (time.monotonic() - start) * 1000

        response.headers["X-Request-ID"] = request_id
        logger.info(
            "Request",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )
        return response

    # -----------------------------------------------------------------------
    # Exception handlers
    # -----------------------------------------------------------------------

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        request_id = getattr(request.state, "request_id", "unknown")
        logger.error(
            "Unhandled exception",
            extra={"request_id": request_id, "error": str(exc)},
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred.",
                "request_id": request_id,
            },
        )

    # -----------------------------------------------------------------------
    # Routes
    # -----------------------------------------------------------------------

    @app.get("/healthz", tags=["ops"], summary="Health check")
    async def healthz() -> dict[str, str]:
        return {"status": "ok", "service": config.SERVICE_NAME}

    @app.get("/", include_in_schema=False)
    async def root() -> dict[str, str]:
        return {"service": config.SERVICE_NAME, "version": "0.1.0"}

    return app


def create_asgi_app(
    config: Settings | None = None,
    header_set: HeaderSet = SECURITY_HEADERS,
) -> SecurityHeadersMiddleware:
    """Wrap the edge application in the security header middleware.

    Registering the middleware with ``add_middleware`` would place it inside
    ``ServerErrorMiddleware``, and unhandled-exception responses would leave
    without the headers.
    """
    return SecurityHeadersMiddleware(
        create_app(config, header_set), header_set=header_set
    )


# Configure structured JSON logging before anything else writes to the log.
configure_logging(level=settings.LOG_LEVEL, service_name=settings.SERVICE_NAME)
app = create_asgi_app(settings)
