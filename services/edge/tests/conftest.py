"""
Pytest fixtures for edge service tests.

Provides a TestClient against a freshly built application.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest

# Ensure the edge service root is on sys.path so 'from app.xxx'
# resolves to this service's app package.
_service_root = str(Path(__file__).resolve().parent.parent)
if _service_root not in sys.path:
    sys.path.insert(0, _service_root)

os.environ["BULWARK_ENV"] = "test"


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def edge_app() -> Any:
    """The served ASGI application, header middleware outermost."""
    from app.config import Settings
    from app.main import create_asgi_app

    return create_asgi_app(Settings())


@pytest.fixture
def edge_api(edge_app: Any) -> Any:
    """The FastAPI application inside *edge_app*, for registering extra routes."""
    return edge_app.app


@pytest.fixture
def test_client(edge_app: Any) -> Iterator[Any]:
    """Create a TestClient for the edge service."""
    from fastapi.testclient import TestClient

    with TestClient(edge_app) as client:
        yield client
