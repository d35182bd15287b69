"""Tests for RequestBodyLimitMiddleware."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from taglit.api.app import create_app
from taglit.api.deps import init_session_manager, reset_session_manager
from taglit.service.session_manager import SessionManager
from taglit.settings import Settings


@pytest.fixture
def app():
    settings = Settings(_env_file=None, session_ttl_seconds=3600, session_cleanup_interval=9999)
    application = create_app(settings=settings)
    mgr = SessionManager(
        ttl_seconds=settings.session_ttl_seconds,
        cleanup_interval=settings.session_cleanup_interval,
    )
    init_session_manager(mgr)
    yield application
    reset_session_manager()


@pytest.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


class TestInvalidContentLength:
    """Non-integer Content-Length falls through to streaming."""

    async def test_non_integer_content_length(self, client: AsyncClient) -> None:
        response = await client.post(
            "/health",
            content=b"small body",
            headers={"content-length": "not-a-number"},
        )
        assert response.status_code != 500

    async def test_negative_content_length(self, client: AsyncClient) -> None:
        response = await client.post(
            "/health",
            content=b"small body",
            headers={"content-length": "-1"},
        )
        assert response.status_code != 500


class TestLimits:
    async def test_declared_length_over_default_limit(self, client: AsyncClient) -> None:
        response = await client.post(
            "/sessions",
            content=b"{}",
            headers={"content-length": str(2 * 1024 * 1024)},
        )
        assert response.status_code == 413
        assert "max 1 MB" in response.json()["detail"]

    async def test_chunked_body_over_default_limit(self, client: AsyncClient) -> None:
        oversized = b"x" * (1 * 1024 * 1024 + 1)
        response = await client.post(
            "/sessions",
            content=oversized,
            headers={"transfer-encoding": "chunked"},
        )
        assert response.status_code == 413
        assert "too large" in response.json()["detail"]

    async def test_analyze_accepts_large_documents(self, client: AsyncClient) -> None:
        text = "const v = html`<p></p>`;\n" + "// filler\n" * 200_000
        response = await client.post("/analyze/diagnostics", json={"text": text})
        assert response.status_code == 200
        assert response.json()["valid"] is True

    async def test_analyze_over_document_limit(self, client: AsyncClient) -> None:
        oversized = b"x" * (5 * 1024 * 1024 + 1)
        response = await client.post(
            "/analyze/diagnostics",
            content=oversized,
            headers={"transfer-encoding": "chunked"},
        )
        assert response.status_code == 413
        assert "max 5 MB" in response.json()["detail"]
