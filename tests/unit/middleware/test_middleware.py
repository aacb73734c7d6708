"""Unit tests for middleware."""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from api.middleware.logging import RequestLoggingMiddleware
from api.middleware.request_id import MAX_REQUEST_ID_LENGTH, RequestIDMiddleware
from api.middleware.security import SECURITY_HEADERS, SecurityHeadersMiddleware


def _create_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/ping")
    async def _():
        return {"ok": True}

    return app


@pytest.fixture
async def client():
    transport = ASGITransport(app=_create_app())
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


class TestSecurityHeadersMiddleware:
    @pytest.mark.asyncio
    async def test_adds_security_headers(self, client: AsyncClient):
        response = await client.get("/ping")

        for name, value in SECURITY_HEADERS.items():
            assert response.headers[name] == value


class TestRequestIDMiddleware:
    @pytest.mark.asyncio
    async def test_generates_distinct_ids(self, client: AsyncClient):
        r1 = await client.get("/ping")
        r2 = await client.get("/ping")

        assert r1.headers["x-request-id"]
        assert r1.headers["x-request-id"] != r2.headers["x-request-id"]

    @pytest.mark.asyncio
    async def test_propagates_client_id(self, client: AsyncClient):
        response = await client.get("/ping", headers={"X-Request-ID": "lecture-7"})

        assert response.headers["x-request-id"] == "lecture-7"

    @pytest.mark.asyncio
    async def test_replaces_oversized_id(self, client: AsyncClient):
        too_long = "x" * (MAX_REQUEST_ID_LENGTH + 1)

        response = await client.get("/ping", headers={"X-Request-ID": too_long})

        assert response.headers["x-request-id"] != too_long
        assert len(response.headers["x-request-id"]) <= MAX_REQUEST_ID_LENGTH


class TestRequestLoggingMiddleware:
    @pytest.mark.asyncio
    async def test_passes_response_through(self, client: AsyncClient):
        response = await client.get("/ping")

        assert response.status_code == 200
        assert response.json() == {"ok": True}
