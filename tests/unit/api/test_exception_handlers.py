"""Unit tests for exception handlers."""

import json
from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from api.exception_handlers import setup_exception_handlers
from core.exceptions import GroupFullError, InvalidJoinCodeError, JoinCodeExhaustedError


def _create_test_app() -> FastAPI:
    app = FastAPI()
    setup_exception_handlers(app)
    return app


async def _get(app: FastAPI, path: str):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        return await c.get(path)


class TestExceptionHandlers:
    @pytest.mark.asyncio
    async def test_app_exception_returns_error_body(self) -> None:
        app = _create_test_app()

        @app.get("/full")
        async def _() -> None:
            raise GroupFullError(4)

        response = await _get(app, "/full")

        assert response.status_code == 409
        body = response.json()
        assert body["error"] == "This group is full"
        assert body["message"] == "This group is full"
        assert body["error_code"] == "GROUP_FULL"
        assert body["details"]["max_size"] == 4

    @pytest.mark.asyncio
    async def test_not_found_exception_keeps_status(self) -> None:
        app = _create_test_app()

        @app.get("/code")
        async def _() -> None:
            raise InvalidJoinCodeError("ZZZZZZ")

        response = await _get(app, "/code")

        assert response.status_code == 404
        assert response.json()["error"] == "Invalid join code"

    @pytest.mark.asyncio
    async def test_server_side_app_exception(self) -> None:
        app = _create_test_app()

        @app.get("/exhausted")
        async def _() -> None:
            raise JoinCodeExhaustedError(10)

        response = await _get(app, "/exhausted")

        assert response.status_code == 500
        assert response.json()["error_code"] == "JOIN_CODE_EXHAUSTED"

    @pytest.mark.asyncio
    async def test_http_exception_returns_standard_format(self) -> None:
        from starlette.exceptions import HTTPException

        app = _create_test_app()

        @app.get("/gone")
        async def _() -> None:
            raise HTTPException(status_code=405, detail="Method Not Allowed")

        response = await _get(app, "/gone")

        assert response.status_code == 405
        body = response.json()
        assert body["error_code"] == "HTTP_ERROR"
        assert body["error"] == "Method Not Allowed"

    @pytest.mark.asyncio
    async def test_validation_error_returns_400_with_field_details(self) -> None:
        from pydantic import BaseModel, Field

        app = _create_test_app()

        class Body(BaseModel):
            user_id: str = Field(..., min_length=1)

        @app.post("/validate")
        async def _(body: Body) -> dict[str, bool]:
            return {"ok": True}

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            response = await c.post("/validate", json={})

        assert response.status_code == 400
        body = response.json()
        assert body["error_code"] == "VALIDATION_ERROR"
        assert body["error"] == "Request validation failed"
        assert body["details"][0]["field"] == "body.user_id"

    @pytest.mark.asyncio
    async def test_unhandled_exception_returns_500(self) -> None:
        app = _create_test_app()

        mock_request = MagicMock()
        mock_request.state.request_id = "req-42"

        handler = app.exception_handlers.get(Exception)
        assert handler is not None, "Global exception handler not registered"

        response = await handler(mock_request, RuntimeError("boom"))  # type: ignore[misc]

        assert response.status_code == 500
        body = json.loads(response.body)
        assert body["error_code"] == "INTERNAL_ERROR"
        assert body["details"]["request_id"] == "req-42"
