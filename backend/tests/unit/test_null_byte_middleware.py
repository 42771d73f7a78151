"""Tests for NullByteMiddleware.

PostgreSQL rejects NUL characters in text and JSONB values. The middleware
removes them from JSON request bodies before any handler parses them.
"""

from collections.abc import AsyncGenerator

import pytest
from fastapi import FastAPI, Request
from httpx import ASGITransport, AsyncClient

from profile_wizard.core.null_byte_middleware import NullByteMiddleware


@pytest.fixture
def app() -> FastAPI:
    """Minimal app echoing the parsed JSON body."""
    app = FastAPI()
    app.add_middleware(NullByteMiddleware)

    @app.post("/echo")
    async def echo(request: Request) -> dict:
        return {"body": await request.json()}

    @app.post("/raw")
    async def raw(request: Request) -> dict:
        return {"length": len(await request.body())}

    return app


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for testing."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


class TestJsonBodies:
    """NUL characters are stripped from every string in a JSON body."""

    async def test_strips_from_values(self, client: AsyncClient) -> None:
        """Top-level string values are cleaned."""
        response = await client.post("/echo", json={"firstName": "Ja\x00ne"})

        assert response.json() == {"body": {"firstName": "Jane"}}

    async def test_strips_from_nested_values_and_keys(self, client: AsyncClient) -> None:
        """Nested lists, objects and keys are cleaned."""
        payload = {"skills": [{"na\x00me": "G\x00o"}], "interests": ["\x00Chess"]}

        response = await client.post("/echo", json=payload)

        assert response.json() == {
            "body": {"skills": [{"name": "Go"}], "interests": ["Chess"]}
        }

    async def test_clean_body_unchanged(self, client: AsyncClient) -> None:
        """Bodies without NULs pass through untouched."""
        payload = {"firstName": "Jane", "skills": []}

        response = await client.post("/echo", json=payload)

        assert response.json() == {"body": payload}

    async def test_invalid_json_passed_through(self, client: AsyncClient) -> None:
        """Unparseable bodies are forwarded as-is for the endpoint to reject."""
        body = b'{"firstName": "Ja\\u0000ne"'

        response = await client.post(
            "/raw", content=body, headers={"Content-Type": "application/json"}
        )

        assert response.json() == {"length": len(body)}


class TestOtherRequests:
    """Non-JSON requests are not touched."""

    async def test_non_json_body_unchanged(self, client: AsyncClient) -> None:
        """Plain-text bodies keep their NUL bytes."""
        response = await client.post(
            "/raw", content=b"a\x00b", headers={"Content-Type": "text/plain"}
        )

        assert response.json() == {"length": 3}
