"""ASGI middleware that removes NUL characters from JSON request bodies.

PostgreSQL text and JSONB columns reject ``\\u0000``, but JSON allows it and
pydantic's str validation passes it through. A submitted profile containing
it would fail at insert time with a driver error. Stripping it at the
transport level keeps such input an ordinary (validated) string instead.

Only ``application/json`` bodies are rewritten. Bodies that do not parse,
exceed the size cap or nest too deeply are forwarded untouched and left to
the endpoint's own error handling.
"""

from __future__ import annotations

import json
from typing import Any

from starlette.types import ASGIApp, Message, Receive, Scope, Send

_JSON_CONTENT_TYPE = b"application/json"

_MAX_JSON_BODY_SIZE = 1024 * 1024
"""Largest body (bytes) that is parsed for sanitization."""

_MAX_NESTING_DEPTH = 32


class NullByteMiddleware:
    """Strip ``\\x00`` from every string and key in a JSON request body."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or not _is_json_request(scope):
            await self.app(scope, receive, send)
            return

        body = await _read_body(receive)
        if len(body) <= _MAX_JSON_BODY_SIZE:
            body = _sanitize_json(body)
        replayed = False

        async def replay() -> Message:
            nonlocal replayed
            if replayed:
                return await receive()
            replayed = True
            return {"type": "http.request", "body": body, "more_body": False}

        await self.app(scope, replay, send)


async def _read_body(receive: Receive) -> bytes:
    """Buffer the complete request body from the ASGI receive channel."""
    chunks: list[bytes] = []
    while True:
        message = await receive()
        chunks.append(message.get("body", b""))
        if not message.get("more_body", False):
            return b"".join(chunks)


def _is_json_request(scope: Scope) -> bool:
    for name, value in scope.get("headers", []):
        if name.lower() == b"content-type":
            return bool(value.startswith(_JSON_CONTENT_TYPE))
    return False


def _sanitize_json(body: bytes) -> bytes:
    """Return ``body`` with NULs removed, or unchanged if it cannot be handled."""
    if b"\\u0000" not in body and b"\x00" not in body:
        return body
    try:
        data = json.loads(body)
        cleaned = _strip(data, 0)
        return json.dumps(cleaned, ensure_ascii=False).encode("utf-8")
    except (ValueError, RecursionError):
        return body


def _strip(value: Any, depth: int) -> Any:
    """Recursively strip NULs. Any: JSON values have no common base type."""
    if depth > _MAX_NESTING_DEPTH:
        return value
    if isinstance(value, str):
        return value.replace("\x00", "")
    if isinstance(value, dict):
        return {
            _strip(key, depth): _strip(item, depth + 1) for key, item in value.items()
        }
    if isinstance(value, list):
        return [_strip(item, depth + 1) for item in value]
    return value
