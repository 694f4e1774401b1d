# seriesgate/middleware/request_id.py
from __future__ import annotations

"""
# SeriesGate — Request ID Middleware (pure ASGI)

- Reuses a client-supplied `X-Request-ID` / `X-Correlation-ID` when it is a UUIDv4.
- Generates a UUIDv4 otherwise.
- Stores it in `request.state.request_id` and echoes it on the response.
- Binds `request_id` into the **loguru** context for the whole request.

## Env
- `REQUEST_ID_HEADER_NAME` (default: `X-Request-ID`)
- `REQUEST_ID_TRUST_CLIENT_IDS` ("true"/"false"; default: "true")
"""

import os
import uuid

from loguru import logger
from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

HEADER_NAME = os.getenv("REQUEST_ID_HEADER_NAME", "X-Request-ID")
TRUST_CLIENT_IDS = os.getenv("REQUEST_ID_TRUST_CLIENT_IDS", "true").lower() == "true"
MAX_ID_LENGTH = 128


def _client_request_id(headers: Headers, header_name: str) -> str | None:
    incoming = headers.get(header_name) or headers.get("X-Correlation-ID")
    if not incoming:
        return None
    candidate = incoming.strip()
    if not 0 < len(candidate) <= MAX_ID_LENGTH:
        return None
    try:
        parsed = uuid.UUID(candidate)
    except ValueError:
        return None
    return str(parsed) if parsed.version == 4 else None


class RequestIDMiddleware:
    """Per-request correlation ID for HTTP scopes."""

    def __init__(self, app: ASGIApp, header_name: str = HEADER_NAME) -> None:
        self.app = app
        self.header_name = header_name

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        req_id = None
        if TRUST_CLIENT_IDS:
            req_id = _client_request_id(Headers(scope=scope), self.header_name)
        req_id = req_id or str(uuid.uuid4())

        scope.setdefault("state", {})["request_id"] = req_id
        name_bytes = self.header_name.lower().encode("latin-1")

        async def _send_wrapper(message: Message) -> None:
            if message["type"] == "http.response.start":
                raw = [(k, v) for (k, v) in message.get("headers", []) if k.lower() != name_bytes]
                raw.append((name_bytes, req_id.encode("latin-1")))
                message["headers"] = raw
            await send(message)

        with logger.contextualize(request_id=req_id):
            await self.app(scope, receive, _send_wrapper)


def get_request_id(request) -> str:
    """Fetch the current request id from `request.state` ("" if absent)."""
    return getattr(getattr(request, "state", object()), "request_id", "") or ""


__all__ = ["RequestIDMiddleware", "get_request_id"]
