"""Request/response serialization for integration records.

Two message shapes are supported:
- inbound: Starlette/FastAPI Request and Response handled by this service
- outbound: httpx Request and Response sent to another service
"""

from __future__ import annotations

import json
from typing import Any

import httpx
from starlette.requests import Request as StarletteRequest
from starlette.responses import Response as StarletteResponse

from logweave.config import HttpFormatterSettings
from logweave.exceptions import UnsupportedHttpObjectError

REDACTED = "[REDACTED]"


class HttpPairFormatter:
    """Turns a request/response pair into two JSON-compatible dicts."""

    def __init__(self, settings: HttpFormatterSettings | None = None):
        settings = settings or HttpFormatterSettings()
        self._redact = set(settings.redact_headers)
        self._max_body_chars = settings.max_body_chars

    def format(self, request: Any, response: Any) -> dict[str, Any]:
        """Format both halves. Either half may be None."""
        return {
            "request": self.format_request(request),
            "response": self.format_response(response),
        }

    def to_json(self, request: Any, response: Any) -> str:
        return json.dumps(self.format(request, response), default=str)

    def format_request(self, request: Any) -> dict[str, Any] | None:
        if request is None:
            return None
        if isinstance(request, httpx.Request):
            return {
                "method": request.method,
                "url": str(request.url),
                "headers": self._headers(request.headers.multi_items()),
                "body": self._body(lambda: request.content),
            }
        if isinstance(request, StarletteRequest):
            return {
                "method": request.method,
                "url": str(request.url),
                "path": request.url.path,
                "query_params": dict(request.query_params),
                "headers": self._headers(request.headers.items()),
                "client_host": request.client.host if request.client else None,
            }
        raise UnsupportedHttpObjectError(request)

    def format_response(self, response: Any) -> dict[str, Any] | None:
        if response is None:
            return None
        if isinstance(response, httpx.Response):
            return {
                "status_code": response.status_code,
                "headers": self._headers(response.headers.multi_items()),
                "body": self._body(lambda: response.content),
            }
        if isinstance(response, StarletteResponse):
            return {
                "status_code": response.status_code,
                "headers": self._headers(response.headers.items()),
                "body": self._body(lambda: getattr(response, "body", b"")),
            }
        raise UnsupportedHttpObjectError(response)

    def _headers(self, items: Any) -> dict[str, str]:
        headers: dict[str, str] = {}
        for name, value in items:
            headers[name] = REDACTED if name.lower() in self._redact else value
        return headers

    def _body(self, read: Any) -> str | None:
        # Streaming messages have no body until read
        try:
            content = read()
        except (httpx.RequestNotRead, httpx.ResponseNotRead):
            return None
        if not content:
            return None
        body = content.decode("utf-8", errors="replace") if isinstance(content, bytes) else str(content)
        if len(body) > self._max_body_chars:
            return body[: self._max_body_chars] + "...[truncated]"
        return body
