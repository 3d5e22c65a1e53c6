"""Unit tests for HTTP request/response formatting."""

import httpx
import pytest
from starlette.requests import Request
from starlette.responses import Response

from logweave.config import HttpFormatterSettings
from logweave.exceptions import UnsupportedHttpObjectError
from logweave.http import REDACTED, HttpPairFormatter


@pytest.fixture
def formatter() -> HttpPairFormatter:
    return HttpPairFormatter()


def inbound_request(headers: list[tuple[bytes, bytes]] | None = None) -> Request:
    return Request(
        {
            "type": "http",
            "method": "POST",
            "scheme": "https",
            "path": "/api/v1/orders",
            "root_path": "",
            "query_string": b"dry_run=1",
            "headers": headers or [(b"host", b"shop.local")],
            "client": ("192.168.0.7", 51000),
            "server": ("shop.local", 443),
        }
    )


class TestOutbound:
    """Test httpx messages."""

    def test_request(self, formatter: HttpPairFormatter) -> None:
        request = httpx.Request(
            "POST",
            "https://api.example.com/v1/charge",
            headers={"Authorization": "Bearer t", "X-Trace": "abc"},
            json={"amount": 10},
        )
        formatted = formatter.format_request(request)

        assert formatted["method"] == "POST"
        assert formatted["url"] == "https://api.example.com/v1/charge"
        assert formatted["headers"]["authorization"] == REDACTED
        assert formatted["headers"]["x-trace"] == "abc"
        assert '"amount"' in formatted["body"]

    def test_response(self, formatter: HttpPairFormatter) -> None:
        response = httpx.Response(429, text="slow down", headers={"Retry-After": "3"})
        formatted = formatter.format_response(response)

        assert formatted["status_code"] == 429
        assert formatted["body"] == "slow down"
        assert formatted["headers"]["retry-after"] == "3"

    def test_empty_body_is_none(self, formatter: HttpPairFormatter) -> None:
        assert formatter.format_request(httpx.Request("GET", "https://a.example.com"))["body"] is None

    def test_unread_stream_body_is_none(self, formatter: HttpPairFormatter) -> None:
        response = httpx.Response(200, stream=httpx.ByteStream(b"chunk"))
        assert formatter.format_response(response)["body"] is None

    def test_body_truncated(self) -> None:
        formatter = HttpPairFormatter(HttpFormatterSettings(max_body_chars=5))
        response = httpx.Response(200, text="0123456789")
        assert formatter.format_response(response)["body"] == "01234...[truncated]"


class TestInbound:
    """Test Starlette messages."""

    def test_request(self, formatter: HttpPairFormatter) -> None:
        formatted = formatter.format_request(
            inbound_request([(b"host", b"shop.local"), (b"cookie", b"session=1")])
        )

        assert formatted["method"] == "POST"
        assert formatted["url"] == "https://shop.local/api/v1/orders?dry_run=1"
        assert formatted["path"] == "/api/v1/orders"
        assert formatted["query_params"] == {"dry_run": "1"}
        assert formatted["headers"]["cookie"] == REDACTED
        assert formatted["client_host"] == "192.168.0.7"

    def test_response(self, formatter: HttpPairFormatter) -> None:
        formatted = formatter.format_response(Response(content="created", status_code=201))

        assert formatted["status_code"] == 201
        assert formatted["body"] == "created"


class TestPair:
    """Test the request/response pair."""

    def test_two_keys(self, formatter: HttpPairFormatter) -> None:
        pair = formatter.format(inbound_request(), Response(status_code=204))
        assert set(pair) == {"request", "response"}

    def test_mixed_shapes(self, formatter: HttpPairFormatter) -> None:
        """Test each half is formatted by its own shape."""
        pair = formatter.format(httpx.Request("GET", "https://a.example.com"), Response(status_code=200))
        assert pair["request"]["url"] == "https://a.example.com"
        assert pair["response"]["status_code"] == 200

    def test_none_halves(self, formatter: HttpPairFormatter) -> None:
        assert formatter.format(None, None) == {"request": None, "response": None}

    def test_unsupported_object(self, formatter: HttpPairFormatter) -> None:
        with pytest.raises(UnsupportedHttpObjectError):
            formatter.format({"method": "GET"}, None)

    def test_custom_redaction(self) -> None:
        formatter = HttpPairFormatter(HttpFormatterSettings(redact_headers=["X-Tenant"]))
        request = httpx.Request("GET", "https://a.example.com", headers={"X-Tenant": "acme", "Authorization": "t"})
        headers = formatter.format_request(request)["headers"]

        assert headers["x-tenant"] == REDACTED
        assert headers["authorization"] == "t"
