"""Tests for the hosted-backend HTTP client."""

import json

import httpx
import pytest

from storeorder.domain.exceptions import BackendError
from storeorder.infrastructure.backend.client import BackendClient
from storeorder.infrastructure.config import Settings


def _settings(**overrides) -> Settings:
    values = {"backend_url": "http://backend.test/", "backend_api_key": "anon-key"}
    values.update(overrides)
    return Settings(**values)


def _client(handler, **overrides) -> BackendClient:
    return BackendClient(_settings(**overrides), transport=httpx.MockTransport(handler))


class TestBackendClient:

    def test_sends_auth_headers(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        _client(handler).get("/rest/v1/products")

        request = seen[0]
        assert str(request.url) == "http://backend.test/rest/v1/products"
        assert request.headers["apikey"] == "anon-key"
        assert request.headers["Authorization"] == "Bearer anon-key"

    def test_access_token_used_as_bearer(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={})

        _client(handler, access_token="user-jwt").get("/x")
        assert seen[0].headers["Authorization"] == "Bearer user-jwt"

    def test_timeout_comes_from_settings(self):
        client = _client(lambda r: httpx.Response(200), request_timeout=2.5)
        assert client.client.timeout == httpx.Timeout(2.5)

    def test_invoke_function_posts_json(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"ok": True})

        result = _client(handler).invoke_function("check-data-version", {"tableName": "products"})

        assert result == {"ok": True}
        assert seen[0].method == "POST"
        assert seen[0].url.path == "/functions/v1/check-data-version"
        assert json.loads(seen[0].content) == {"tableName": "products"}

    def test_empty_body_is_none(self):
        assert _client(lambda r: httpx.Response(201)).post("/rest/v1/order_items") is None

    def test_http_error_status(self):
        client = _client(lambda r: httpx.Response(503, text="maintenance"))
        with pytest.raises(BackendError, match="HTTP 503") as exc_info:
            client.get("/rest/v1/products")
        assert exc_info.value.details == {"status": 503, "response": "maintenance"}

    def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(BackendError, match="connection refused"):
            _client(handler).get("/rest/v1/products")

    def test_invalid_json(self):
        client = _client(lambda r: httpx.Response(200, text="<html>"))
        with pytest.raises(BackendError, match="invalid JSON"):
            client.get("/rest/v1/products")

    def test_single_attempt_only(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(500)

        with pytest.raises(BackendError):
            _client(handler).get("/rest/v1/products")
        assert len(calls) == 1

    def test_context_manager_closes(self):
        with _client(lambda r: httpx.Response(200)) as client:
            pass
        assert client.client.is_closed
