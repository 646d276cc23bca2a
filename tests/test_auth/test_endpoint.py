"""Tests for the token endpoint client."""

from __future__ import annotations

import asyncio
import base64
from urllib.parse import parse_qs

import httpx
import pytest

from paramauth.auth.endpoint import TokenEndpointClient, basic_credentials
from paramauth.exceptions import UpstreamTokenInvalidError, UpstreamTransportError


def _request(client: TokenEndpointClient) -> dict:
    return asyncio.run(client.request_token("https://auth.example/token", "a", "b"))


class TestBasicCredentials:
    def test_encoding(self) -> None:
        assert basic_credentials("a", "b") == base64.b64encode(b"a:b").decode("ascii")

    def test_utf8(self) -> None:
        decoded = base64.b64decode(basic_credentials("clïent", "sécret")).decode("utf-8")
        assert decoded == "clïent:sécret"


class TestRequestToken:
    def test_request_shape(self, token_endpoint, endpoint_client: TokenEndpointClient) -> None:
        body = _request(endpoint_client)

        assert body["access_token"] == "tok123"
        assert token_endpoint.calls == 1
        request = token_endpoint.requests[0]
        assert request.method == "POST"
        assert str(request.url) == "https://auth.example/token"
        assert request.headers["Authorization"] == "Basic YTpi"
        assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
        assert parse_qs(request.content.decode()) == {"grant_type": ["client_credentials"]}

    def test_client_secret_not_in_body(self, token_endpoint, endpoint_client) -> None:
        _request(endpoint_client)
        assert b"client_secret" not in token_endpoint.requests[0].content

    def test_error_status(self, token_endpoint, endpoint_client) -> None:
        token_endpoint.status_code = 401
        token_endpoint.body = {"error": "invalid_client"}
        with pytest.raises(UpstreamTokenInvalidError, match="status 401"):
            _request(endpoint_client)

    def test_non_json_body(self, token_endpoint, endpoint_client) -> None:
        token_endpoint.raw = b"<html>oops</html>"
        with pytest.raises(UpstreamTokenInvalidError, match="not JSON"):
            _request(endpoint_client)

    def test_non_object_body(self, token_endpoint, endpoint_client) -> None:
        token_endpoint.body = ["tok123"]
        with pytest.raises(UpstreamTokenInvalidError, match="not a JSON object"):
            _request(endpoint_client)

    def test_timeout(self, token_endpoint, endpoint_client) -> None:
        token_endpoint.error = httpx.ReadTimeout("timed out")
        with pytest.raises(UpstreamTransportError, match="timed out after 2.0s"):
            _request(endpoint_client)

    def test_connection_error(self, token_endpoint, endpoint_client) -> None:
        token_endpoint.error = httpx.ConnectError("connection refused")
        with pytest.raises(UpstreamTransportError, match="connection refused"):
            _request(endpoint_client)

    def test_timeout_setting(self) -> None:
        assert TokenEndpointClient().timeout == 2.0
        assert TokenEndpointClient(timeout=0.5).timeout == 0.5
