"""Unit tests for clientspec.resolver.endpoint."""
from __future__ import annotations

import pytest

from clientspec.resolver.endpoint import compose_url, join_path, resolve_endpoint
from clientspec.resolver.errors import InvalidEndpointDeclaration


class TestComposeUrl:
    def test_adds_default_protocol(self) -> None:
        assert compose_url("orders.internal:8080") == "http://orders.internal:8080"

    def test_custom_protocol(self) -> None:
        assert compose_url("orders.internal", "https") == "https://orders.internal"

    def test_keeps_existing_protocol(self) -> None:
        assert compose_url("https://orders.internal") == "https://orders.internal"

    def test_placeholder_untouched(self) -> None:
        assert compose_url("${orders.url}") == "${orders.url}"

    def test_strips_surrounding_whitespace(self) -> None:
        assert compose_url("  https://orders  ") == "https://orders"


class TestJoinPath:
    @pytest.mark.parametrize(
        ("base", "path", "expected"),
        [
            ("http://h", "/v1", "http://h/v1"),
            ("http://h", "v1", "http://h/v1"),
            ("http://h/", "/v1", "http://h/v1"),
            ("http://h/", "v1", "http://h/v1"),
            ("http://h", "/v1/", "http://h/v1/"),
            ("http://h/api", "/v1", "http://h/api/v1"),
            ("http://h", "", "http://h"),
            ("http://h/", "", "http://h/"),
        ],
    )
    def test_single_boundary(self, base: str, path: str, expected: str) -> None:
        assert join_path(base, path) == expected


class TestResolveEndpoint:
    def test_blank_url_uses_path(self) -> None:
        assert resolve_endpoint("", "/v1") == "/v1"
        assert resolve_endpoint(None, None) == ""

    def test_blank_url_anchors_relative_path(self) -> None:
        assert resolve_endpoint("  ", "v1/") == "/v1/"
        assert resolve_endpoint("", " api ") == "/api"

    def test_blank_url_keeps_placeholder_path(self) -> None:
        assert resolve_endpoint("", "${orders.path}") == "${orders.path}"

    def test_url_and_path(self) -> None:
        assert resolve_endpoint("orders.internal:8080", "api/") == "http://orders.internal:8080/api/"

    def test_url_without_path(self) -> None:
        assert resolve_endpoint("https://orders/", "") == "https://orders/"

    def test_placeholder_url(self) -> None:
        assert resolve_endpoint("${orders.url}", "/v1") == "${orders.url}/v1"

    @pytest.mark.parametrize(
        ("url", "path"),
        [
            ("", "/v1"),
            ("", ""),
            ("orders", "/v1"),
            ("https://orders/", "/v1/"),
            ("http://orders", ""),
            ("${orders.url}", "v2"),
            ("/relative", "v1"),
            ("", "v1"),
            ("", "api/"),
            ("", "  /v1  "),
            ("", "${orders.path}"),
        ],
    )
    def test_idempotent(self, url: str, path: str) -> None:
        once = resolve_endpoint(url, path)
        assert resolve_endpoint(once, "") == once

    @pytest.mark.parametrize("url", ["http://", "http:///v1", "orders internal", "http://[::1"])
    def test_malformed_url(self, url: str) -> None:
        with pytest.raises(InvalidEndpointDeclaration) as excinfo:
            resolve_endpoint(url, "/v1")
        assert excinfo.value.attribute == "url"
