"""Unit tests for credentials."""

import pytest

from adyenkit.core.auth import (
    API_KEY_HEADER,
    AUTHORIZATION_HEADER,
    ApiKeyCredentials,
    BasicAuthCredentials,
    Credentials,
)
from adyenkit.core.exceptions import ConfigurationError

from conftest import TEST_API_KEY


class TestApiKeyCredentials:
    """Tests for API-key authentication."""

    def test_auth_headers(self) -> None:
        creds = Credentials.api_key(TEST_API_KEY)

        assert creds.auth_headers() == {API_KEY_HEADER: TEST_API_KEY}
        assert creds.scheme == "api_key"

    def test_redacted_headers(self) -> None:
        creds = ApiKeyCredentials(TEST_API_KEY)

        assert creds.redacted_headers() == {API_KEY_HEADER: "[REDACTED]"}

    def test_repr_and_str_hide_key(self) -> None:
        creds = ApiKeyCredentials(TEST_API_KEY)

        assert TEST_API_KEY not in repr(creds)
        assert TEST_API_KEY not in str(creds)

    @pytest.mark.parametrize(
        "key,reason",
        [
            ("", "empty"),
            ("123456789", "too short"),
            ("k" * 201, "too long"),
            ("AQE key with spaces", "whitespace"),
            ("AQEkey\twith_tab_here", "whitespace"),
        ],
    )
    def test_invalid_keys(self, key, reason) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            ApiKeyCredentials(key)

        assert exc_info.value.field == "api_key"
        assert exc_info.value.reason == reason

    def test_boundary_lengths_accepted(self) -> None:
        ApiKeyCredentials("k" * 10)
        ApiKeyCredentials("k" * 200)

    def test_equality(self) -> None:
        assert ApiKeyCredentials(TEST_API_KEY) == ApiKeyCredentials(TEST_API_KEY)
        assert ApiKeyCredentials(TEST_API_KEY) != ApiKeyCredentials(TEST_API_KEY + "x")


class TestBasicAuthCredentials:
    """Tests for HTTP basic authentication."""

    def test_authorization_header(self) -> None:
        creds = Credentials.basic("user", "pass")

        assert creds.auth_headers() == {AUTHORIZATION_HEADER: "Basic dXNlcjpwYXNz"}
        assert creds.scheme == "basic"

    def test_redacted_headers(self) -> None:
        creds = BasicAuthCredentials("user", "pass")

        assert creds.redacted_headers() == {AUTHORIZATION_HEADER: "Basic [REDACTED]"}

    def test_repr_hides_password(self) -> None:
        creds = BasicAuthCredentials("ws@Company.Acme", "topsecret")

        assert "topsecret" not in repr(creds)
        assert "ws@Company.Acme" in repr(creds)
        assert creds.masked() == "ws@Company.Acme:****"

    @pytest.mark.parametrize("username,password,field", [("", "pw", "username"), ("u", "", "password")])
    def test_empty_parts_rejected(self, username, password, field) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            BasicAuthCredentials(username, password)

        assert exc_info.value.field == field
