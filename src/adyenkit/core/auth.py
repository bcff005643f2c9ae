"""
Authentication schemes for the Adyen APIs.

Most APIs take an API key in the ``X-API-Key`` header; the Legal Entity
Management API is commonly used with HTTP basic authentication. Credential
objects never render their secrets in ``repr``/``str``.
"""

from __future__ import annotations

import base64
from abc import ABC, abstractmethod

from adyenkit.core.exceptions import ConfigurationError
from adyenkit.core.logging import REDACTED, mask_secret

API_KEY_HEADER = "X-API-Key"
AUTHORIZATION_HEADER = "Authorization"

MIN_API_KEY_LENGTH = 10
MAX_API_KEY_LENGTH = 200


class Credentials(ABC):
    """Resolved authentication material for one client configuration."""

    @abstractmethod
    def auth_headers(self) -> dict[str, str]:
        """Headers to attach to every request. Never log these."""
        ...

    @abstractmethod
    def redacted_headers(self) -> dict[str, str]:
        """Same header names as :meth:`auth_headers`, values redacted."""
        ...

    @property
    @abstractmethod
    def scheme(self) -> str: ...

    @staticmethod
    def api_key(key: str) -> ApiKeyCredentials:
        return ApiKeyCredentials(key)

    @staticmethod
    def basic(username: str, password: str) -> BasicAuthCredentials:
        return BasicAuthCredentials(username, password)


class ApiKeyCredentials(Credentials):
    """API key sent in the ``X-API-Key`` header."""

    __slots__ = ("_key",)

    def __init__(self, key: str) -> None:
        if not key:
            raise ConfigurationError("API key cannot be empty", field="api_key", reason="empty")
        if len(key) < MIN_API_KEY_LENGTH:
            raise ConfigurationError(
                "API key appears to be too short", field="api_key", reason="too short"
            )
        if len(key) > MAX_API_KEY_LENGTH:
            raise ConfigurationError(
                "API key appears to be too long", field="api_key", reason="too long"
            )
        if any(ch.isspace() for ch in key):
            raise ConfigurationError(
                "API key cannot contain whitespace", field="api_key", reason="whitespace"
            )
        self._key = key

    @property
    def scheme(self) -> str:
        return "api_key"

    def auth_headers(self) -> dict[str, str]:
        return {API_KEY_HEADER: self._key}

    def redacted_headers(self) -> dict[str, str]:
        return {API_KEY_HEADER: REDACTED}

    def masked(self) -> str:
        """API key with most characters masked for safe logging."""
        return mask_secret(self._key)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, ApiKeyCredentials) and other._key == self._key

    def __hash__(self) -> int:
        return hash(("api_key", self._key))

    def __repr__(self) -> str:
        return f"ApiKeyCredentials({REDACTED})"

    __str__ = __repr__


class BasicAuthCredentials(Credentials):
    """Username/password sent as ``Authorization: Basic ...``."""

    __slots__ = ("_username", "_password")

    def __init__(self, username: str, password: str) -> None:
        if not username:
            raise ConfigurationError(
                "Username cannot be empty", field="username", reason="empty"
            )
        if not password:
            raise ConfigurationError(
                "Password cannot be empty", field="password", reason="empty"
            )
        self._username = username
        self._password = password

    @property
    def scheme(self) -> str:
        return "basic"

    @property
    def username(self) -> str:
        return self._username

    def authorization_header(self) -> str:
        token = base64.b64encode(f"{self._username}:{self._password}".encode()).decode("ascii")
        return f"Basic {token}"

    def auth_headers(self) -> dict[str, str]:
        return {AUTHORIZATION_HEADER: self.authorization_header()}

    def redacted_headers(self) -> dict[str, str]:
        return {AUTHORIZATION_HEADER: f"Basic {REDACTED}"}

    def masked(self) -> str:
        return f"{self._username}:****"

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, BasicAuthCredentials)
            and other._username == self._username
            and other._password == self._password
        )

    def __hash__(self) -> int:
        return hash(("basic", self._username, self._password))

    def __repr__(self) -> str:
        return f"BasicAuthCredentials(username={self._username!r}, password={REDACTED})"

    __str__ = __repr__
