"""
Configuration management for the adyenkit SDK.

Handles building, validating and loading configuration from environment
variables. A Config is immutable and shared read-only by every call.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields, replace
from typing import Any

from adyenkit.core.auth import ApiKeyCredentials, BasicAuthCredentials, Credentials
from adyenkit.core.environment import Environment
from adyenkit.core.exceptions import ConfigurationError

SDK_VERSION = "0.1.0"
USER_AGENT = f"adyenkit-python/{SDK_VERSION}"

DEFAULT_MAX_RETRIES = 2
DEFAULT_BASE_BACKOFF = 0.1  # seconds
DEFAULT_REQUEST_TIMEOUT = 60.0  # seconds


def _get_env_var(name: str, default: str | None = None) -> str | None:
    """Get environment variable with optional default."""
    return os.environ.get(name, default)


def _parse_number(name: str, raw: str | None, kind: type) -> Any:
    if raw is None or raw == "":
        return None
    try:
        return kind(raw)
    except ValueError:
        raise ConfigurationError(
            f"Environment variable {name} must be a {kind.__name__}, got {raw!r}",
            field=name,
        ) from None


@dataclass(frozen=True)
class Config:
    """SDK configuration."""

    credentials: Credentials
    environment: Environment = field(default_factory=Environment.test)
    # Retry tunables
    max_retries: int = DEFAULT_MAX_RETRIES
    base_backoff: float = DEFAULT_BASE_BACKOFF
    # Per-request HTTP timeout in seconds
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    user_agent: str = USER_AGENT
    default_headers: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.credentials, Credentials):
            raise ConfigurationError("Credentials are required", field="credentials")
        if not isinstance(self.environment, Environment):
            raise ConfigurationError("Invalid environment", field="environment")
        if isinstance(self.max_retries, bool) or not isinstance(self.max_retries, int):
            raise ConfigurationError("max_retries must be an integer", field="max_retries")
        if self.max_retries < 0:
            raise ConfigurationError("max_retries cannot be negative", field="max_retries")
        if self.base_backoff <= 0:
            raise ConfigurationError("base_backoff must be positive", field="base_backoff")
        if self.request_timeout <= 0:
            raise ConfigurationError(
                "request_timeout must be positive", field="request_timeout"
            )
        if not self.user_agent:
            raise ConfigurationError("user_agent cannot be empty", field="user_agent")
        # Detach from the caller's dict
        object.__setattr__(self, "default_headers", dict(self.default_headers))

    @classmethod
    def builder(cls) -> ConfigBuilder:
        return ConfigBuilder()

    @classmethod
    def from_env(cls, **overrides: Any) -> Config:
        """
        Load configuration from environment variables.

        Recognised variables: ADYEN_API_KEY, ADYEN_USERNAME, ADYEN_PASSWORD,
        ADYEN_ENVIRONMENT, ADYEN_LIVE_URL_PREFIX, ADYEN_MAX_RETRIES,
        ADYEN_BASE_BACKOFF, ADYEN_REQUEST_TIMEOUT. Keyword overrides take
        precedence (``api_key``, ``username``, ``password``, ``environment``,
        ``url_prefix`` and any Config field).
        """
        builder = ConfigBuilder()

        credentials = overrides.get("credentials")
        api_key = overrides.get("api_key") or _get_env_var("ADYEN_API_KEY")
        username = overrides.get("username") or _get_env_var("ADYEN_USERNAME")
        password = overrides.get("password") or _get_env_var("ADYEN_PASSWORD")
        if credentials is not None:
            builder.credentials(credentials)
        elif api_key:
            builder.api_key(api_key)
        elif username or password:
            builder.basic_auth(username or "", password or "")
        else:
            raise ConfigurationError(
                "Required environment variable ADYEN_API_KEY "
                "(or ADYEN_USERNAME/ADYEN_PASSWORD) is not set",
                field="credentials",
            )

        environment = overrides.get("environment")
        if isinstance(environment, Environment):
            builder.environment(environment)
        else:
            env_name = environment or _get_env_var("ADYEN_ENVIRONMENT", "test")
            url_prefix = overrides.get("url_prefix") or _get_env_var("ADYEN_LIVE_URL_PREFIX")
            builder.environment(Environment.from_string(env_name, url_prefix))

        max_retries = overrides.get("max_retries")
        if max_retries is None:
            max_retries = _parse_number(
                "ADYEN_MAX_RETRIES", _get_env_var("ADYEN_MAX_RETRIES"), int
            )
        if max_retries is not None:
            builder.max_retries(max_retries)

        base_backoff = overrides.get("base_backoff")
        if base_backoff is None:
            base_backoff = _parse_number(
                "ADYEN_BASE_BACKOFF", _get_env_var("ADYEN_BASE_BACKOFF"), float
            )
        if base_backoff is not None:
            builder.base_backoff(base_backoff)

        request_timeout = overrides.get("request_timeout")
        if request_timeout is None:
            request_timeout = _parse_number(
                "ADYEN_REQUEST_TIMEOUT", _get_env_var("ADYEN_REQUEST_TIMEOUT"), float
            )
        if request_timeout is not None:
            builder.timeout(request_timeout)

        if overrides.get("user_agent"):
            builder.user_agent(overrides["user_agent"])
        for name, value in (overrides.get("default_headers") or {}).items():
            builder.default_header(name, value)

        return builder.build()

    def with_updates(self, **updates: Any) -> Config:
        """Create a new Config with updated values."""
        known = {f.name for f in fields(self)}
        unknown = set(updates) - known
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration fields: {sorted(unknown)}", field=sorted(unknown)[0]
            )
        return replace(self, **updates)

    def masked_api_key(self) -> str:
        """Return the credential with most characters masked for safe logging."""
        if isinstance(self.credentials, (ApiKeyCredentials, BasicAuthCredentials)):
            return self.credentials.masked()
        return "****"


class ConfigBuilder:
    """
    Fluent builder for :class:`Config`.

    Example:
        >>> config = (
        ...     Config.builder()
        ...     .api_key("AQE...")
        ...     .environment(Environment.live("1797a841fbb37ca7-AdyenDemo"))
        ...     .max_retries(3)
        ...     .build()
        ... )
    """

    def __init__(self) -> None:
        self._credentials: Credentials | None = None
        self._environment: Environment | None = None
        self._values: dict[str, Any] = {}
        self._default_headers: dict[str, str] = {}

    def credentials(self, credentials: Credentials) -> ConfigBuilder:
        self._credentials = credentials
        return self

    def api_key(self, api_key: str) -> ConfigBuilder:
        self._credentials = ApiKeyCredentials(api_key)
        return self

    def basic_auth(self, username: str, password: str) -> ConfigBuilder:
        self._credentials = BasicAuthCredentials(username, password)
        return self

    def environment(self, environment: Environment) -> ConfigBuilder:
        self._environment = environment
        return self

    def live(self, url_prefix: str) -> ConfigBuilder:
        self._environment = Environment.live(url_prefix)
        return self

    def max_retries(self, max_retries: int) -> ConfigBuilder:
        self._values["max_retries"] = max_retries
        return self

    def base_backoff(self, seconds: float) -> ConfigBuilder:
        self._values["base_backoff"] = seconds
        return self

    def timeout(self, seconds: float) -> ConfigBuilder:
        self._values["request_timeout"] = seconds
        return self

    def user_agent(self, user_agent: str) -> ConfigBuilder:
        self._values["user_agent"] = user_agent
        return self

    def default_header(self, name: str, value: str) -> ConfigBuilder:
        self._default_headers[name] = value
        return self

    def build(self) -> Config:
        """
        Build the configuration.

        Raises:
            ConfigurationError: If credentials are missing or a tunable is invalid.
        """
        if self._credentials is None:
            raise ConfigurationError("Credentials are required", field="credentials")

        return Config(
            credentials=self._credentials,
            environment=self._environment or Environment.test(),
            default_headers=self._default_headers,
            **self._values,
        )
