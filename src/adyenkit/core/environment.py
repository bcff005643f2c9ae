"""
Adyen deployment environments.

Test uses fixed sandbox hosts. Live hosts for the classic and Checkout APIs
are keyed by the merchant's live URL prefix (Customer Area > Developers >
API URLs); the other API families use fixed live hosts.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from adyenkit.core.exceptions import ConfigurationError

_PREFIX_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")
MAX_PREFIX_LENGTH = 100


def validate_url_prefix(prefix: str | None) -> str:
    """Validate a live URL prefix and return it unchanged."""
    if not prefix:
        raise ConfigurationError(
            "Live environment requires a non-empty URL prefix",
            field="url_prefix",
            reason="empty",
        )
    if len(prefix) > MAX_PREFIX_LENGTH:
        raise ConfigurationError(
            f"URL prefix cannot be longer than {MAX_PREFIX_LENGTH} characters",
            field="url_prefix",
            reason="too long",
        )
    if not _PREFIX_PATTERN.match(prefix):
        raise ConfigurationError(
            "URL prefix can only contain alphanumeric characters, hyphens, and underscores",
            field="url_prefix",
            reason="invalid characters",
        )
    return prefix


@dataclass(frozen=True)
class Environment:
    """Target environment: ``Environment.test()`` or ``Environment.live(prefix)``."""

    url_prefix: str | None = None

    def __post_init__(self) -> None:
        if self.url_prefix is not None:
            validate_url_prefix(self.url_prefix)

    @classmethod
    def test(cls) -> Environment:
        return cls()

    @classmethod
    def live(cls, url_prefix: str) -> Environment:
        """
        Create a live environment.

        Raises:
            ConfigurationError: If the prefix is empty, too long or malformed.
        """
        return cls(url_prefix=validate_url_prefix(url_prefix))

    @classmethod
    def from_string(cls, name: str, url_prefix: str | None = None) -> Environment:
        value = name.strip().lower()
        if value == "test":
            return cls.test()
        if value == "live":
            return cls.live(url_prefix or "")
        raise ConfigurationError(
            f"Unknown environment: {name}. Supported: ['test', 'live']",
            field="environment",
        )

    @property
    def is_test(self) -> bool:
        return self.url_prefix is None

    @property
    def is_live(self) -> bool:
        return self.url_prefix is not None

    # ==================== Base URLs ====================

    def classic_api_url(self) -> str:
        """Payments, Payouts and Recurring (``/pal/servlet/...``)."""
        if self.is_test:
            return "https://pal-test.adyen.com"
        return f"https://{self.url_prefix}-pal-live.adyenpayments.com"

    def checkout_api_url(self) -> str:
        if self.is_test:
            return "https://checkout-test.adyen.com"
        return f"https://{self.url_prefix}-checkout-live.adyenpayments.com/checkout"

    def management_api_url(self) -> str:
        if self.is_test:
            return "https://management-test.adyen.com"
        return "https://management-live.adyen.com"

    def balance_platform_api_url(self) -> str:
        if self.is_test:
            return "https://balanceplatform-api-test.adyen.com/bcl"
        return "https://balanceplatform-api-live.adyen.com/bcl"

    def transfers_api_url(self) -> str:
        if self.is_test:
            return "https://balanceplatform-api-test.adyen.com/btl"
        return "https://balanceplatform-api-live.adyen.com/btl"

    def legal_entity_api_url(self) -> str:
        if self.is_test:
            return "https://kyc-test.adyen.com/lem"
        return "https://kyc-live.adyen.com/lem"

    def disputes_api_url(self) -> str:
        if self.is_test:
            return "https://ca-test.adyen.com/ca/services"
        return "https://ca-live.adyen.com/ca/services"

    def terminal_api_url(self) -> str:
        if self.is_test:
            return "https://terminal-api-test.adyen.com"
        return "https://terminal-api-live.adyen.com"

    def __str__(self) -> str:
        if self.is_test:
            return "test"
        return f"live({self.url_prefix})"
