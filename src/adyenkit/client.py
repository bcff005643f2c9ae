"""
AdyenClient - one entry point for every Adyen API.
"""

from __future__ import annotations

import asyncio
import os
from typing import Any

import httpx

from adyenkit.api.balance_platform import BalancePlatformApi
from adyenkit.api.checkout import CheckoutApi
from adyenkit.api.legal_entity import LegalEntityApi
from adyenkit.api.management import ManagementApi
from adyenkit.api.payments import ModificationsApi, PaymentsApi
from adyenkit.api.payout import PayoutApi
from adyenkit.api.recurring import RecurringApi
from adyenkit.core.config import Config
from adyenkit.core.http_client import HttpClient
from adyenkit.core.logging import configure_logging, get_logger
from adyenkit.resilience.retry import SleepFunc

LOG_LEVEL_ENV = "ADYEN_LOG_LEVEL"


class AdyenClient:
    """
    Main client for the adyenkit SDK.

    All services share one HttpClient, and with it one connection pool and
    the read-only Config.

    Example:
        >>> config = Config.builder().api_key("AQE...").live("1797a841fbb37ca7-AdyenDemo").build()
        >>> async with AdyenClient(config) as adyen:
        ...     methods = await adyen.checkout.payment_methods({"merchantAccount": "YourMerchant"})
    """

    def __init__(
        self,
        config: Config,
        transport: httpx.AsyncBaseTransport | None = None,
        log_level: int | str | None = None,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        """
        Initialize the client.

        Args:
            config: Validated configuration
            transport: Optional httpx transport, mainly for tests
            log_level: Configure the adyenkit logger at this level (or from
                ADYEN_LOG_LEVEL env). Left untouched when neither is set.
            sleep: Coroutine used for retry backoff delays
        """
        if log_level is None:
            log_level = os.environ.get(LOG_LEVEL_ENV) or None
        if log_level is not None:
            configure_logging(level=log_level)

        self._logger = get_logger("client")
        self._config = config
        self._http = HttpClient(config, transport=transport, sleep=sleep)

        self.checkout = CheckoutApi(self._http)
        self.payments = PaymentsApi(self._http)
        self.modifications = ModificationsApi(self._http)
        self.payout = PayoutApi(self._http)
        self.recurring = RecurringApi(self._http)
        self.management = ManagementApi(self._http)
        self.legal_entity = LegalEntityApi(self._http)
        self.balance_platform = BalancePlatformApi(self._http)

        self._logger.info(
            f"Initialized adyenkit client (environment: {config.environment}, "
            f"auth: {config.credentials.scheme})"
        )

    @classmethod
    def from_env(cls, **kwargs: Any) -> AdyenClient:
        """Create a client from ``ADYEN_*`` environment variables."""
        return cls(Config.from_env(), **kwargs)

    @property
    def config(self) -> Config:
        """Get SDK configuration."""
        return self._config

    @property
    def http(self) -> HttpClient:
        """Underlying transport, for endpoints without a dedicated service."""
        return self._http

    async def close(self) -> None:
        await self._http.close()

    async def __aenter__(self) -> AdyenClient:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
