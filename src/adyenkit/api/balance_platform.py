"""Balance Platform Configuration API (v2)."""

from __future__ import annotations

from typing import Any

from adyenkit.api.base import ApiService


class BalancePlatformApi(ApiService):
    """Account holders, balance accounts and payment instruments."""

    version = "v2"

    def _base_url(self) -> str:
        return self.environment.balance_platform_api_url()

    async def create_account_holder(self, request: Any) -> Any:
        return await self._post(self._url("/accountHolders"), request)

    async def get_account_holder(self, account_holder_id: str) -> Any:
        return await self._get(self._url("/accountHolders", account_holder_id))

    async def create_balance_account(self, request: Any) -> Any:
        return await self._post(self._url("/balanceAccounts"), request)

    async def get_balance_account(self, balance_account_id: str) -> Any:
        return await self._get(self._url("/balanceAccounts", balance_account_id))

    async def create_payment_instrument(self, request: Any) -> Any:
        return await self._post(self._url("/paymentInstruments"), request)

    async def get_payment_instrument(self, payment_instrument_id: str) -> Any:
        return await self._get(self._url("/paymentInstruments", payment_instrument_id))
