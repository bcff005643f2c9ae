"""Payout API (v68)."""

from __future__ import annotations

from typing import Any

from adyenkit.api.base import ApiService


class PayoutApi(ApiService):
    """Instant payouts and the two-step store/submit/confirm payout flow."""

    version = "v68"

    def _base_url(self) -> str:
        return f"{self.environment.classic_api_url()}/pal/servlet/Payout"

    async def payout(self, request: Any, idempotency_key: str | None = None) -> Any:
        return await self._post(self._url("/payout"), request, idempotency_key)

    async def store_detail(self, request: Any) -> Any:
        return await self._post(self._url("/storeDetail"), request)

    async def store_detail_and_submit_third_party(
        self, request: Any, idempotency_key: str | None = None
    ) -> Any:
        return await self._post(
            self._url("/storeDetailAndSubmitThirdParty"), request, idempotency_key
        )

    async def submit_third_party(self, request: Any, idempotency_key: str | None = None) -> Any:
        return await self._post(self._url("/submitThirdParty"), request, idempotency_key)

    async def confirm_third_party(self, request: Any) -> Any:
        return await self._post(self._url("/confirmThirdParty"), request)

    async def decline_third_party(self, request: Any) -> Any:
        return await self._post(self._url("/declineThirdParty"), request)
