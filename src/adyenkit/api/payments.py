"""Classic Payments and Modifications APIs (v68)."""

from __future__ import annotations

from typing import Any

from adyenkit.api.base import ApiService


class _ClassicPaymentService(ApiService):
    version = "v68"

    def _base_url(self) -> str:
        return f"{self.environment.classic_api_url()}/pal/servlet/Payment"


class PaymentsApi(_ClassicPaymentService):
    """
    Classic authorisation endpoints.

    Prefer :class:`~adyenkit.api.checkout.CheckoutApi` for new integrations.
    """

    async def authorise(self, request: Any, idempotency_key: str | None = None) -> Any:
        return await self._post(self._url("/authorise"), request, idempotency_key)

    async def authorise_3d(self, request: Any, idempotency_key: str | None = None) -> Any:
        """Complete a 3D Secure 1 authentication."""
        return await self._post(self._url("/authorise3d"), request, idempotency_key)

    async def authorise_3ds2(self, request: Any, idempotency_key: str | None = None) -> Any:
        """Complete a 3D Secure 2 authentication."""
        return await self._post(self._url("/authorise3ds2"), request, idempotency_key)


class ModificationsApi(_ClassicPaymentService):
    """Classic modifications keyed by ``originalReference``."""

    async def capture(self, request: Any, idempotency_key: str | None = None) -> Any:
        return await self._post(self._url("/capture"), request, idempotency_key)

    async def cancel(self, request: Any, idempotency_key: str | None = None) -> Any:
        return await self._post(self._url("/cancel"), request, idempotency_key)

    async def refund(self, request: Any, idempotency_key: str | None = None) -> Any:
        return await self._post(self._url("/refund"), request, idempotency_key)

    async def cancel_or_refund(self, request: Any, idempotency_key: str | None = None) -> Any:
        return await self._post(self._url("/cancelOrRefund"), request, idempotency_key)
