"""Checkout API (v71)."""

from __future__ import annotations

from typing import Any

from adyenkit.api.base import ApiService, _require


class CheckoutApi(ApiService):
    """
    Adyen Checkout API.

    Online payments, sessions, payment links, orders and the
    PSP-reference based modification endpoints.

    Example:
        >>> request = (
        ...     PaymentRequest.builder()
        ...     .amount(Amount.from_major_units("10.00", Currency.EUR))
        ...     .merchant_account("YourMerchantAccount")
        ...     .reference("Order-12345")
        ...     .payment_method({"type": "scheme", "encryptedCardNumber": "..."})
        ...     .build()
        ... )
        >>> result = await client.checkout.payments(request, idempotency_key="order-12345")
    """

    version = "v71"

    def _base_url(self) -> str:
        return self.environment.checkout_api_url()

    # ==================== Payments ====================

    async def payments(self, request: Any, idempotency_key: str | None = None) -> Any:
        """Start a payment (``POST /payments``)."""
        return await self._post(self._url("/payments"), request, idempotency_key)

    async def payment_details(self, request: Any, idempotency_key: str | None = None) -> Any:
        """Submit additional details, e.g. after a 3DS redirect."""
        return await self._post(self._url("/payments/details"), request, idempotency_key)

    async def payment_methods(self, request: Any) -> Any:
        return await self._post(self._url("/paymentMethods"), request)

    async def payment_methods_balance(self, request: Any) -> Any:
        return await self._post(self._url("/paymentMethods/balance"), request)

    async def card_details(self, request: Any) -> Any:
        return await self._post(self._url("/cardDetails"), request)

    # ==================== Sessions ====================

    async def sessions(self, request: Any, idempotency_key: str | None = None) -> Any:
        """Create a Drop-in/Components payment session."""
        return await self._post(self._url("/sessions"), request, idempotency_key)

    async def get_session_result(self, session_id: str, session_result: str) -> Any:
        return await self._get(
            self._url("/sessions", session_id),
            params={"sessionResult": _require(session_result, "session_result")},
        )

    # ==================== Modifications ====================

    async def capture(
        self, payment_psp_reference: str, request: Any, idempotency_key: str | None = None
    ) -> Any:
        return await self._post(
            self._url("/payments", payment_psp_reference, "/captures"), request, idempotency_key
        )

    async def refund(
        self, payment_psp_reference: str, request: Any, idempotency_key: str | None = None
    ) -> Any:
        return await self._post(
            self._url("/payments", payment_psp_reference, "/refunds"), request, idempotency_key
        )

    async def cancel(
        self, payment_psp_reference: str, request: Any, idempotency_key: str | None = None
    ) -> Any:
        return await self._post(
            self._url("/payments", payment_psp_reference, "/cancels"), request, idempotency_key
        )

    async def cancel_by_reference(self, request: Any, idempotency_key: str | None = None) -> Any:
        """Cancel using your own merchant reference instead of the PSP reference."""
        return await self._post(self._url("/cancels"), request, idempotency_key)

    async def reverse(
        self, payment_psp_reference: str, request: Any, idempotency_key: str | None = None
    ) -> Any:
        return await self._post(
            self._url("/payments", payment_psp_reference, "/reversals"), request, idempotency_key
        )

    async def update_amount(
        self, payment_psp_reference: str, request: Any, idempotency_key: str | None = None
    ) -> Any:
        return await self._post(
            self._url("/payments", payment_psp_reference, "/amountUpdates"),
            request,
            idempotency_key,
        )

    # ==================== Payment links ====================

    async def create_payment_link(self, request: Any, idempotency_key: str | None = None) -> Any:
        return await self._post(self._url("/paymentLinks"), request, idempotency_key)

    async def get_payment_link(self, link_id: str) -> Any:
        return await self._get(self._url("/paymentLinks", link_id))

    # ==================== Orders ====================

    async def create_order(self, request: Any, idempotency_key: str | None = None) -> Any:
        return await self._post(self._url("/orders"), request, idempotency_key)

    async def cancel_order(self, request: Any) -> Any:
        return await self._post(self._url("/orders/cancel"), request)

    # ==================== Stored payment methods ====================

    async def list_stored_payment_methods(
        self, merchant_account: str, shopper_reference: str
    ) -> Any:
        return await self._get(
            self._url("/storedPaymentMethods"),
            params={
                "merchantAccount": _require(merchant_account, "merchant_account"),
                "shopperReference": _require(shopper_reference, "shopper_reference"),
            },
        )

    async def delete_stored_payment_method(
        self, stored_payment_method_id: str, merchant_account: str, shopper_reference: str
    ) -> Any:
        return await self._delete(
            self._url("/storedPaymentMethods", stored_payment_method_id),
            params={
                "merchantAccount": _require(merchant_account, "merchant_account"),
                "shopperReference": _require(shopper_reference, "shopper_reference"),
            },
        )
