"""
Request models with validating builders.

Only the most common request shapes are modelled; any endpoint also accepts
a plain dict in Adyen's camelCase wire format.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from adyenkit.core.exceptions import ValidationError
from adyenkit.core.types import Amount


def _missing(field_name: str) -> ValidationError:
    return ValidationError(f"{field_name} is required", field=field_name, reason="missing")


@dataclass(frozen=True)
class PaymentRequest:
    """Checkout ``/payments`` request."""

    amount: Amount
    merchant_account: str
    reference: str
    payment_method: dict[str, Any]
    return_url: str | None = None
    shopper_reference: str | None = None
    shopper_email: str | None = None
    country_code: str | None = None
    capture_delay_hours: int | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def builder(cls) -> PaymentRequestBuilder:
        return PaymentRequestBuilder()

    def to_api_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "amount": self.amount.to_api_dict(),
            "merchantAccount": self.merchant_account,
            "reference": self.reference,
            "paymentMethod": dict(self.payment_method),
        }
        optional = {
            "returnUrl": self.return_url,
            "shopperReference": self.shopper_reference,
            "shopperEmail": self.shopper_email,
            "countryCode": self.country_code,
            "captureDelayHours": self.capture_delay_hours,
        }
        data.update({k: v for k, v in optional.items() if v is not None})
        data.update(self.extra)
        return data


class PaymentRequestBuilder:
    """
    Fluent builder for :class:`PaymentRequest`.

    ``build()`` raises ValidationError naming the first missing field.
    """

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}
        self._extra: dict[str, Any] = {}

    def amount(self, amount: Amount) -> PaymentRequestBuilder:
        self._values["amount"] = amount
        return self

    def merchant_account(self, merchant_account: str) -> PaymentRequestBuilder:
        self._values["merchant_account"] = merchant_account
        return self

    def reference(self, reference: str) -> PaymentRequestBuilder:
        self._values["reference"] = reference
        return self

    def payment_method(self, payment_method: dict[str, Any]) -> PaymentRequestBuilder:
        self._values["payment_method"] = payment_method
        return self

    def card(
        self,
        encrypted_card_number: str,
        encrypted_expiry_month: str,
        encrypted_expiry_year: str,
        encrypted_security_code: str | None = None,
    ) -> PaymentRequestBuilder:
        method = {
            "type": "scheme",
            "encryptedCardNumber": encrypted_card_number,
            "encryptedExpiryMonth": encrypted_expiry_month,
            "encryptedExpiryYear": encrypted_expiry_year,
        }
        if encrypted_security_code:
            method["encryptedSecurityCode"] = encrypted_security_code
        return self.payment_method(method)

    def return_url(self, return_url: str) -> PaymentRequestBuilder:
        self._values["return_url"] = return_url
        return self

    def shopper_reference(self, shopper_reference: str) -> PaymentRequestBuilder:
        self._values["shopper_reference"] = shopper_reference
        return self

    def shopper_email(self, shopper_email: str) -> PaymentRequestBuilder:
        self._values["shopper_email"] = shopper_email
        return self

    def country_code(self, country_code: str) -> PaymentRequestBuilder:
        self._values["country_code"] = country_code
        return self

    def capture_delay_hours(self, hours: int) -> PaymentRequestBuilder:
        self._values["capture_delay_hours"] = hours
        return self

    def extra(self, key: str, value: Any) -> PaymentRequestBuilder:
        """Pass through any other wire field unchanged."""
        self._extra[key] = value
        return self

    def build(self) -> PaymentRequest:
        for name in ("amount", "merchant_account", "reference", "payment_method"):
            if not self._values.get(name):
                raise _missing(name)
        if not isinstance(self._values["amount"], Amount):
            raise ValidationError("amount must be an Amount", field="amount", reason="type")
        return PaymentRequest(extra=dict(self._extra), **self._values)


@dataclass(frozen=True)
class ModificationRequest:
    """Body for captures, refunds, reversals and cancels on a payment."""

    merchant_account: str
    amount: Amount | None = None
    reference: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def builder(cls) -> ModificationRequestBuilder:
        return ModificationRequestBuilder()

    def to_api_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"merchantAccount": self.merchant_account}
        if self.amount is not None:
            data["amount"] = self.amount.to_api_dict()
        if self.reference:
            data["reference"] = self.reference
        data.update(self.extra)
        return data


class ModificationRequestBuilder:
    """
    Fluent builder for :class:`ModificationRequest`.

    Use ``build()`` for amount-bearing modifications (capture, refund) and
    ``build_without_amount()`` for cancels and reversals.
    """

    def __init__(self) -> None:
        self._merchant_account: str | None = None
        self._amount: Amount | None = None
        self._reference: str | None = None
        self._extra: dict[str, Any] = {}

    def merchant_account(self, merchant_account: str) -> ModificationRequestBuilder:
        self._merchant_account = merchant_account
        return self

    def amount(self, amount: Amount) -> ModificationRequestBuilder:
        self._amount = amount
        return self

    def reference(self, reference: str) -> ModificationRequestBuilder:
        self._reference = reference
        return self

    def extra(self, key: str, value: Any) -> ModificationRequestBuilder:
        self._extra[key] = value
        return self

    def build(self) -> ModificationRequest:
        if self._merchant_account and self._amount is None:
            raise _missing("amount")
        return self.build_without_amount()

    def build_without_amount(self) -> ModificationRequest:
        if not self._merchant_account:
            raise _missing("merchant_account")
        return ModificationRequest(
            merchant_account=self._merchant_account,
            amount=self._amount,
            reference=self._reference,
            extra=dict(self._extra),
        )
