"""
Type definitions for the adyenkit SDK.

This module contains the value types shared by the transport core, the
endpoint services and the webhook pipeline.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, TypeAlias

from adyenkit.core.exceptions import ValidationError

# Type alias for flexible amount input
AmountType: TypeAlias = Decimal | int | str


class Currency(str, Enum):
    """ISO 4217 currency codes with their minor-unit exponents."""

    EUR = "EUR"
    USD = "USD"
    GBP = "GBP"
    JPY = "JPY"
    CHF = "CHF"
    CAD = "CAD"
    AUD = "AUD"
    NOK = "NOK"
    SEK = "SEK"
    DKK = "DKK"
    PLN = "PLN"
    CZK = "CZK"
    HUF = "HUF"
    BRL = "BRL"
    MXN = "MXN"
    SGD = "SGD"
    HKD = "HKD"
    NZD = "NZD"
    ZAR = "ZAR"
    CNY = "CNY"
    INR = "INR"
    KRW = "KRW"
    TRY = "TRY"
    THB = "THB"
    MYR = "MYR"
    IDR = "IDR"
    PHP = "PHP"
    VND = "VND"
    ISK = "ISK"
    BHD = "BHD"
    JOD = "JOD"
    KWD = "KWD"
    OMR = "OMR"
    TND = "TND"

    @classmethod
    def from_string(cls, value: str) -> Currency:
        value_upper = value.strip().upper()
        for member in cls:
            if member.value == value_upper:
                return member
        raise ValidationError(
            f"Unknown currency: {value}", field="currency", reason="unsupported currency code"
        )

    @property
    def decimal_places(self) -> int:
        if self in _ZERO_DECIMAL:
            return 0
        if self in _THREE_DECIMAL:
            return 3
        return 2

    @property
    def minor_unit_multiplier(self) -> int:
        return 10**self.decimal_places


_ZERO_DECIMAL = frozenset({Currency.JPY, Currency.KRW, Currency.VND, Currency.ISK})
_THREE_DECIMAL = frozenset(
    {Currency.BHD, Currency.JOD, Currency.KWD, Currency.OMR, Currency.TND}
)


@dataclass(frozen=True)
class Amount:
    """
    Monetary amount in minor units (e.g. cents).

    The currency is kept as the raw ISO code so that amounts in currencies
    outside :class:`Currency` (as seen in webhooks) survive unchanged.
    """

    value: int
    currency: str

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"Amount value must be an integer number of minor units, got {self.value!r}",
                field="amount.value",
            )
        if not self.currency:
            raise ValidationError("Amount currency is required", field="amount.currency")

    @classmethod
    def from_major_units(cls, amount: AmountType, currency: Currency | str) -> Amount:
        """
        Create an amount from major units (e.g. "10.50" EUR -> 1050).

        Raises:
            ValidationError: If the amount is negative, not a number, or has
                more decimals than the currency allows.
        """
        cur = currency if isinstance(currency, Currency) else Currency.from_string(currency)
        try:
            major = Decimal(str(amount))
        except InvalidOperation:
            raise ValidationError(f"Invalid amount: {amount!r}", field="amount") from None

        if major < 0:
            raise ValidationError("Amount cannot be negative", field="amount")

        minor = major * cur.minor_unit_multiplier
        if minor != minor.to_integral_value():
            raise ValidationError(
                f"{cur.value} allows at most {cur.decimal_places} decimal places",
                field="amount",
            )
        return cls(value=int(minor), currency=cur.value)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Amount:
        """Build from Adyen's ``{"value": ..., "currency": ...}`` object."""
        try:
            return cls(value=int(data["value"]), currency=str(data["currency"]))
        except (KeyError, TypeError, ValueError) as e:
            raise ValidationError(f"Invalid amount object: {data!r}", field="amount") from e

    @property
    def major_units(self) -> Decimal:
        try:
            multiplier = Currency.from_string(self.currency).minor_unit_multiplier
        except ValidationError:
            multiplier = 100
        return Decimal(self.value) / Decimal(multiplier)

    def is_zero(self) -> bool:
        return self.value == 0

    def add(self, other: Amount) -> Amount:
        self._check_currency(other, "add")
        return Amount(self.value + other.value, self.currency)

    def subtract(self, other: Amount) -> Amount:
        self._check_currency(other, "subtract")
        if other.value > self.value:
            raise ValidationError("Amount subtraction would be negative", field="amount")
        return Amount(self.value - other.value, self.currency)

    def _check_currency(self, other: Amount, op: str) -> None:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot {op} amounts with different currencies: "
                f"{self.currency} and {other.currency}",
                field="amount.currency",
            )

    def to_api_dict(self) -> dict[str, Any]:
        return {"value": self.value, "currency": self.currency}

    def __str__(self) -> str:
        return f"{self.major_units} {self.currency}"


class HttpMethod(str, Enum):
    """HTTP methods used by the Adyen APIs."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


@dataclass
class RequestContext:
    """
    One outbound API call.

    ``idempotency_key`` is sent as the ``Idempotency-Key`` header; together
    with ``reference`` it is also attached to every log record of the call.
    """

    method: HttpMethod
    url: str
    body: Any = None
    params: dict[str, Any] | None = None
    idempotency_key: str | None = None
    reference: str | None = None
    request_id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def __post_init__(self) -> None:
        if not isinstance(self.method, HttpMethod):
            self.method = HttpMethod(str(self.method).upper())

    @property
    def has_body(self) -> bool:
        return self.body is not None
