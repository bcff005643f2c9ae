"""
Webhook notification types.

Adyen delivers standard notifications as a batch: a ``live`` flag plus an
ordered list of ``NotificationRequestItem`` objects. Items must be processed
in the order they arrive.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from adyenkit.core.types import Amount

HMAC_SIGNATURE_KEY = "hmacSignature"


class EventCode(str, Enum):
    """Event codes of standard (classic) notifications."""

    ACH_NOTIFICATION_OF_CHANGE = "ACH_NOTIFICATION_OF_CHANGE"
    AUTHORISATION = "AUTHORISATION"
    AUTHORISATION_ADJUSTMENT = "AUTHORISATION_ADJUSTMENT"
    AUTORESCUE = "AUTORESCUE"
    AUTORESCUE_NEXT_ATTEMPT = "AUTORESCUE_NEXT_ATTEMPT"
    CANCELLATION = "CANCELLATION"
    CANCEL_AUTORESCUE = "CANCEL_AUTORESCUE"
    CANCEL_OR_REFUND = "CANCEL_OR_REFUND"
    CAPTURE = "CAPTURE"
    CAPTURE_FAILED = "CAPTURE_FAILED"
    CHARGEBACK = "CHARGEBACK"
    CHARGEBACK_REVERSED = "CHARGEBACK_REVERSED"
    EXPIRE = "EXPIRE"
    ISSUER_COMMENTS = "ISSUER_COMMENTS"
    HANDLED_EXTERNALLY = "HANDLED_EXTERNALLY"
    MANUAL_REVIEW_ACCEPT = "MANUAL_REVIEW_ACCEPT"
    MANUAL_REVIEW_REJECT = "MANUAL_REVIEW_REJECT"
    NOTIFICATION_OF_CHARGEBACK = "NOTIFICATION_OF_CHARGEBACK"
    NOTIFICATION_OF_FRAUD = "NOTIFICATION_OF_FRAUD"
    OFFER_CLOSED = "OFFER_CLOSED"
    PAIDOUT_REVERSED = "PAIDOUT_REVERSED"
    PAYOUT_DECLINE = "PAYOUT_DECLINE"
    PAYOUT_EXPIRE = "PAYOUT_EXPIRE"
    PAYOUT_THIRDPARTY = "PAYOUT_THIRDPARTY"
    POSTPONED_REFUND = "POSTPONED_REFUND"
    PREARBITRATION_LOST = "PREARBITRATION_LOST"
    PREARBITRATION_WON = "PREARBITRATION_WON"
    RECURRING_CONTRACT = "RECURRING_CONTRACT"
    REFUND = "REFUND"
    REFUND_FAILED = "REFUND_FAILED"
    REFUND_WITH_DATA = "REFUND_WITH_DATA"
    REFUNDED_REVERSED = "REFUNDED_REVERSED"
    REPORT_AVAILABLE = "REPORT_AVAILABLE"
    REQUEST_FOR_INFORMATION = "REQUEST_FOR_INFORMATION"
    SECOND_CHARGEBACK = "SECOND_CHARGEBACK"
    TECHNICAL_CANCEL = "TECHNICAL_CANCEL"
    VOID_PENDING_REFUND = "VOID_PENDING_REFUND"
    ORDER_CLOSED = "ORDER_CLOSED"
    ORDER_OPENED = "ORDER_OPENED"

    @classmethod
    def parse(cls, value: str) -> EventCode | None:
        """Matching member, or None for codes this SDK does not know yet."""
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(frozen=True)
class NotificationItem:
    """
    A single ``NotificationRequestItem``.

    ``event_code`` and ``success`` are kept verbatim as received because the
    HMAC signing string is built from the exact wire values.
    """

    psp_reference: str
    event_code: str
    merchant_account_code: str
    amount: Amount
    success: str = "false"
    merchant_reference: str = ""
    original_reference: str | None = None
    event_date: str | None = None
    payment_method: str | None = None
    reason: str | None = None
    operations: tuple[str, ...] = ()
    additional_data: dict[str, Any] = field(default_factory=dict)
    raw: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def event(self) -> EventCode | None:
        return EventCode.parse(self.event_code)

    @property
    def is_success(self) -> bool:
        return self.success.lower() == "true"

    @property
    def hmac_signature(self) -> str | None:
        signature = self.additional_data.get(HMAC_SIGNATURE_KEY)
        return signature if isinstance(signature, str) else None

    def get_additional_data(self, key: str, default: Any = None) -> Any:
        return self.additional_data.get(key, default)


@dataclass(frozen=True)
class WebhookEnvelope:
    """
    A decoded notification batch.

    Iterating yields items in arrival order; every ``iter()`` call starts a
    fresh pass over the same items.
    """

    live: bool
    items: tuple[NotificationItem, ...] = ()

    @property
    def is_live(self) -> bool:
        return self.live

    def __iter__(self) -> Iterator[NotificationItem]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> NotificationItem:
        return self.items[index]

    def by_event_code(self) -> dict[str, list[NotificationItem]]:
        """Group items by event code, keeping arrival order inside each group."""
        groups: dict[str, list[NotificationItem]] = {}
        for item in self.items:
            groups.setdefault(item.event_code, []).append(item)
        return groups
