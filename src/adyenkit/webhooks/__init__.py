"""
Webhook parsing, HMAC validation and dispatch.
"""

from .dispatcher import ACCEPTED_RESPONSE, DispatchResult, DispatchStatus, WebhookDispatcher
from .parser import InvalidSignatureError, WebhookParser, parse_webhook
from .types import EventCode, NotificationItem, WebhookEnvelope
from .validation import HmacValidator

__all__ = [
    "ACCEPTED_RESPONSE",
    "DispatchResult",
    "DispatchStatus",
    "WebhookDispatcher",
    "InvalidSignatureError",
    "WebhookParser",
    "parse_webhook",
    "EventCode",
    "NotificationItem",
    "WebhookEnvelope",
    "HmacValidator",
]
