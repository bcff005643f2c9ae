"""
Event dispatch for validated notification items.

Handlers run one at a time, in the order items appear in the batch, so that
side effects follow the same order Adyen sent them in.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from adyenkit.core.logging import get_logger
from adyenkit.webhooks.types import EventCode, NotificationItem, WebhookEnvelope
from adyenkit.webhooks.validation import HmacValidator

# Body Adyen expects in the HTTP response to a notification request
ACCEPTED_RESPONSE = "[accepted]"

Handler = Callable[[NotificationItem], Any]

logger = get_logger("webhooks.dispatcher")


class DispatchStatus(str, Enum):
    HANDLED = "handled"
    UNHANDLED = "unhandled"
    INVALID_SIGNATURE = "invalid_signature"


@dataclass(frozen=True)
class DispatchResult:
    """Outcome for one item, at the same position as the item in its batch."""

    item: NotificationItem
    status: DispatchStatus
    result: Any = None

    @property
    def is_valid(self) -> bool:
        return self.status != DispatchStatus.INVALID_SIGNATURE

    @property
    def handled(self) -> bool:
        return self.status == DispatchStatus.HANDLED


class WebhookDispatcher:
    """
    Routes notification items to handlers by event code.

    Example:
        >>> dispatcher = WebhookDispatcher(HmacValidator(hmac_key))
        >>> @dispatcher.on(EventCode.AUTHORISATION)
        ... async def on_authorisation(item):
        ...     await orders.mark_paid(item.merchant_reference)
        >>> results = await dispatcher.dispatch(parse_webhook(body))
        >>> return ACCEPTED_RESPONSE
    """

    def __init__(self, validator: HmacValidator | None = None) -> None:
        """
        Initialize dispatcher.

        Args:
            validator: When given, items failing HMAC validation are reported
                as invalid and never reach a handler.
        """
        self._validator = validator
        self._handlers: dict[str, list[Handler]] = {}
        self._default: Handler | None = None

    def register(self, event_code: EventCode | str, handler: Handler) -> None:
        code = event_code.value if isinstance(event_code, EventCode) else str(event_code)
        self._handlers.setdefault(code, []).append(handler)

    def on(self, event_code: EventCode | str) -> Callable[[Handler], Handler]:
        """Decorator form of :meth:`register`."""

        def decorator(handler: Handler) -> Handler:
            self.register(event_code, handler)
            return handler

        return decorator

    def set_default(self, handler: Handler | None) -> None:
        """Handler for event codes with no specific registration."""
        self._default = handler

    def handlers_for(self, event_code: str) -> list[Handler]:
        handlers = self._handlers.get(event_code)
        if handlers:
            return list(handlers)
        return [self._default] if self._default else []

    async def dispatch(self, envelope: WebhookEnvelope) -> list[DispatchResult]:
        """
        Validate and handle every item of a batch, in order.

        Handler exceptions propagate; items after the failing one are not
        processed, so the batch can be redelivered as a whole.
        """
        results: list[DispatchResult] = []
        for position, item in enumerate(envelope):
            if self._validator is not None and not self._validator.validate(item):
                logger.warning(
                    f"Rejected notification {position} ({item.event_code}, "
                    f"pspReference={item.psp_reference}): invalid HMAC signature"
                )
                results.append(DispatchResult(item, DispatchStatus.INVALID_SIGNATURE))
                continue

            handlers = self.handlers_for(item.event_code)
            if not handlers:
                logger.debug(f"No handler for {item.event_code} ({item.psp_reference})")
                results.append(DispatchResult(item, DispatchStatus.UNHANDLED))
                continue

            value = None
            for handler in handlers:
                value = handler(item)
                if inspect.isawaitable(value):
                    value = await value
            results.append(DispatchResult(item, DispatchStatus.HANDLED, value))
        return results
