"""
Webhook Parser Infrastructure.
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from typing import Any

from adyenkit.core.exceptions import SerializationError, ValidationError
from adyenkit.core.logging import get_logger
from adyenkit.core.types import Amount
from adyenkit.webhooks.types import NotificationItem, WebhookEnvelope
from adyenkit.webhooks.validation import HmacValidator

HMAC_SIGNATURE_HEADER = "HmacSignature"
HMAC_KEY_ENV = "ADYEN_HMAC_KEY"

_REQUIRED_ITEM_FIELDS = ("pspReference", "eventCode", "merchantAccountCode", "amount")

logger = get_logger("webhooks")


class InvalidSignatureError(ValidationError):
    """Raised when a webhook body signature does not match."""

    pass


def _decode(raw: str | bytes | Mapping[str, Any]) -> Mapping[str, Any]:
    if isinstance(raw, Mapping):
        return raw
    try:
        text = raw.decode("utf-8") if isinstance(raw, bytes) else raw
        data = json.loads(text)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise SerializationError(f"Invalid JSON payload: {e}", cause=e) from e
    if not isinstance(data, dict):
        raise SerializationError(
            f"Webhook payload must be a JSON object, got {type(data).__name__}"
        )
    return data


def _optional_str(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _parse_live(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() == "true"


def _parse_item(wrapper: Any, index: int) -> NotificationItem:
    if not isinstance(wrapper, Mapping) or not isinstance(
        wrapper.get("NotificationRequestItem"), Mapping
    ):
        raise SerializationError(
            f"notificationItems[{index}] is missing NotificationRequestItem",
            details={"index": index},
        )
    data = dict(wrapper["NotificationRequestItem"])

    missing = [name for name in _REQUIRED_ITEM_FIELDS if data.get(name) in (None, "")]
    if missing:
        raise SerializationError(
            f"notificationItems[{index}] is missing required field(s): {', '.join(missing)}",
            details={"index": index, "missing": missing},
        )

    try:
        amount = Amount.from_api(data["amount"])
    except ValidationError as e:
        raise SerializationError(
            f"notificationItems[{index}] has an invalid amount", cause=e
        ) from e

    additional_data = data.get("additionalData") or {}
    if not isinstance(additional_data, Mapping):
        raise SerializationError(
            f"notificationItems[{index}].additionalData must be an object",
            details={"index": index},
        )

    success = data.get("success", "false")
    if isinstance(success, bool):
        success = "true" if success else "false"

    operations = data.get("operations") or []
    if not isinstance(operations, list):
        raise SerializationError(
            f"notificationItems[{index}].operations must be a list",
            details={"index": index},
        )

    return NotificationItem(
        psp_reference=str(data["pspReference"]),
        event_code=str(data["eventCode"]),
        merchant_account_code=str(data["merchantAccountCode"]),
        amount=amount,
        success=str(success),
        merchant_reference=str(data.get("merchantReference") or ""),
        original_reference=_optional_str(data.get("originalReference")),
        event_date=_optional_str(data.get("eventDate")),
        payment_method=_optional_str(data.get("paymentMethod")),
        reason=_optional_str(data.get("reason")),
        operations=tuple(str(op) for op in operations),
        additional_data=dict(additional_data),
        raw=data,
    )


def parse_webhook(raw: str | bytes | Mapping[str, Any]) -> WebhookEnvelope:
    """
    Decode a standard notification batch.

    Args:
        raw: Request body as text/bytes, or an already decoded JSON object

    Returns:
        WebhookEnvelope with the items in arrival order

    Raises:
        SerializationError: If the payload is not a well-formed notification batch
    """
    data = _decode(raw)
    wrappers = data.get("notificationItems")
    if not isinstance(wrappers, list):
        raise SerializationError("Missing or invalid 'notificationItems' in payload")

    items = tuple(_parse_item(wrapper, i) for i, wrapper in enumerate(wrappers))
    return WebhookEnvelope(live=_parse_live(data.get("live", False)), items=items)


class WebhookParser:
    """
    Framework-agnostic webhook parser.

    Decodes notification batches and, when a key is configured, checks
    body-level ``HmacSignature`` headers. Does NOT handle HTTP transport -
    that is the application's responsibility.
    """

    def __init__(self, hmac_key: str | None = None) -> None:
        """
        Initialize parser.

        Args:
            hmac_key: Optional hex HMAC key from the Customer Area.

        Raises:
            InvalidHmacKeyError: If the key cannot be decoded.
        """
        self.validator = HmacValidator(hmac_key) if hmac_key else None

    @classmethod
    def from_env(cls) -> WebhookParser:
        """Create a parser using ``ADYEN_HMAC_KEY`` when it is set."""
        return cls(os.environ.get(HMAC_KEY_ENV) or None)

    def parse(self, raw: str | bytes | Mapping[str, Any]) -> WebhookEnvelope:
        return parse_webhook(raw)

    def verify_signature(self, payload: str | bytes, headers: Mapping[str, str]) -> bool:
        """
        Verify the body-level signature, if the request carries one.

        Returns:
            True if there is nothing to check or the signature matches

        Raises:
            InvalidSignatureError: If the ``HmacSignature`` header does not match
        """
        signature = _header(headers, HMAC_SIGNATURE_HEADER)
        if not self.validator or signature is None:
            return True
        if not self.validator.validate_payload(payload, signature):
            logger.warning("Webhook body signature mismatch")
            raise InvalidSignatureError(
                "Signature mismatch", field=HMAC_SIGNATURE_HEADER, reason="mismatch"
            )
        return True

    def handle(
        self,
        payload: str | bytes | Mapping[str, Any],
        headers: Mapping[str, str] | None = None,
    ) -> WebhookEnvelope:
        """
        Validate and parse a webhook request.

        Per-item signatures are not checked here; use
        :class:`~adyenkit.webhooks.dispatcher.WebhookDispatcher` or
        :meth:`HmacValidator.validate` for that.

        Args:
            payload: Raw body (bytes/str) or parsed dict
            headers: Request headers

        Raises:
            InvalidSignatureError: If a body signature header is present and invalid
            SerializationError: If payload malformed
        """
        if isinstance(payload, (str, bytes)):
            self.verify_signature(payload, headers or {})
        envelope = parse_webhook(payload)
        logger.debug(f"Parsed webhook batch with {len(envelope)} item(s), live={envelope.live}")
        return envelope


def _header(headers: Mapping[str, str], name: str) -> str | None:
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None
