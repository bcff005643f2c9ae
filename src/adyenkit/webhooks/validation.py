"""
HMAC signature validation for Adyen webhooks.

Adyen signs every standard notification item with HMAC-SHA256 using the
hex-encoded key configured in the Customer Area. The signature travels in
``additionalData.hmacSignature`` as Base64.
"""

from __future__ import annotations

import base64
import re
from collections.abc import Mapping

from cryptography.hazmat.primitives import constant_time, hashes
from cryptography.hazmat.primitives import hmac as crypto_hmac

from adyenkit.core.exceptions import InvalidHmacKeyError
from adyenkit.core.logging import REDACTED
from adyenkit.webhooks.types import NotificationItem

HMAC_KEY_BYTES = 32
_DIGEST_BYTES = 32
_HEX_RE = re.compile(r"^[0-9a-fA-F]+$")
_LOWER_HEX_RE = re.compile(r"^[0-9a-f]+$")


def escape_value(value: str) -> str:
    """Escape ``\\`` and ``:`` for key-value signing strings."""
    return value.replace("\\", "\\\\").replace(":", "\\:")


def notification_data_to_sign(item: NotificationItem) -> str:
    """
    Canonical signing string of a notification item.

    ``pspReference:originalReference:merchantAccountCode:merchantReference:value:currency:eventCode:success``
    with missing optional fields as empty strings.
    """
    return ":".join(
        [
            item.psp_reference,
            item.original_reference or "",
            item.merchant_account_code,
            item.merchant_reference or "",
            str(item.amount.value),
            item.amount.currency,
            item.event_code,
            item.success,
        ]
    )


def _encode_like(digest: bytes, signature: str) -> str:
    """Canonical encoding of ``digest`` in the form ``signature`` uses."""
    # Lowercase hex digests are accepted alongside the Base64 form Adyen sends
    if len(signature) == _DIGEST_BYTES * 2 and _LOWER_HEX_RE.match(signature):
        return digest.hex()
    return base64.b64encode(digest).decode("ascii")


class HmacValidator:
    """
    Verifies notification signatures with a fixed secret key.

    Immutable after construction and safe to share between threads and tasks.

    Example:
        >>> validator = HmacValidator(os.environ["ADYEN_HMAC_KEY"])
        >>> for item in envelope:
        ...     if not validator.validate(item):
        ...         continue
    """

    __slots__ = ("_key",)

    def __init__(self, hex_key: str) -> None:
        """
        Decode the secret key.

        Raises:
            InvalidHmacKeyError: If the key is not a 64-character hex string.
        """
        if not isinstance(hex_key, str) or not hex_key.strip():
            raise InvalidHmacKeyError(
                "HMAC key is required", field="hmac_key", reason="empty"
            )
        cleaned = hex_key.strip()
        if not _HEX_RE.match(cleaned) or len(cleaned) % 2:
            raise InvalidHmacKeyError(
                "HMAC key must be a hex string", field="hmac_key", reason="invalid hex"
            )
        key = bytes.fromhex(cleaned)
        if len(key) != HMAC_KEY_BYTES:
            raise InvalidHmacKeyError(
                f"HMAC key must decode to {HMAC_KEY_BYTES} bytes, got {len(key)}",
                field="hmac_key",
                reason="wrong length",
            )
        self._key = key

    def __repr__(self) -> str:
        return f"HmacValidator(key={REDACTED})"

    __str__ = __repr__

    def _mac(self) -> crypto_hmac.HMAC:
        return crypto_hmac.HMAC(self._key, hashes.SHA256())

    def _digest(self, data: str | bytes) -> bytes:
        mac = self._mac()
        mac.update(data.encode("utf-8") if isinstance(data, str) else data)
        return mac.finalize()

    def _verify(self, data: str | bytes, signature: object) -> bool:
        if not isinstance(signature, str) or not signature.strip():
            return False
        supplied = signature.strip()
        expected = _encode_like(self._digest(data), supplied)
        # Compared as encoded text so that non-canonical Base64 never matches
        return constant_time.bytes_eq(expected.encode("ascii"), supplied.encode("utf-8"))

    def calculate_signature(self, data: str | bytes) -> str:
        """Base64 HMAC-SHA256 of ``data``."""
        return base64.b64encode(self._digest(data)).decode("ascii")

    # ==================== Standard notifications ====================

    def calculate_notification_signature(self, item: NotificationItem) -> str:
        return self.calculate_signature(notification_data_to_sign(item))

    def validate(self, item: NotificationItem) -> bool:
        """
        Check the item's ``hmacSignature`` against its signing string.

        Never raises: a missing or malformed signature is simply invalid.
        """
        return self._verify(notification_data_to_sign(item), item.hmac_signature)

    # ==================== Raw payloads ====================

    def validate_payload(self, payload: str | bytes, signature: str | None) -> bool:
        """
        Check a raw request body against an ``HmacSignature`` header value.

        Used by Balance Platform and Management webhooks, which sign the whole
        body instead of each item.
        """
        return self._verify(payload, signature)

    # ==================== Key-value pairs ====================

    def calculate_key_value_signature(self, data: Mapping[str, str]) -> str:
        """
        Signature over sorted key-value pairs.

        The signing string is the escaped keys joined by ``:``, a ``:``, then
        the escaped values in the same order.
        """
        return self.calculate_signature(_key_value_data_to_sign(data))

    def validate_key_value_pairs(self, data: Mapping[str, str], signature: str | None) -> bool:
        return self._verify(_key_value_data_to_sign(data), signature)


def _key_value_data_to_sign(data: Mapping[str, str]) -> str:
    keys = sorted(data)
    escaped_keys = ":".join(escape_value(k) for k in keys)
    escaped_values = ":".join(escape_value(str(data[k])) for k in keys)
    return f"{escaped_keys}:{escaped_values}"
