"""Tests for webhook HMAC validation."""

import base64

import pytest

from adyenkit.core.exceptions import InvalidHmacKeyError, ValidationError
from adyenkit.core.types import Amount
from adyenkit.webhooks.types import NotificationItem
from adyenkit.webhooks.validation import (
    HmacValidator,
    escape_value,
    notification_data_to_sign,
)

from conftest import TEST_HMAC_KEY

EXPECTED_SIGNATURE = "coqCmt/IZ4E3CzPvMY8zTjQVL5hYJUiBRg8UU+iCWo0="


def vendor_item(signature: str | None = EXPECTED_SIGNATURE, **overrides) -> NotificationItem:
    fields = {
        "psp_reference": "7914073381342284",
        "original_reference": None,
        "merchant_account_code": "TestMerchant",
        "merchant_reference": "TestPayment-1407325143704",
        "amount": Amount(1130, "EUR"),
        "event_code": "AUTHORISATION",
        "success": "true",
        "additional_data": {} if signature is None else {"hmacSignature": signature},
    }
    fields.update(overrides)
    return NotificationItem(**fields)


@pytest.fixture
def validator() -> HmacValidator:
    return HmacValidator(TEST_HMAC_KEY)


class TestHmacKey:
    """Tests for key decoding."""

    def test_valid_key(self, validator) -> None:
        assert TEST_HMAC_KEY not in repr(validator)
        assert TEST_HMAC_KEY not in str(validator)
        assert "[REDACTED]" in repr(validator)

    def test_lowercase_key_accepted(self) -> None:
        HmacValidator(TEST_HMAC_KEY.lower())

    @pytest.mark.parametrize(
        "key,reason",
        [
            ("", "empty"),
            ("invalid_hex_key", "invalid hex"),
            ("ABC", "invalid hex"),
            ("00" * 16, "wrong length"),
            ("00" * 33, "wrong length"),
        ],
    )
    def test_invalid_keys(self, key, reason) -> None:
        with pytest.raises(InvalidHmacKeyError) as exc_info:
            HmacValidator(key)

        assert exc_info.value.reason == reason
        assert isinstance(exc_info.value, ValidationError)


class TestNotificationSignature:
    """Tests for per-item signatures."""

    def test_signing_string(self) -> None:
        item = vendor_item(original_reference="original-123")

        assert notification_data_to_sign(item) == (
            "7914073381342284:original-123:TestMerchant:TestPayment-1407325143704"
            ":1130:EUR:AUTHORISATION:true"
        )

    def test_signing_string_missing_optional_fields(self) -> None:
        item = vendor_item(merchant_reference="")

        assert notification_data_to_sign(item) == (
            "7914073381342284::TestMerchant::1130:EUR:AUTHORISATION:true"
        )

    def test_vendor_test_vector(self, validator) -> None:
        item = vendor_item()

        assert validator.calculate_notification_signature(item) == EXPECTED_SIGNATURE
        assert validator.validate(item) is True

    def test_validation_is_deterministic(self, validator) -> None:
        item = vendor_item()

        assert [validator.validate(item) for _ in range(3)] == [True, True, True]

    def test_altered_signature_rejected(self, validator) -> None:
        altered = "d" + EXPECTED_SIGNATURE[1:]

        assert validator.validate(vendor_item(altered)) is False

    @pytest.mark.parametrize("replacement", ["1", "2", "3"])
    def test_non_canonical_base64_rejected(self, validator, replacement) -> None:
        # Same decoded bytes as the real signature, different text
        altered = EXPECTED_SIGNATURE[:-2] + replacement + "="
        assert base64.b64decode(altered) == base64.b64decode(EXPECTED_SIGNATURE)

        assert validator.validate(vendor_item(altered)) is False

    def test_payload_non_canonical_base64_rejected(self, validator) -> None:
        payload = '{"test": "data"}'
        signature = validator.calculate_signature(payload)
        last = signature[-2]
        flipped = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
        altered = signature[:-2] + flipped[flipped.index(last) ^ 1] + "="

        assert validator.validate_payload(payload, altered) is False

    @pytest.mark.parametrize(
        "field,value",
        [
            ("psp_reference", "7914073381342285"),
            ("merchant_account_code", "OtherMerchant"),
            ("amount", Amount(1131, "EUR")),
            ("event_code", "CAPTURE"),
            ("success", "false"),
        ],
    )
    def test_tampered_field_rejected(self, validator, field, value) -> None:
        assert validator.validate(vendor_item(**{field: value})) is False

    @pytest.mark.parametrize(
        "signature", [None, "", "not base64 at all!", "YWJj", "====", 12345]
    )
    def test_missing_or_malformed_signature_is_invalid(self, validator, signature) -> None:
        item = vendor_item(signature=None, additional_data={"hmacSignature": signature})

        assert validator.validate(item) is False

    def test_hex_digest_accepted(self, validator) -> None:
        hex_signature = base64.b64decode(EXPECTED_SIGNATURE).hex()

        assert validator.validate(vendor_item(hex_signature)) is True
        assert validator.validate(vendor_item(hex_signature.upper())) is False

    def test_other_key_rejects(self) -> None:
        other = HmacValidator("11" * 32)

        assert other.validate(vendor_item()) is False


class TestPayloadSignature:
    """Tests for whole-body signatures."""

    def test_payload_round_trip(self, validator) -> None:
        payload = '{"type":"balancePlatform.accountHolder.created","data":{"id":"AH1"}}'
        signature = validator.calculate_signature(payload)

        assert validator.validate_payload(payload, signature) is True
        assert validator.validate_payload(payload.encode(), signature) is True

    def test_payload_tampered(self, validator) -> None:
        payload = '{"test": "data"}'
        signature = validator.calculate_signature(payload)

        assert validator.validate_payload('{"test": "hacked"}', signature) is False
        assert validator.validate_payload(payload, None) is False


class TestKeyValueSignature:
    """Tests for sorted key-value signatures."""

    def test_escape_value(self) -> None:
        assert escape_value("test\\data:with:special\\chars") == (
            "test\\\\data\\:with\\:special\\\\chars"
        )

    def test_key_order_does_not_matter(self, validator) -> None:
        first = {"merchantReference": "Order:1", "paymentAmount": "1000", "currencyCode": "EUR"}
        second = dict(reversed(list(first.items())))

        assert validator.calculate_key_value_signature(
            first
        ) == validator.calculate_key_value_signature(second)

    def test_signature_matches_escaped_signing_string(self, validator) -> None:
        data = {"b": "x:y", "a": "1"}

        expected = validator.calculate_signature("a:b:1:x\\:y")

        assert validator.calculate_key_value_signature(data) == expected
        assert validator.validate_key_value_pairs(data, expected) is True
        assert validator.validate_key_value_pairs({"b": "x:y", "a": "2"}, expected) is False
