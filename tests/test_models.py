"""Tests for request builders."""

import pytest

from adyenkit.api.models import ModificationRequest, PaymentRequest
from adyenkit.core.exceptions import ValidationError
from adyenkit.core.types import Amount, Currency


def full_builder():
    return (
        PaymentRequest.builder()
        .amount(Amount.from_major_units("25.99", Currency.USD))
        .merchant_account("TestMerchant")
        .reference("Order-42")
        .card("enc_number", "enc_month", "enc_year", "enc_cvc")
    )


class TestPaymentRequestBuilder:
    """Tests for PaymentRequest.builder()."""

    def test_build_and_serialize(self) -> None:
        request = (
            full_builder()
            .shopper_reference("shopper-7")
            .country_code("US")
            .capture_delay_hours(0)
            .extra("shopperInteraction", "Ecommerce")
            .build()
        )

        assert request.to_api_dict() == {
            "amount": {"value": 2599, "currency": "USD"},
            "merchantAccount": "TestMerchant",
            "reference": "Order-42",
            "paymentMethod": {
                "type": "scheme",
                "encryptedCardNumber": "enc_number",
                "encryptedExpiryMonth": "enc_month",
                "encryptedExpiryYear": "enc_year",
                "encryptedSecurityCode": "enc_cvc",
            },
            "shopperReference": "shopper-7",
            "countryCode": "US",
            "captureDelayHours": 0,
            "shopperInteraction": "Ecommerce",
        }

    @pytest.mark.parametrize(
        "missing", ["amount", "merchant_account", "reference", "payment_method"]
    )
    def test_missing_required_field(self, missing) -> None:
        builder = PaymentRequest.builder()
        values = {
            "amount": Amount(100, "EUR"),
            "merchant_account": "TestMerchant",
            "reference": "Order-1",
            "payment_method": {"type": "ideal"},
        }
        for name, value in values.items():
            if name != missing:
                getattr(builder, name)(value)

        with pytest.raises(ValidationError) as exc_info:
            builder.build()

        assert exc_info.value.field == missing

    def test_first_missing_field_reported(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            PaymentRequest.builder().reference("Order-1").build()

        assert exc_info.value.field == "amount"

    def test_amount_must_be_amount(self) -> None:
        builder = full_builder().amount(1000)  # type: ignore[arg-type]

        with pytest.raises(ValidationError, match="must be an Amount"):
            builder.build()


class TestModificationRequestBuilder:
    """Tests for ModificationRequest.builder()."""

    def test_capture_request(self) -> None:
        request = (
            ModificationRequest.builder()
            .merchant_account("TestMerchant")
            .amount(Amount(1000, "EUR"))
            .reference("capture-1")
            .build()
        )

        assert request.to_api_dict() == {
            "merchantAccount": "TestMerchant",
            "amount": {"value": 1000, "currency": "EUR"},
            "reference": "capture-1",
        }

    def test_missing_merchant_account(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            ModificationRequest.builder().amount(Amount(1000, "EUR")).build()

        assert exc_info.value.field == "merchant_account"

    def test_missing_amount(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            ModificationRequest.builder().merchant_account("TestMerchant").build()

        assert exc_info.value.field == "amount"

    def test_cancel_without_amount(self) -> None:
        request = ModificationRequest.builder().merchant_account("TestMerchant").build_without_amount()

        assert request.to_api_dict() == {"merchantAccount": "TestMerchant"}
