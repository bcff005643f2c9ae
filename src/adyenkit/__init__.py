"""
adyenkit - Async Python client for the Adyen payment APIs

Typed requests, authenticated HTTPS with bounded retries, and HMAC-verified
webhooks.

Usage:
    >>> from adyenkit import AdyenClient, Amount, Config, Currency, PaymentRequest
    >>>
    >>> config = Config.builder().api_key("AQE...").build()
    >>> async with AdyenClient(config) as adyen:
    ...     request = (
    ...         PaymentRequest.builder()
    ...         .amount(Amount.from_major_units("10.00", Currency.EUR))
    ...         .merchant_account("YourMerchantAccount")
    ...         .reference("Order-12345")
    ...         .payment_method({"type": "scheme", "encryptedCardNumber": "..."})
    ...         .build()
    ...     )
    ...     result = await adyen.checkout.payments(request)

Webhooks:
    >>> from adyenkit import HmacValidator, parse_webhook
    >>> validator = HmacValidator(hmac_key_hex)
    >>> for item in parse_webhook(body):
    ...     if validator.validate(item):
    ...         ...
"""

from adyenkit.api.models import (
    ModificationRequest,
    ModificationRequestBuilder,
    PaymentRequest,
    PaymentRequestBuilder,
)
from adyenkit.client import AdyenClient
from adyenkit.core.auth import ApiKeyCredentials, BasicAuthCredentials, Credentials
from adyenkit.core.config import SDK_VERSION, Config, ConfigBuilder
from adyenkit.core.environment import Environment
from adyenkit.core.exceptions import (
    AdyenError,
    ApiError,
    ConfigurationError,
    InvalidHmacKeyError,
    NetworkError,
    SerializationError,
    ValidationError,
)
from adyenkit.core.http_client import HttpClient
from adyenkit.core.types import Amount, Currency, HttpMethod, RequestContext
from adyenkit.resilience.retry import RetryPolicy
from adyenkit.webhooks.dispatcher import (
    ACCEPTED_RESPONSE,
    DispatchResult,
    DispatchStatus,
    WebhookDispatcher,
)
from adyenkit.webhooks.parser import InvalidSignatureError, WebhookParser, parse_webhook
from adyenkit.webhooks.types import EventCode, NotificationItem, WebhookEnvelope
from adyenkit.webhooks.validation import HmacValidator

__version__ = SDK_VERSION
__all__ = [
    # Main Client
    "AdyenClient",
    "HttpClient",
    # Config
    "Config",
    "ConfigBuilder",
    "Environment",
    "Credentials",
    "ApiKeyCredentials",
    "BasicAuthCredentials",
    "RetryPolicy",
    # Types
    "Amount",
    "Currency",
    "HttpMethod",
    "RequestContext",
    "PaymentRequest",
    "PaymentRequestBuilder",
    "ModificationRequest",
    "ModificationRequestBuilder",
    # Exceptions
    "AdyenError",
    "ApiError",
    "NetworkError",
    "SerializationError",
    "ValidationError",
    "ConfigurationError",
    "InvalidHmacKeyError",
    "InvalidSignatureError",
    # Webhooks
    "EventCode",
    "NotificationItem",
    "WebhookEnvelope",
    "HmacValidator",
    "WebhookParser",
    "parse_webhook",
    "WebhookDispatcher",
    "DispatchResult",
    "DispatchStatus",
    "ACCEPTED_RESPONSE",
]
