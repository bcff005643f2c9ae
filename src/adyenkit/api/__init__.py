"""
Per-endpoint services for the Adyen API family.
"""

from .balance_platform import BalancePlatformApi
from .base import ApiService
from .checkout import CheckoutApi
from .legal_entity import LegalEntityApi
from .management import ManagementApi
from .payments import ModificationsApi, PaymentsApi
from .payout import PayoutApi
from .recurring import RecurringApi

__all__ = [
    "ApiService",
    "CheckoutApi",
    "PaymentsApi",
    "ModificationsApi",
    "PayoutApi",
    "RecurringApi",
    "ManagementApi",
    "LegalEntityApi",
    "BalancePlatformApi",
]
