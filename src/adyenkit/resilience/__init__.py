"""
Resilience Layer for adyenkit.

Provides the bounded retry loop used by the transport core.
"""

from .retry import RetryPolicy, execute_with_retry, is_transient_error

__all__ = [
    "RetryPolicy",
    "execute_with_retry",
    "is_transient_error",
]
