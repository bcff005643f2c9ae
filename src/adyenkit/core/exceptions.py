"""
Exception hierarchy for the adyenkit SDK.

All SDK-specific exceptions inherit from AdyenError for easy catching.
The hierarchy is closed: vendor-specific error codes travel as plain strings
on ApiError instead of growing new exception classes.
"""

from __future__ import annotations

from typing import Any


class AdyenError(Exception):
    """
    Base exception for all adyenkit errors.

    Catch this to handle any SDK-related exception.

    Errors leaving the transport core are annotated with the number of
    attempts that were made and the total elapsed time.

    Example:
        >>> try:
        ...     await client.checkout.payments(request)
        ... except AdyenError as e:
        ...     print(f"Adyen call failed after {e.attempts} attempt(s): {e}")
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.attempts = 0
        self.elapsed = 0.0

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message

    def is_transient(self) -> bool:
        """Whether repeating the same request may succeed."""
        return False


class ApiError(AdyenError):
    """
    The Adyen API rejected the request.

    Raised when:
    - The server answers with a non-2xx status
    - The body is either Adyen's structured error object or, when it is not,
      the raw response text is kept in ``body``

    Only 5xx responses are considered transient.
    """

    def __init__(
        self,
        message: str,
        status: int,
        error_code: str = "",
        error_type: str = "",
        psp_reference: str | None = None,
        body: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.status = status
        self.error_code = error_code
        self.error_type = error_type
        self.psp_reference = psp_reference
        self.body = body

    def __str__(self) -> str:
        code = f" {self.error_code}" if self.error_code else ""
        ref = f" (pspReference: {self.psp_reference})" if self.psp_reference else ""
        return f"[HTTP {self.status}{code}] {self.message}{ref}"

    @property
    def status_code(self) -> int:
        return self.status

    def is_client_error(self) -> bool:
        """Check if this is a 4xx error."""
        return 400 <= self.status < 500

    def is_server_error(self) -> bool:
        """Check if this is a server-side error."""
        return 500 <= self.status < 600

    def is_transient(self) -> bool:
        return self.is_server_error()


class NetworkError(AdyenError):
    """
    Network or transport-level communication error.

    Raised when:
    - DNS resolution, TLS handshake or connection fails
    - The connection is reset mid-request
    - A request or the caller's deadline times out
    """

    def __init__(
        self,
        message: str,
        cause: BaseException | None = None,
        status_code: int | None = None,
        url: str | None = None,
        timed_out: bool = False,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.cause = cause
        self.status_code = status_code
        self.url = url
        self.timed_out = timed_out

    def is_transient(self) -> bool:
        return True


class SerializationError(AdyenError):
    """
    A request or response body could not be encoded or decoded.

    Always a contract or programming bug, never retried.
    """

    def __init__(
        self,
        message: str,
        cause: BaseException | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.cause = cause


class ValidationError(AdyenError):
    """
    Client-side precondition failed.

    Raised when:
    - A builder is missing a required field
    - Parameter values are invalid
    Always raised before any network call is attempted.
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        reason: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.field = field
        self.reason = reason or message


class ConfigurationError(ValidationError):
    """
    Configuration is missing or invalid.

    Raised when:
    - Credentials are missing or malformed
    - The live URL prefix is empty or contains invalid characters
    - Retry/timeout tunables are out of range
    - Environment variables cannot be parsed
    """

    pass


class InvalidHmacKeyError(ValidationError):
    """The webhook HMAC key is not a valid 32-byte hex string."""

    pass
