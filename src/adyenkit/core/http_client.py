"""
HTTP execution core for the Adyen APIs.

Owns the connection pool, injects authentication, encodes JSON bodies,
runs each call through the bounded retry loop and classifies every outcome
into the adyenkit error taxonomy.
"""

from __future__ import annotations

import asyncio
import json
import time
from collections.abc import Callable
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any
from urllib.parse import urlsplit

import httpx

from adyenkit.core.config import Config
from adyenkit.core.exceptions import (
    AdyenError,
    ApiError,
    NetworkError,
    SerializationError,
)
from adyenkit.core.logging import get_logger
from adyenkit.core.types import HttpMethod, RequestContext
from adyenkit.resilience.retry import RetryPolicy, SleepFunc, execute_with_retry

IDEMPOTENCY_HEADER = "Idempotency-Key"
JSON_CONTENT_TYPE = "application/json"


def _json_default(obj: Any) -> Any:
    """Convert SDK objects and common scalar types for ``json.dumps``."""
    if hasattr(obj, "to_api_dict"):
        return obj.to_api_dict()
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, Decimal):
        return str(obj)
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def encode_body(body: Any) -> bytes | None:
    """
    Encode a request body as compact JSON.

    Raises:
        SerializationError: If the body cannot be represented as JSON.
    """
    if body is None:
        return None
    try:
        return json.dumps(
            body, default=_json_default, separators=(",", ":"), allow_nan=False
        ).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Failed to encode request body: {e}", cause=e) from e


class HttpClient:
    """
    Async transport shared by every Adyen API service.

    One pooled ``httpx.AsyncClient`` is created lazily and reused by all
    calls; concurrent calls share nothing else but the read-only Config.

    Example:
        >>> async with HttpClient(config) as http:
        ...     ctx = RequestContext(HttpMethod.POST, url, body={"merchantAccount": "..."})
        ...     data = await http.execute(ctx, deadline=10.0)
    """

    def __init__(
        self,
        config: Config,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: SleepFunc = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize the transport.

        Args:
            config: Validated client configuration
            transport: Optional httpx transport (e.g. ``httpx.MockTransport``)
            sleep: Coroutine used for backoff delays
            clock: Monotonic clock used for latency and elapsed time
        """
        self._config = config
        self._transport = transport
        self._sleep = sleep
        self._clock = clock
        self._policy = RetryPolicy(config.max_retries, config.base_backoff)
        self._logger = get_logger("http")
        self._http_client: httpx.AsyncClient | None = None

    @property
    def config(self) -> Config:
        return self._config

    @property
    def retry_policy(self) -> RetryPolicy:
        return self._policy

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=self._config.request_timeout,
                transport=self._transport,
            )
        return self._http_client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> HttpClient:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    # ==================== Request execution ====================

    async def request(
        self,
        method: HttpMethod | str,
        url: str,
        body: Any = None,
        params: dict[str, Any] | None = None,
        idempotency_key: str | None = None,
        reference: str | None = None,
        deadline: float | None = None,
    ) -> Any:
        """Build a RequestContext and execute it."""
        context = RequestContext(
            method=method,
            url=url,
            body=body,
            params=params,
            idempotency_key=idempotency_key,
            reference=reference,
        )
        return await self.execute(context, deadline=deadline)

    async def execute(self, context: RequestContext, deadline: float | None = None) -> Any:
        """
        Execute one API call with retries.

        Args:
            context: The request to send
            deadline: Optional bound in seconds for the whole call, retries
                and backoff included

        Returns:
            Decoded JSON body, or None for an empty 2xx response

        Raises:
            ApiError: Non-2xx response (after retries for 5xx)
            NetworkError: Transport failure after retries, or deadline exceeded
            SerializationError: Body could not be encoded or decoded
        """
        content = encode_body(context.body)
        headers = self._build_headers(context, content is not None)
        started = self._clock()
        attempts_made = 0

        async def attempt_once(attempt: int) -> Any:
            nonlocal attempts_made
            attempts_made = attempt
            return await self._send_once(context, content, headers, attempt)

        run = execute_with_retry(attempt_once, self._policy, sleep=self._sleep)
        try:
            if deadline is None:
                return await run
            return await asyncio.wait_for(run, timeout=deadline)
        except asyncio.TimeoutError as e:
            error = NetworkError(
                f"Deadline of {deadline}s exceeded for {context.method.value} {_path(context.url)}",
                cause=e,
                url=context.url,
                timed_out=True,
            )
            error.attempts = attempts_made
            error.elapsed = self._clock() - started
            self._logger.info(
                f"{context.method.value} {_path(context.url)} aborted by deadline "
                f"after {attempts_made} attempt(s)"
            )
            raise error from e
        except AdyenError as e:
            e.elapsed = self._clock() - started
            raise

    def _build_headers(self, context: RequestContext, has_body: bool) -> dict[str, str]:
        headers = {
            "User-Agent": self._config.user_agent,
            "Accept": JSON_CONTENT_TYPE,
        }
        headers.update(self._config.default_headers)
        if has_body:
            headers["Content-Type"] = JSON_CONTENT_TYPE
        if context.idempotency_key:
            headers[IDEMPOTENCY_HEADER] = context.idempotency_key
        headers.update(self._config.credentials.auth_headers())
        return headers

    async def _send_once(
        self,
        context: RequestContext,
        content: bytes | None,
        headers: dict[str, str],
        attempt: int,
    ) -> Any:
        client = await self._get_client()
        path = _path(context.url)
        self._logger.debug(
            f"{context.method.value} {path} attempt {attempt} "
            f"headers={self._config.credentials.redacted_headers()}"
        )

        started = self._clock()
        try:
            response = await client.request(
                context.method.value,
                context.url,
                content=content,
                params=context.params,
                headers=headers,
            )
        except httpx.TimeoutException as e:
            self._trace(context, attempt, "timeout", started)
            raise NetworkError(
                f"Request timed out: {e}", cause=e, url=context.url, timed_out=True
            ) from e
        except httpx.TransportError as e:
            self._trace(context, attempt, "network_error", started)
            raise NetworkError(
                f"Transport failure: {type(e).__name__}: {e}", cause=e, url=context.url
            ) from e
        except httpx.DecodingError as e:
            self._trace(context, attempt, "invalid_body", started)
            raise SerializationError(
                f"Response body could not be decoded: {e}", cause=e
            ) from e
        except httpx.RequestError as e:
            self._trace(context, attempt, "network_error", started)
            raise NetworkError(
                f"Request failed: {type(e).__name__}: {e}", cause=e, url=context.url
            ) from e

        try:
            result = self._handle_response(response)
        except ApiError as e:
            self._trace(context, attempt, f"http_{e.status}", started, e.is_transient())
            raise
        except SerializationError:
            self._trace(context, attempt, "invalid_body", started)
            raise

        self._trace(context, attempt, f"http_{response.status_code}", started)
        return result

    def _handle_response(self, response: httpx.Response) -> Any:
        status = response.status_code
        if 200 <= status < 300:
            if not response.content.strip():
                return None
            try:
                return response.json()
            except ValueError as e:
                raise SerializationError(
                    f"Response body is not valid JSON (HTTP {status})",
                    cause=e,
                    details={"status": status},
                ) from e
        raise _api_error(response)

    def _trace(
        self,
        context: RequestContext,
        attempt: int,
        outcome: str,
        started: float,
        transient: bool = False,
    ) -> None:
        latency_ms = (self._clock() - started) * 1000
        extra = {
            "http_method": context.method.value,
            "url_path": _path(context.url),
            "attempt": attempt,
            "outcome": outcome,
            "latency_ms": round(latency_ms, 2),
            "request_id": context.request_id,
            "reference": context.reference,
            "idempotency_key": context.idempotency_key,
        }
        message = (
            f"{context.method.value} {_path(context.url)} attempt {attempt} -> "
            f"{outcome} ({latency_ms:.1f} ms)"
        )
        if outcome.startswith("http_2"):
            self._logger.debug(message, extra=extra)
        elif transient or outcome in ("timeout", "network_error"):
            self._logger.warning(message, extra=extra)
        else:
            self._logger.info(message, extra=extra)

    # ==================== Convenience verbs ====================

    async def get(self, url: str, params: dict[str, Any] | None = None, **kwargs: Any) -> Any:
        return await self.request(HttpMethod.GET, url, params=params, **kwargs)

    async def post(self, url: str, body: Any = None, **kwargs: Any) -> Any:
        return await self.request(HttpMethod.POST, url, body=body, **kwargs)

    async def patch(self, url: str, body: Any = None, **kwargs: Any) -> Any:
        return await self.request(HttpMethod.PATCH, url, body=body, **kwargs)

    async def delete(self, url: str, **kwargs: Any) -> Any:
        return await self.request(HttpMethod.DELETE, url, **kwargs)


def _path(url: str) -> str:
    return urlsplit(url).path or "/"


def _api_error(response: httpx.Response) -> ApiError:
    """Map a non-2xx response onto ApiError, structured body or not."""
    status = response.status_code
    text = response.text
    try:
        data = response.json()
    except ValueError:
        data = None

    if isinstance(data, dict) and "errorCode" in data and "message" in data:
        psp_reference = data.get("pspReference")
        return ApiError(
            str(data["message"]),
            status=status,
            error_code=str(data["errorCode"]),
            error_type=str(data.get("errorType", "")),
            psp_reference=str(psp_reference) if psp_reference else None,
            body=text,
        )

    return ApiError(
        text or response.reason_phrase or f"HTTP {status}",
        status=status,
        body=text,
    )
