"""
Base class for Adyen API services.

Every service method is a thin wrapper: build a URL from the configured
environment, pass the body through, and let the HttpClient do the rest.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

from adyenkit.core.environment import Environment
from adyenkit.core.exceptions import ValidationError
from adyenkit.core.http_client import HttpClient


class ApiService:
    """Shared plumbing for the per-API services."""

    #: API version segment, e.g. "v71"
    version: str = ""

    def __init__(self, client: HttpClient) -> None:
        self._client = client

    @property
    def environment(self) -> Environment:
        return self._client.config.environment

    def _base_url(self) -> str:
        raise NotImplementedError

    def _url(self, *segments: str) -> str:
        """
        Join the base URL, version and path segments.

        Literal segments start with "/"; everything else is treated as a path
        parameter, must be non-empty, and is URL-quoted.
        """
        parts = [self._base_url().rstrip("/")]
        if self.version:
            parts.append(self.version)
        for segment in segments:
            if segment.startswith("/"):
                parts.append(segment.strip("/"))
            else:
                parts.append(_path_param(segment))
        return "/".join(parts)

    async def _post(self, url: str, body: Any, idempotency_key: str | None = None) -> Any:
        return await self._client.post(
            url, body=body, idempotency_key=idempotency_key, reference=_reference_of(body)
        )

    async def _get(self, url: str, params: dict[str, Any] | None = None) -> Any:
        return await self._client.get(url, params=params)

    async def _patch(self, url: str, body: Any) -> Any:
        return await self._client.patch(url, body=body, reference=_reference_of(body))

    async def _delete(self, url: str, params: dict[str, Any] | None = None) -> Any:
        return await self._client.delete(url, params=params)


def _path_param(value: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError("Path parameter cannot be empty", field="path", reason="empty")
    return quote(str(value), safe="")


def _require(value: str | None, name: str) -> str:
    if not value:
        raise ValidationError(f"{name} is required", field=name, reason="missing")
    return value


def _reference_of(body: Any) -> str | None:
    """Merchant reference for log correlation, if the body carries one."""
    if isinstance(body, dict):
        ref = body.get("reference") or body.get("merchantReference")
        return str(ref) if ref else None
    return getattr(body, "reference", None)
