"""Management API (v3)."""

from __future__ import annotations

from typing import Any

from adyenkit.api.base import ApiService


class ManagementApi(ApiService):
    """Company, merchant, store and webhook administration."""

    version = "v3"

    def _base_url(self) -> str:
        return self.environment.management_api_url()

    # ==================== Companies & merchants ====================

    async def get_company(self, company_id: str) -> Any:
        return await self._get(self._url("/companies", company_id))

    async def list_merchants(
        self, company_id: str, page_number: int | None = None, page_size: int | None = None
    ) -> Any:
        params = {"pageNumber": page_number, "pageSize": page_size}
        return await self._get(
            self._url("/companies", company_id, "/merchants"),
            params={k: v for k, v in params.items() if v is not None} or None,
        )

    async def get_merchant(self, merchant_id: str) -> Any:
        return await self._get(self._url("/merchants", merchant_id))

    async def create_merchant(self, request: Any) -> Any:
        return await self._post(self._url("/merchants"), request)

    # ==================== Stores ====================

    async def list_stores(self, merchant_id: str) -> Any:
        return await self._get(self._url("/merchants", merchant_id, "/stores"))

    async def get_store(self, merchant_id: str, store_id: str) -> Any:
        return await self._get(self._url("/merchants", merchant_id, "/stores", store_id))

    async def create_store(self, merchant_id: str, request: Any) -> Any:
        return await self._post(self._url("/merchants", merchant_id, "/stores"), request)

    async def update_store(self, merchant_id: str, store_id: str, request: Any) -> Any:
        return await self._patch(
            self._url("/merchants", merchant_id, "/stores", store_id), request
        )

    # ==================== Webhooks ====================

    async def list_webhooks(self, merchant_id: str) -> Any:
        return await self._get(self._url("/merchants", merchant_id, "/webhooks"))

    async def get_webhook(self, merchant_id: str, webhook_id: str) -> Any:
        return await self._get(self._url("/merchants", merchant_id, "/webhooks", webhook_id))

    async def create_webhook(self, merchant_id: str, request: Any) -> Any:
        return await self._post(self._url("/merchants", merchant_id, "/webhooks"), request)

    async def update_webhook(self, merchant_id: str, webhook_id: str, request: Any) -> Any:
        return await self._patch(
            self._url("/merchants", merchant_id, "/webhooks", webhook_id), request
        )

    async def delete_webhook(self, merchant_id: str, webhook_id: str) -> None:
        await self._delete(self._url("/merchants", merchant_id, "/webhooks", webhook_id))
