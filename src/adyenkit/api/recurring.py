"""Recurring API (v68)."""

from __future__ import annotations

from typing import Any

from adyenkit.api.base import ApiService


class RecurringApi(ApiService):
    """Stored recurring contracts and permits."""

    version = "v68"

    def _base_url(self) -> str:
        return f"{self.environment.classic_api_url()}/pal/servlet/Recurring"

    async def list_recurring_details(self, request: Any) -> Any:
        return await self._post(self._url("/listRecurringDetails"), request)

    async def disable(self, request: Any) -> Any:
        return await self._post(self._url("/disable"), request)

    async def notify_shopper(self, request: Any) -> Any:
        return await self._post(self._url("/notifyShopper"), request)

    async def schedule_account_updater(self, request: Any) -> Any:
        return await self._post(self._url("/scheduleAccountUpdater"), request)

    async def create_permit(self, request: Any) -> Any:
        return await self._post(self._url("/createPermit"), request)

    async def disable_permit(self, request: Any) -> Any:
        return await self._post(self._url("/disablePermit"), request)
