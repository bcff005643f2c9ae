"""Legal Entity Management API (v3)."""

from __future__ import annotations

from typing import Any

from adyenkit.api.base import ApiService


class LegalEntityApi(ApiService):
    """
    KYC onboarding: legal entities, transfer instruments and business lines.

    This API is usually called with basic-auth credentials
    (``Config.builder().basic_auth(user, password)``).
    """

    version = "v3"

    def _base_url(self) -> str:
        return self.environment.legal_entity_api_url()

    async def create_legal_entity(self, request: Any, idempotency_key: str | None = None) -> Any:
        return await self._post(self._url("/legalEntities"), request, idempotency_key)

    async def get_legal_entity(self, legal_entity_id: str) -> Any:
        return await self._get(self._url("/legalEntities", legal_entity_id))

    async def update_legal_entity(self, legal_entity_id: str, request: Any) -> Any:
        return await self._patch(self._url("/legalEntities", legal_entity_id), request)

    async def create_transfer_instrument(self, request: Any) -> Any:
        return await self._post(self._url("/transferInstruments"), request)

    async def get_transfer_instrument(self, transfer_instrument_id: str) -> Any:
        return await self._get(self._url("/transferInstruments", transfer_instrument_id))

    async def create_business_line(self, request: Any) -> Any:
        return await self._post(self._url("/businessLines"), request)

    async def get_business_line(self, business_line_id: str) -> Any:
        return await self._get(self._url("/businessLines", business_line_id))

    async def create_onboarding_link(self, legal_entity_id: str, request: Any) -> Any:
        """Hosted onboarding link for an existing legal entity."""
        return await self._post(
            self._url("/legalEntities", legal_entity_id, "/onboardingLinks"), request
        )
