import logging
from typing import Any, Dict, List

import httpx
from pydantic import ValidationError

from gemini_backend.core.errors import UpstreamUnavailableError
from gemini_backend.models.schemas import ModelDescriptor
from gemini_backend.shared import redact

log = logging.getLogger(__name__)


class ModelCatalog:
    """Lists the models the configured key can access. Every call hits the network."""

    def __init__(self, client: httpx.AsyncClient, base_url: str, api_version: str, api_key: str):
        self._client = client
        self._api_key = api_key
        self.models_url = f"{base_url.rstrip('/')}/{api_version}/models"

    async def list_models_raw(self) -> Dict[str, Any]:
        """Return the upstream listing as-is, e.g. ``{"models": [...]}``."""
        try:
            resp = await self._client.get(self.models_url, headers={"x-goog-api-key": self._api_key})
        except httpx.HTTPError as e:
            raise UpstreamUnavailableError(
                f"ListModels failed: {redact(str(e) or type(e).__name__, self._api_key)}"
            ) from e

        if not resp.is_success:
            raise UpstreamUnavailableError(
                f"ListModels failed: {resp.status_code} {resp.reason_phrase}",
                status=resp.status_code,
            )

        try:
            return resp.json()
        except ValueError as e:
            raise UpstreamUnavailableError("ListModels failed: response was not JSON") from e

    async def list_models(self) -> List[ModelDescriptor]:
        payload = await self.list_models_raw()
        rows = payload.get("models") if isinstance(payload, dict) else None
        if not isinstance(rows, list):
            return []

        descriptors: List[ModelDescriptor] = []
        for row in rows:
            try:
                descriptors.append(ModelDescriptor.model_validate(row))
            except ValidationError:
                log.debug(f"Skipping malformed catalog entry: {row!r}")
        log.debug(f"Catalog returned {len(descriptors)} models")
        return descriptors
