import asyncio
import logging
from typing import Iterable, Optional, Sequence

from gemini_backend.core.errors import UpstreamUnavailableError
from gemini_backend.models.preferences import GENERATE_CONTENT
from gemini_backend.models.schemas import ModelDescriptor
from gemini_backend.services.catalog import ModelCatalog

log = logging.getLogger(__name__)


def choose_model(descriptors: Iterable[ModelDescriptor], preferred: Sequence[str]) -> Optional[str]:
    """
    Select the model to use from the catalog.
    Preference order wins; catalog order only decides the last-resort fallback.
    Returns the bare model name (without "models/"), or None.
    """
    descriptors = list(descriptors)
    available = {d.name for d in descriptors} | {d.short_name for d in descriptors}

    for name in preferred:
        if f"models/{name}" in available or name in available:
            return name

    # None of the preferred models; use the first text-capable one
    for descriptor in descriptors:
        if descriptor.supports(GENERATE_CONTENT):
            return descriptor.short_name

    return None


async def resolve_model(catalog: ModelCatalog, preferred: Sequence[str]) -> Optional[str]:
    try:
        descriptors = await catalog.list_models()
    except UpstreamUnavailableError as e:
        log.error(f"listModels error: {e.message}")
        return None
    return choose_model(descriptors, preferred)


class SelectedModelCache:
    """
    Process-wide memo of the selected model.

    The first call performs the catalog lookup; every later call returns the
    same answer, a failed lookup (None) included. Restart the process to pick
    up newly enabled models.
    """

    def __init__(self, catalog: ModelCatalog, preferred: Sequence[str]):
        self._catalog = catalog
        self._preferred = list(preferred)
        self._lock = asyncio.Lock()
        self._resolved = False
        self._model: Optional[str] = None

    @property
    def resolved(self) -> bool:
        return self._resolved

    def peek(self) -> Optional[str]:
        return self._model

    async def get_or_resolve(self) -> Optional[str]:
        if self._resolved:
            return self._model

        # Concurrent first requests wait here so only one lookup is made
        async with self._lock:
            if not self._resolved:
                self._model = await resolve_model(self._catalog, self._preferred)
                self._resolved = True
                if self._model:
                    log.info(f"Using model: {self._model}")
                else:
                    log.warning("No usable text model found for this key.")
        return self._model
