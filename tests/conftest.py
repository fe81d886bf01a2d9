"""Shared fixtures and stubs for the backend tests."""

from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from gemini_backend.core.dependencies import (
    app_state,
    get_model_cache,
    get_model_catalog,
    get_prompt_dispatcher,
)
from gemini_backend.core.errors import UpstreamUnavailableError
from gemini_backend.main import create_app
from gemini_backend.models.schemas import ModelDescriptor
from gemini_backend.services.dispatcher import PromptDispatcher
from gemini_backend.services.model_service import SelectedModelCache
from gemini_backend.shared import Settings

TEST_API_KEY = "AIzaTestKey-0123456789"


def model_entry(name: str, methods: Optional[List[str]] = None) -> Dict[str, Any]:
    return {
        "name": f"models/{name}",
        "displayName": name,
        "supportedGenerationMethods": methods if methods is not None else ["generateContent"],
    }


class StubCatalog:
    """Catalog stand-in whose contents can change between calls."""

    def __init__(self, payload: Optional[Dict[str, Any]] = None, fail: bool = False):
        self.payload = payload if payload is not None else {"models": []}
        self.fail = fail
        self.calls = 0

    async def list_models_raw(self) -> Dict[str, Any]:
        self.calls += 1
        if self.fail:
            raise UpstreamUnavailableError("ListModels failed: 500 Internal Server Error", status=500)
        return self.payload

    async def list_models(self) -> List[ModelDescriptor]:
        payload = await self.list_models_raw()
        return [ModelDescriptor.model_validate(row) for row in payload.get("models", [])]


class StubGenerator:
    """Generator that returns fixed text or raises a fixed error."""

    def __init__(self, name: str, text: str = "", error: Optional[Exception] = None):
        self.name = name
        self.text = text
        self.error = error
        self.calls: List[tuple] = []

    async def generate(self, model: str, prompt: str) -> str:
        self.calls.append((model, prompt))
        if self.error is not None:
            raise self.error
        return self.text


def mock_client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        GEMINI_API_KEY=TEST_API_KEY,
        GEMINI_API_BASE_URL="https://gemini.test",
        STATIC_DIR=tmp_path / "public",
        PORT=3000,
    )


@pytest.fixture
def make_client(settings):
    """
    Build a TestClient whose catalog and dispatcher are stubs.

    Returns a factory taking ``catalog`` and ``generators``; the model cache is
    built around the stub catalog so memoization is exercised for real.
    """
    clients = []

    def _make(catalog: StubCatalog, generators: List[Any]) -> TestClient:
        app = create_app(settings)
        cache = SelectedModelCache(catalog, settings.PREFERRED_MODELS)
        dispatcher = PromptDispatcher(generators)
        app.dependency_overrides[get_model_catalog] = lambda: catalog
        app.dependency_overrides[get_model_cache] = lambda: cache
        app.dependency_overrides[get_prompt_dispatcher] = lambda: dispatcher
        client = TestClient(app, raise_server_exceptions=False)
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)
    app_state.clear()
