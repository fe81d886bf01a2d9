from fastapi import HTTPException
import logging

from gemini_backend.services.catalog import ModelCatalog
from gemini_backend.services.dispatcher import PromptDispatcher
from gemini_backend.services.model_service import SelectedModelCache
from gemini_backend.shared import Settings

log = logging.getLogger(__name__)

app_state = {}

def get_settings() -> Settings:
    settings = app_state.get("settings")
    if settings is None:
        log.error("Settings requested but are not available (startup failed?).")
        raise HTTPException(status_code=503, detail="Server configuration unavailable.")
    return settings

def get_model_catalog() -> ModelCatalog:
    catalog = app_state.get("model_catalog")
    if catalog is None:
        log.error("Model catalog requested but is not available (initialization failed?).")
        raise HTTPException(status_code=503, detail="Model catalog service temporarily unavailable.")
    return catalog

def get_model_cache() -> SelectedModelCache:
    cache = app_state.get("model_cache")
    if cache is None:
        log.error("Model cache requested but is not available (initialization failed?).")
        raise HTTPException(status_code=503, detail="Model selection service temporarily unavailable.")
    return cache

def get_prompt_dispatcher() -> PromptDispatcher:
    dispatcher = app_state.get("prompt_dispatcher")
    if dispatcher is None:
        log.error("Prompt dispatcher requested but is not available (initialization failed?).")
        raise HTTPException(status_code=503, detail="Gemini service temporarily unavailable.")
    return dispatcher
