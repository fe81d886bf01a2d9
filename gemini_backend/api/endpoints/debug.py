import os
from typing import List

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
import logging

from gemini_backend.core.dependencies import get_model_catalog, get_settings
from gemini_backend.core.errors import UpstreamUnavailableError

router = APIRouter()
log = logging.getLogger(__name__)

@router.get("/_models")
async def list_available_models(catalog=Depends(get_model_catalog)):
    """Returns exactly which models the configured key can access."""
    try:
        return await catalog.list_models_raw()
    except UpstreamUnavailableError as e:
        log.error(f"Error retrieving model catalog: {e.message}")
        return JSONResponse(status_code=500, content={"error": e.message})

@router.get("/_debug-list", response_model=List[str])
async def list_static_files(settings=Depends(get_settings)):
    """Lists the files served from the static directory."""
    try:
        return sorted(os.listdir(settings.STATIC_DIR))
    except OSError as e:
        log.error(f"Error listing static directory {settings.STATIC_DIR}: {e}")
        return JSONResponse(status_code=500, content={"error": str(e)})
