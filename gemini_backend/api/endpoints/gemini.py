from typing import Optional

from fastapi import APIRouter, Depends
import logging

from gemini_backend.core.dependencies import get_model_cache, get_prompt_dispatcher, get_settings
from gemini_backend.core.errors import EmptyPromptError, NoModelAvailableError
from gemini_backend.models.schemas import (
    ErrorResponse,
    NoModelResponse,
    PromptRequest,
    PromptResponse,
    UpstreamErrorResponse,
)

router = APIRouter()
log = logging.getLogger(__name__)

@router.post(
    "/gemini",
    response_model=PromptResponse,
    responses={
        400: {"model": ErrorResponse},
        503: {"model": NoModelResponse},
        500: {"model": ErrorResponse},
        "default": {
            "model": UpstreamErrorResponse,
            "description": "Gemini request failed; the status code mirrors the upstream response",
        },
    },
)
async def generate_from_prompt(
    request_data: Optional[PromptRequest] = None,
    settings=Depends(get_settings),
    model_cache=Depends(get_model_cache),
    dispatcher=Depends(get_prompt_dispatcher),
):
    """
    Sends the prompt to the selected Gemini model and returns the generated text.
    The model is picked once per process from the key's catalog.
    """
    prompt = request_data.cleaned_prompt() if request_data else ""
    if not prompt:
        raise EmptyPromptError()

    log.info(f"Processing prompt request with prompt length: {len(prompt)}")

    model = await model_cache.get_or_resolve()
    if not model:
        raise NoModelAvailableError(settings.models_hint)

    output = await dispatcher.dispatch(model, prompt)
    log.info(f"Returning {len(output)} characters from model {model}")
    return PromptResponse(output=output)
