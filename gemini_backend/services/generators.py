"""
Text generation backends for a single prompt.

Both implementations answer the same question ("generate text for this
prompt with model X") through different calling conventions: the official
SDK, and the raw REST endpoint that keeps working across SDK/version quirks.
"""
import asyncio
import logging
from typing import Any, Dict, Protocol
from urllib.parse import quote

import google.generativeai as genai
import httpx

from gemini_backend.core.errors import UpstreamFailureError

log = logging.getLogger(__name__)


class TextGenerator(Protocol):
    name: str

    async def generate(self, model: str, prompt: str) -> str:
        ...


def extract_text(payload: Dict[str, Any]) -> str:
    """Concatenate the text of every part of the first candidate."""
    if not isinstance(payload, dict):
        return ""
    candidates = payload.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return ""
    first = candidates[0] if isinstance(candidates[0], dict) else {}
    content = first.get("content")
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list):
        return ""
    return "".join(
        str(part.get("text") or "") for part in parts if isinstance(part, dict)
    )


class SdkTextGenerator:
    """Calls the model through the google-generativeai SDK."""

    name = "sdk"

    def __init__(self, api_key: str):
        genai.configure(api_key=api_key)

    async def generate(self, model: str, prompt: str) -> str:
        generative_model = genai.GenerativeModel(model)
        # The SDK call blocks, keep it off the event loop
        response = await asyncio.to_thread(generative_model.generate_content, prompt)
        return response.text or ""


class HttpTextGenerator:
    """Calls ``models/{model}:generateContent`` directly over HTTP."""

    name = "http"

    def __init__(self, client: httpx.AsyncClient, base_url: str, api_version: str, api_key: str):
        self._client = client
        self._api_key = api_key
        self._base = f"{base_url.rstrip('/')}/{api_version}/models"

    async def generate(self, model: str, prompt: str) -> str:
        url = f"{self._base}/{quote(model, safe='')}:generateContent"
        resp = await self._client.post(
            url,
            headers={"Content-Type": "application/json", "x-goog-api-key": self._api_key},
            json={"contents": [{"parts": [{"text": prompt}]}]},
        )

        if not resp.is_success:
            log.error(f"Gemini HTTP call failed: {resp.status_code} {resp.reason_phrase}")
            raise UpstreamFailureError(resp.status_code, resp.reason_phrase, resp.text)

        return extract_text(resp.json())
