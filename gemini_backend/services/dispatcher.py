import logging
from typing import Sequence

from gemini_backend.models.preferences import NO_TEXT_PLACEHOLDER
from gemini_backend.services.generators import TextGenerator

log = logging.getLogger(__name__)


class PromptDispatcher:
    """
    Tries each generator in order and returns the first non-empty text.

    Failures of every generator but the last are logged and skipped, and an
    empty answer also moves on to the next one. The last generator's errors
    reach the caller; if it produces nothing the result is "(no text)".
    """

    def __init__(self, generators: Sequence[TextGenerator]):
        if not generators:
            raise ValueError("PromptDispatcher needs at least one generator")
        self.generators = list(generators)

    async def dispatch(self, model: str, prompt: str) -> str:
        *primaries, last = self.generators

        for generator in primaries:
            try:
                text = await generator.generate(model, prompt)
            except Exception as e:
                log.warning(f"{generator.name} path failed, falling back: {e}")
                continue
            if text:
                log.debug(f"{generator.name} path produced {len(text)} characters")
                return text
            log.info(f"{generator.name} path returned no text, falling back")

        text = await last.generate(model, prompt)
        return text or NO_TEXT_PLACEHOLDER
