"""Tests for the ordered-attempt prompt dispatcher."""

import pytest

from gemini_backend.core.errors import UpstreamFailureError
from gemini_backend.services.dispatcher import PromptDispatcher
from tests.conftest import StubGenerator


class TestPromptDispatcher:

    def test_requires_a_generator(self):
        with pytest.raises(ValueError):
            PromptDispatcher([])

    @pytest.mark.asyncio
    async def test_primary_text_returned_without_fallback(self):
        primary = StubGenerator("sdk", text="4")
        fallback = StubGenerator("http", text="unused")

        assert await PromptDispatcher([primary, fallback]).dispatch("m", "p") == "4"
        assert fallback.calls == []

    @pytest.mark.asyncio
    async def test_primary_error_falls_back(self):
        primary = StubGenerator("sdk", error=RuntimeError("boom"))
        fallback = StubGenerator("http", text="ok")

        assert await PromptDispatcher([primary, fallback]).dispatch("m", "p") == "ok"
        assert fallback.calls == [("m", "p")]

    @pytest.mark.asyncio
    async def test_primary_empty_text_falls_back(self):
        primary = StubGenerator("sdk", text="")
        fallback = StubGenerator("http", text="ok")

        assert await PromptDispatcher([primary, fallback]).dispatch("m", "p") == "ok"

    @pytest.mark.asyncio
    async def test_last_generator_error_propagates(self):
        primary = StubGenerator("sdk", error=RuntimeError("boom"))
        fallback = StubGenerator("http", error=UpstreamFailureError(500, "Internal Server Error", "oops"))

        with pytest.raises(UpstreamFailureError):
            await PromptDispatcher([primary, fallback]).dispatch("m", "p")

    @pytest.mark.asyncio
    async def test_placeholder_when_nothing_produced(self):
        dispatcher = PromptDispatcher([StubGenerator("sdk", text=""), StubGenerator("http", text="")])
        assert await dispatcher.dispatch("m", "p") == "(no text)"

    @pytest.mark.asyncio
    async def test_single_attempt_each(self):
        primary = StubGenerator("sdk", error=RuntimeError("boom"))
        fallback = StubGenerator("http", text="ok")

        await PromptDispatcher([primary, fallback]).dispatch("m", "p")

        assert len(primary.calls) == 1
        assert len(fallback.calls) == 1
