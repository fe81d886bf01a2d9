from typing import Any, List

from pydantic import BaseModel as PydanticBaseModel, ConfigDict, Field

from gemini_backend.models.preferences import GENERATE_CONTENT


class PromptRequest(PydanticBaseModel):
    prompt: Any = Field(default=None, description="The prompt text to send to Gemini")

    def cleaned_prompt(self) -> str:
        """Trimmed prompt; anything that is not a string counts as empty."""
        if not isinstance(self.prompt, str):
            return ""
        return self.prompt.strip()


class PromptResponse(PydanticBaseModel):
    output: str


class ErrorResponse(PydanticBaseModel):
    error: str


class NoModelResponse(ErrorResponse):
    hint: str


class UpstreamErrorResponse(ErrorResponse):
    status: int
    statusText: str
    message: str


class ModelDescriptor(PydanticBaseModel):
    """One entry of the upstream ``models`` listing."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str
    supported_generation_methods: List[str] = Field(
        default_factory=list, alias="supportedGenerationMethods"
    )

    @property
    def short_name(self) -> str:
        # v1 names look like "models/gemini-1.5-flash"
        return self.name.removeprefix("models/")

    def supports(self, method: str = GENERATE_CONTENT) -> bool:
        return method in self.supported_generation_methods
