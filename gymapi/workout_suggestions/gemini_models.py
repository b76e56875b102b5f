"""Wire models for the Gemini generateContent API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class GeminiPart(BaseModel):
    text: str = ""


class GeminiContent(BaseModel):
    parts: list[GeminiPart] = Field(default_factory=list)


class GeminiRequest(BaseModel):
    contents: list[GeminiContent] = Field(default_factory=list)

    @classmethod
    def from_prompt(cls, prompt: str) -> GeminiRequest:
        return cls(contents=[GeminiContent(parts=[GeminiPart(text=prompt)])])


class GeminiCandidate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    content: GeminiContent = Field(default_factory=GeminiContent)
    finish_reason: str = Field(default="", alias="finishReason")
    index: int = 0


class GeminiUsageMetadata(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    prompt_token_count: int = Field(default=0, alias="promptTokenCount")
    candidates_token_count: int = Field(default=0, alias="candidatesTokenCount")
    total_token_count: int = Field(default=0, alias="totalTokenCount")


class GeminiResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    candidates: list[GeminiCandidate] = Field(default_factory=list)
    usage_metadata: GeminiUsageMetadata | None = Field(default=None, alias="usageMetadata")

    def first_text(self) -> str | None:
        """Text of the first candidate's first content part, if present."""
        if not self.candidates:
            return None
        parts = self.candidates[0].content.parts
        if not parts:
            return None
        return parts[0].text
