"""Pydantic models describing the Gemini ``generateContent`` payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class GeminiBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class Part(GeminiBaseModel):
    text: str | None = None
    thought: bool | None = None


class Content(GeminiBaseModel):
    role: str | None = None
    parts: list[Part] = Field(default_factory=list["Part"])


class GroundingTarget(GeminiBaseModel):
    uri: str | None = None
    title: str | None = None


class GroundingChunk(GeminiBaseModel):
    web: GroundingTarget | None = None
    maps: GroundingTarget | None = None


class GroundingMetadata(GeminiBaseModel):
    grounding_chunks: list[GroundingChunk] = Field(
        default_factory=list["GroundingChunk"], alias="groundingChunks"
    )
    web_search_queries: list[str] = Field(default_factory=list, alias="webSearchQueries")


class Candidate(GeminiBaseModel):
    content: Content | None = None
    finish_reason: str | None = Field(default=None, alias="finishReason")
    grounding_metadata: GroundingMetadata | None = Field(default=None, alias="groundingMetadata")


class PromptFeedback(GeminiBaseModel):
    block_reason: str | None = Field(default=None, alias="blockReason")


class GenerateContentResponse(GeminiBaseModel):
    candidates: list[Candidate] = Field(default_factory=list["Candidate"])
    prompt_feedback: PromptFeedback | None = Field(default=None, alias="promptFeedback")
    model_version: str | None = Field(default=None, alias="modelVersion")

    @property
    def text(self) -> str:
        """Concatenated non-thought text of the first candidate."""

        if not self.candidates or self.candidates[0].content is None:
            return ""
        return "".join(
            part.text
            for part in self.candidates[0].content.parts
            if part.text and not part.thought
        )


class ErrorDetail(GeminiBaseModel):
    code: int | None = None
    message: str = "Unknown Gemini error"
    status: str | None = None


class ErrorResponse(GeminiBaseModel):
    error: ErrorDetail
