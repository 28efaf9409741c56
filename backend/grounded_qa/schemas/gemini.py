"""Wire shapes for the Gemini generateContent endpoint.

Every field is optional: the endpoint omits whole branches (no candidates,
no grounding metadata) and the normalizer decides what that means.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Part(BaseModel):
    text: str | None = None


class Content(BaseModel):
    parts: list[Part | None] | None = None


class WebReference(BaseModel):
    uri: str | None = None
    title: str | None = None


class GroundingAttribution(BaseModel):
    web: WebReference | None = None


class GroundingMetadata(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # Validated per entry by the normalizer so one bad citation is dropped alone
    grounding_attributions: list[Any] | None = Field(
        default=None, alias="groundingAttributions"
    )


class Candidate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    content: Content | None = None
    grounding_metadata: GroundingMetadata | None = Field(
        default=None, alias="groundingMetadata"
    )


class GenerateContentResponse(BaseModel):
    """Success body of generateContent."""

    candidates: list[Candidate | None] | None = None


class ErrorDetail(BaseModel):
    message: str | None = None


class ErrorResponse(BaseModel):
    """Error body returned with non-2xx statuses."""

    error: ErrorDetail | None = None
