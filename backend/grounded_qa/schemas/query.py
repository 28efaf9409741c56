from typing import Annotated, Literal, Union

from grounded_qa.constants import MAX_QUERY_LENGTH, NO_CONTENT_MESSAGE
from pydantic import BaseModel, Field


class QueryRequest(BaseModel):
    """Question submitted from the browser UI"""

    # Blank queries are accepted and answered with a "skipped" outcome
    query: str = Field(..., max_length=MAX_QUERY_LENGTH)


class Source(BaseModel):
    """A web page the answer was grounded on."""

    uri: str
    title: str


class NormalizedResult(BaseModel):
    """Generated text plus its citations, in API order."""

    text: str
    sources: list[Source] = []


class Success(BaseModel):
    kind: Literal["success"] = "success"
    result: NormalizedResult


class NoContent(BaseModel):
    """The model answered but produced no text (e.g. safety filtered)."""

    kind: Literal["no_content"] = "no_content"
    message: str = NO_CONTENT_MESSAGE


class Failure(BaseModel):
    kind: Literal["failure"] = "failure"
    message: str


class Skipped(BaseModel):
    """Blank query: nothing was sent and nothing should be shown."""

    kind: Literal["skipped"] = "skipped"


RequestOutcome = Annotated[
    Union[Success, NoContent, Failure, Skipped], Field(discriminator="kind")
]
