from typing import Any

from grounded_qa.schemas.gemini import (
    Candidate,
    GenerateContentResponse,
    GroundingAttribution,
)
from grounded_qa.schemas.query import (
    Failure,
    NoContent,
    NormalizedResult,
    RequestOutcome,
    Source,
    Success,
)
from grounded_qa.utils.logging_config import get_logger
from pydantic import ValidationError

logger = get_logger(__name__)


def _first_candidate(response: GenerateContentResponse) -> Candidate | None:
    if not response.candidates:
        return None
    return response.candidates[0]


def _candidate_text(candidate: Candidate) -> str | None:
    """Text of the first content part, or None when there is nothing to show."""
    if candidate.content is None or not candidate.content.parts:
        return None
    first_part = candidate.content.parts[0]
    if first_part is None:
        return None
    return first_part.text or None


def _parse_attribution(entry: Any) -> GroundingAttribution | None:
    try:
        return GroundingAttribution.model_validate(entry)
    except ValidationError:
        logger.debug(f"Dropping unreadable grounding attribution: {entry!r}")
        return None


def extract_sources(candidate: Candidate) -> list[Source]:
    """
    Map grounding attributions to sources.

    Attributions that are unreadable or missing a uri or a title are dropped
    one by one. Order is kept as returned by the API and the list is not
    capped here.
    """
    metadata = candidate.grounding_metadata
    if metadata is None or not metadata.grounding_attributions:
        return []

    sources = []
    for entry in metadata.grounding_attributions:
        attribution = _parse_attribution(entry)
        if attribution is None or attribution.web is None:
            continue
        web = attribution.web
        if not web.uri or not web.title:
            continue
        sources.append(Source(uri=web.uri, title=web.title))
    return sources


def normalize(raw: Any) -> RequestOutcome:
    """
    Turn a raw generateContent body into an outcome.

    Returns:
        Success with the verbatim text and filtered sources,
        NoContent when the first candidate carries no text,
        Failure when the body does not have the expected shape.
    """
    try:
        response = GenerateContentResponse.model_validate(raw)
    except ValidationError as e:
        logger.error(f"Malformed generateContent body: {e.error_count()} errors")
        return Failure(message="The API returned a response in an unexpected format.")

    candidate = _first_candidate(response)
    if candidate is None:
        logger.info("Response contained no candidates")
        return NoContent()

    text = _candidate_text(candidate)
    if text is None:
        logger.info("First candidate contained no text")
        return NoContent()

    sources = extract_sources(candidate)
    logger.info(f"Answer length: {len(text)} characters, {len(sources)} sources")

    return Success(result=NormalizedResult(text=text, sources=sources))
