import asyncio
from typing import Any, Awaitable, Callable

import httpx
from grounded_qa.config import settings
from grounded_qa.constants import RATE_LIMITED_STATUS
from grounded_qa.exceptions import (
    GroundedQAError,
    MalformedResponseError,
    RateLimitedError,
    TransportError,
    UpstreamAPIError,
)
from grounded_qa.schemas.gemini import ErrorResponse
from grounded_qa.schemas.query import Failure, RequestOutcome, Skipped
from grounded_qa.services.response_normalizer import normalize
from grounded_qa.utils.logging_config import get_logger
from pydantic import ValidationError

logger = get_logger(__name__)

Sleep = Callable[[float], Awaitable[None]]


def build_request_payload(query: str) -> dict[str, Any]:
    """Request body for generateContent with Google Search grounding enabled."""
    return {
        "contents": [{"parts": [{"text": query}]}],
        "tools": [{"google_search": {}}],
    }


def _error_message(response: httpx.Response) -> str:
    """Server-provided error message, else a generic one naming the status."""
    fallback = f"API request failed with status: {response.status_code}"
    try:
        body = ErrorResponse.model_validate(response.json())
    except (ValueError, ValidationError):
        return fallback

    if body.error and body.error.message:
        return body.error.message
    return fallback


def _parse_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as e:
        raise MalformedResponseError(
            "The API returned a response that is not valid JSON."
        ) from e


async def fetch_generated_content(
    client: httpx.AsyncClient,
    payload: dict[str, Any],
    *,
    url: str | None = None,
    api_key: str | None = None,
    max_attempts: int | None = None,
    initial_delay: float | None = None,
    sleep: Sleep = asyncio.sleep,
) -> Any:
    """
    POST the payload with bounded exponential backoff.

    Retries on HTTP 429 and on transport errors while attempts remain,
    sleeping initial_delay, then twice that, and so on. Any other non-2xx
    status is terminal.

    Returns:
        The decoded JSON body of the first 2xx response.

    Raises:
        RateLimitedError: 429 on the final attempt
        TransportError: no response on the final attempt
        UpstreamAPIError: any other non-2xx status
        MalformedResponseError: 2xx body that is not JSON
    """
    url = url or settings.gemini_api_url
    api_key = settings.gemini_api_key if api_key is None else api_key
    attempts = settings.max_attempts if max_attempts is None else max_attempts
    delay = settings.initial_backoff_seconds if initial_delay is None else initial_delay

    last_error: GroundedQAError
    for attempt in range(1, attempts + 1):
        try:
            response = await client.post(url, params={"key": api_key}, json=payload)
        except httpx.TransportError as e:
            last_error = TransportError(str(e) or type(e).__name__)
            last_error.__cause__ = e
            logger.warning(f"Transport error on attempt {attempt}/{attempts}: {e!r}")
        else:
            if response.status_code == RATE_LIMITED_STATUS:
                last_error = RateLimitedError(
                    response.status_code, _error_message(response)
                )
                logger.warning(f"Rate limited (HTTP 429) on attempt {attempt}/{attempts}")
            elif not response.is_success:
                message = _error_message(response)
                logger.error(f"API returned an error: {response.status_code} - {message}")
                raise UpstreamAPIError(response.status_code, message)
            else:
                logger.debug(f"API responded {response.status_code} on attempt {attempt}")
                return _parse_body(response)

        if attempt == attempts:
            raise last_error

        logger.info(f"Retrying in {delay:g}s")
        await sleep(delay)
        delay *= 2

    raise ValueError("max_attempts must be at least 1")


async def dispatch(
    query: str,
    client: httpx.AsyncClient,
    *,
    url: str | None = None,
    api_key: str | None = None,
    max_attempts: int | None = None,
    initial_delay: float | None = None,
    sleep: Sleep = asyncio.sleep,
) -> RequestOutcome:
    """
    Ask the model a question and normalize its answer.

    Never raises: blank queries are Skipped without touching the network and
    every error becomes a Failure carrying a human-readable message.
    """
    text = query.strip()
    if not text:
        return Skipped()

    logger.info(f"Generating grounded answer for query: '{text[:80]}'")

    try:
        raw = await fetch_generated_content(
            client,
            build_request_payload(text),
            url=url,
            api_key=api_key,
            max_attempts=max_attempts,
            initial_delay=initial_delay,
            sleep=sleep,
        )
    except GroundedQAError as e:
        logger.error(f"Grounded answer failed: {e}")
        return Failure(message=str(e))
    except Exception as e:
        logger.error(f"Unexpected error generating answer: {e}", exc_info=True)
        return Failure(message=str(e) or type(e).__name__)

    return normalize(raw)
