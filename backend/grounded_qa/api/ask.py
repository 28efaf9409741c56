import httpx
from fastapi import APIRouter, Depends, HTTPException, Request, status
from grounded_qa.api.dependencies import get_http_client, get_in_flight_guard
from grounded_qa.config import settings
from grounded_qa.exceptions import RequestInFlightError
from grounded_qa.schemas.query import QueryRequest, RequestOutcome
from grounded_qa.services.gemini_service import dispatch
from grounded_qa.utils.in_flight import InFlightGuard
from grounded_qa.utils.logging_config import get_logger
from grounded_qa.utils.rate_limit import client_ip, limiter

logger = get_logger(__name__)

router = APIRouter()


@router.post("/ask", response_model=RequestOutcome)
@limiter.limit(settings.ask_rate_limit)
async def ask(
    request: Request,
    body: QueryRequest,
    client: httpx.AsyncClient = Depends(get_http_client),
    guard: InFlightGuard = Depends(get_in_flight_guard),
):
    """
    Ask a question and get a grounded, AI-generated answer.

    Upstream problems never surface as 5xx: they come back as a
    "failure" outcome so the page can show its error banner.
    """
    key = client_ip(request)

    try:
        with guard.claim(key):
            outcome = await dispatch(body.query, client)
    except RequestInFlightError:
        logger.info(f"Rejected overlapping request from {key}")
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A request is already in progress. Wait for it to finish.",
        )

    logger.info(f"Ask outcome for {key}: {outcome.kind}")
    return outcome
