import httpx
from fastapi import Request
from grounded_qa.utils.in_flight import InFlightGuard, in_flight_guard


async def get_http_client(request: Request) -> httpx.AsyncClient:
    """Shared outbound client created in the app lifespan."""
    return request.app.state.http_client


def get_in_flight_guard() -> InFlightGuard:
    return in_flight_guard
