import uuid

from fastapi import Request
from grounded_qa.config import settings
from slowapi import Limiter


def _is_ip_whitelisted(client_ip: str) -> bool:
    """Check if the given IP is in the whitelist."""
    whitelist = [ip.strip() for ip in settings.whitelisted_ips]
    return client_ip in whitelist


def client_ip(request: Request) -> str:
    """Get client IP from request."""
    return request.client.host if request.client else "127.0.0.1"


def get_ip_key(request: Request) -> str:
    """
    Rate limit by IP.

    If the IP is in the whitelist, return a RANDOM UUID (bypass).
    Otherwise return the client IP.
    """
    ip = client_ip(request)
    if _is_ip_whitelisted(ip):
        return str(uuid.uuid4())
    return ip


limiter = Limiter(key_func=get_ip_key)
