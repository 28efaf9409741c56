"""Errors raised while talking to the generative-language endpoint."""


class GroundedQAError(Exception):
    """Base exception for grounded-qa errors."""

    pass


class UpstreamAPIError(GroundedQAError):
    """Raised when the endpoint answers with a non-2xx status."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class RateLimitedError(UpstreamAPIError):
    """Raised for HTTP 429. Retried until attempts run out."""

    pass


class TransportError(GroundedQAError):
    """Raised when the request never produced an HTTP response."""

    pass


class MalformedResponseError(GroundedQAError):
    """Raised when a 2xx body is not JSON or not the expected shape."""

    pass


class RequestInFlightError(GroundedQAError):
    """Raised when a client already has a request outstanding."""

    pass
