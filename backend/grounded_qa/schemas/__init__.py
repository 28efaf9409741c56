from grounded_qa.schemas.query import (
    Failure,
    NoContent,
    NormalizedResult,
    QueryRequest,
    RequestOutcome,
    Skipped,
    Source,
    Success,
)

__all__ = [
    "QueryRequest",
    "Source",
    "NormalizedResult",
    "Success",
    "NoContent",
    "Failure",
    "Skipped",
    "RequestOutcome",
]
