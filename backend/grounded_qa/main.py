from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles
from grounded_qa.api import ask
from grounded_qa.config import settings
from grounded_qa.utils.logging_config import get_logger, setup_logging
from grounded_qa.utils.rate_limit import limiter
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

setup_logging(log_level=settings.log_level)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan events: startup and shutdown"""
    logger.info("Starting Grounded QA")
    if not settings.gemini_api_key:
        logger.warning("GEMINI_API_KEY is empty; relying on the host to inject it")

    app.state.http_client = httpx.AsyncClient(
        headers={"Content-Type": "application/json"},
        timeout=settings.request_timeout_seconds,
    )
    logger.info("API ready")
    yield

    logger.info("Shutting down")
    await app.state.http_client.aclose()


app = FastAPI(
    title="Grounded QA",
    description="Ask anything and get a search-grounded, AI-generated response",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(ask.router, prefix="/api", tags=["ask"])
app.mount("/static", StaticFiles(directory=settings.get_static_path()), name="static")


@app.get("/", include_in_schema=False)
async def index():
    """Browser UI."""
    return FileResponse(settings.get_static_path() / "index.html")


@app.get("/health")
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "model_endpoint": settings.gemini_api_url,
        "credential_configured": bool(settings.gemini_api_key),
        "max_attempts": settings.max_attempts,
    }
