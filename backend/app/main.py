"""
Movie Viewer API — FastAPI application entry point.

Routers are registered here. Each service lives in app/api/.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.logging import configure_logging
from app.api import movies
from app.api import reviews as reviews_api

configure_logging(settings.LOG_LEVEL)

app = FastAPI(
    title="Movie Viewer API",
    description="Genre listings, trailers and local star-rated reviews.",
    version="0.1.0",
    docs_url="/docs" if settings.ENABLE_DOCS else None,
    redoc_url="/redoc" if settings.ENABLE_DOCS else None,
)

# ── CORS ──────────────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Routers ───────────────────────────────────────────────────────────────────
app.include_router(movies.router,      prefix="/movies",  tags=["movies"])
app.include_router(reviews_api.router, prefix="/reviews", tags=["reviews"])


# ── Health check ──────────────────────────────────────────────────────────────
@app.get("/health", tags=["system"])
def health_check() -> dict:
    """Liveness probe. Returns 200 when the server is up."""
    return {"status": "ok", "version": app.version, "env": settings.APP_ENV}
