"""
Blame Mom API — Main Application

GET  /api/headlines — Transformed headlines (limit, suitable-only filter)
GET  /api/random    — One random (preferably suitable) headline
POST /api/transform — Transform an ad-hoc headline
GET  /api/refresh   — Force a headline cache refresh
GET  /health        — Health check
GET  /*             — Built web UI (app/dist, else public/), SPA fallback
"""

from __future__ import annotations

import random
import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import Depends, FastAPI, Query, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from starlette.requests import Request

from blamemom import __version__
from blamemom.cache import HeadlineCache
from blamemom.config import settings
from blamemom.engine import ENGINE_VERSION, engine
from blamemom.fetcher import NewsFetcher
from blamemom.logging import get_logger, setup_logging
from blamemom.pipeline import HeadlinePipeline, build_pipeline
from blamemom.rate_limit import (
    RATE_LIMIT_ENABLED,
    check_rate_limit,
    cleanup_stale_windows,
    get_remaining,
)
from blamemom.schemas.headlines import (
    HealthResponse,
    HeadlineListResponse,
    RandomHeadlineResponse,
    RefreshResponse,
    TransformRequest,
    TransformResponse,
)

logger = get_logger("api")

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
CLIENT_DIST_PATH = _PROJECT_ROOT / "app" / "dist"
LEGACY_PUBLIC_PATH = _PROJECT_ROOT / "public"


# ============================================================
# WIRING
# ============================================================

def build_cache(pipeline: HeadlinePipeline, fetcher: Optional[NewsFetcher] = None) -> HeadlineCache:
    fetcher = fetcher or NewsFetcher()

    async def load_headlines() -> list[dict]:
        articles = await fetcher.fetch_all()
        return pipeline.process_batch(articles)

    return HeadlineCache(loader=load_headlines, ttl_seconds=settings.CACHE_TTL_SECONDS)


def get_cache(request: Request) -> HeadlineCache:
    return request.app.state.headline_cache


def get_pipeline(request: Request) -> HeadlinePipeline:
    return request.app.state.pipeline


async def rate_limited(request: Request, response: Response) -> None:
    """FastAPI dependency — throttles /api/ routes per client address."""
    client = request.client.host if request.client else None
    check_rate_limit(client)
    if RATE_LIMIT_ENABLED and client is not None:
        response.headers["X-RateLimit-Remaining"] = str(get_remaining(client))


def _static_dir() -> Path:
    return CLIENT_DIST_PATH if CLIENT_DIST_PATH.is_dir() else LEGACY_PUBLIC_PATH


# ============================================================
# APP FACTORY
# ============================================================

def create_app(
    cache: Optional[HeadlineCache] = None,
    pipeline: Optional[HeadlinePipeline] = None,
) -> FastAPI:
    """
    Build the API. Pass a cache/pipeline to wire custom collaborators
    (tests, static builds); anything missing is built from settings
    at startup.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging()

        if getattr(app.state, "pipeline", None) is None:
            app.state.pipeline = build_pipeline()
        if getattr(app.state, "headline_cache", None) is None:
            app.state.headline_cache = build_cache(app.state.pipeline)

        if _static_dir() == LEGACY_PUBLIC_PATH:
            logger.warning('Serving legacy static assets. Run "npm run build --prefix app" '
                           "to serve the React build.")

        logger.info("Blame Mom API starting",
                    extra={"engine_version": ENGINE_VERSION,
                           "linguistic": app.state.pipeline.linguistic_enabled})
        await app.state.headline_cache.get_or_refresh()
        yield
        logger.info("Blame Mom API shutting down")

    app = FastAPI(
        title="Blame Mom API",
        description="News headlines, rewritten so that your mother is responsible",
        version=f"{__version__} (engine {ENGINE_VERSION})",
        lifespan=lifespan,
    )
    app.state.headline_cache = cache
    app.state.pipeline = pipeline

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.CORS_ORIGINS.split(",")],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
        allow_credentials=False,
    )

    # ============================================================
    # GLOBAL ERROR HANDLER
    # ============================================================

    @app.exception_handler(Exception)
    async def global_error_handler(request: Request, exc: Exception):
        """Catch unhandled exceptions — return structured error, don't leak internals."""
        logger.error(
            f"Unhandled exception: {type(exc).__name__}",
            extra={"error": str(exc), "path": request.url.path, "method": request.method},
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": "Internal server error."},
        )

    # --- Request Logging Middleware ---
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log every API request with method, path, status, duration."""
        path = request.url.path
        if not path.startswith("/api/"):
            return await call_next(request)

        start = time.time()
        response = await call_next(request)
        duration_ms = round((time.time() - start) * 1000, 1)

        logger.info(
            f"{request.method} {path} → {response.status_code} ({duration_ms}ms)",
            extra={
                "method": request.method,
                "path": path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )
        return response

    # ============================================================
    # ROUTES
    # ============================================================

    @app.get("/api/headlines", response_model=HeadlineListResponse,
             dependencies=[Depends(rate_limited)])
    async def list_headlines(
        limit: int = Query(20, ge=1, le=500),
        suitable: bool = Query(False, description="Only headlines worth blaming"),
        cache: HeadlineCache = Depends(get_cache),
    ):
        """Get transformed headlines."""
        headlines = await cache.get_or_refresh()
        filtered = [h for h in headlines if h["suitable"]] if suitable else headlines
        return {
            "success": True,
            "count": len(filtered),
            "headlines": filtered[:limit],
        }

    @app.get("/api/random", response_model=RandomHeadlineResponse,
             dependencies=[Depends(rate_limited)])
    async def random_headline(cache: HeadlineCache = Depends(get_cache)):
        """Get a random transformed headline, preferring suitable ones."""
        headlines = await cache.get_or_refresh()
        if not headlines:
            return {"success": False, "error": "No headlines available at the moment"}

        suitable = [h for h in headlines if h["suitable"]]
        return {"success": True, "headline": random.choice(suitable or headlines)}

    @app.post("/api/transform", response_model=TransformResponse,
              dependencies=[Depends(rate_limited)])
    async def transform_headline(
        request: TransformRequest,
        pipeline: HeadlinePipeline = Depends(get_pipeline),
    ):
        """Transform a custom headline."""
        if not request.headline or not request.headline.strip():
            return JSONResponse(
                status_code=400,
                content={"success": False, "error": "Headline is required"},
            )

        result = pipeline.process_headline(request.headline, summary=request.summary)
        logger.info("Headline transformed",
                    extra={"rule_id": result["rule"], "suitable": result["suitable"]})
        return {"success": True, **result}

    @app.get("/api/refresh", response_model=RefreshResponse,
             dependencies=[Depends(rate_limited)])
    async def refresh_headlines(cache: HeadlineCache = Depends(get_cache)):
        """Force refresh the headline cache."""
        cleanup_stale_windows()
        headlines = await cache.refresh()
        return {"success": True, "message": "Headlines refreshed", "count": len(headlines)}

    @app.get("/health", response_model=HealthResponse)
    async def health(request: Request):
        """Health check — not rate limited."""
        return {
            "status": "operational",
            "version": __version__,
            "engine_version": ENGINE_VERSION,
            "rules": len(engine.rules),
            "linguistic_enabled": bool(
                request.app.state.pipeline and request.app.state.pipeline.linguistic_enabled
            ),
            "cache": request.app.state.headline_cache.stats if request.app.state.headline_cache else {},
        }

    # ============================================================
    # STATIC UI (registered last: catches every other GET)
    # ============================================================

    @app.get("/{full_path:path}", include_in_schema=False)
    async def serve_ui(full_path: str):
        """Serve built assets; unknown non-API paths get index.html."""
        if full_path.startswith("api/"):
            return JSONResponse(status_code=404, content={"success": False, "error": "Not found"})

        static_dir = _static_dir().resolve()
        candidate = (static_dir / full_path).resolve()
        if full_path and candidate.is_file() and static_dir in candidate.parents:
            return FileResponse(str(candidate))

        index = static_dir / "index.html"
        if index.is_file():
            return FileResponse(str(index), media_type="text/html")
        return JSONResponse({"message": "Blame Mom API", "docs": "/docs"})

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
