"""
PhishGuard API — Main Application

POST /analyze        — Score one email
POST /analyze/batch  — Score up to 100 emails
GET  /rules          — List the indicator catalog
GET  /health         — Health check
"""

from __future__ import annotations

import asyncio
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.requests import Request

import phishguard
from phishguard.config import settings
from phishguard.engine import ENGINE_VERSION, scoring_engine
from phishguard.detector import scan_email
from phishguard.cache import scan_cache
from phishguard.logging import setup_logging, get_logger
from phishguard.schemas.scan import (
    AnalyzeRequest,
    AnalyzeBatchRequest,
    AnalyzeResponse,
    AnalyzeBatchResponse,
    RulesResponse,
    HealthResponse,
)

logger = get_logger(__name__)


# ============================================================
# STARTUP / SHUTDOWN
# ============================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger.info("PhishGuard API starting",
                extra={"engine_version": ENGINE_VERSION})
    yield
    logger.info("PhishGuard API shutting down")


app = FastAPI(
    title="PhishGuard API",
    description="Heuristic phishing risk scoring for raw email text",
    version=f"{phishguard.__version__} (engine {ENGINE_VERSION})",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.CORS_ORIGINS.split(",")],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
    allow_credentials=False,
)


@app.get("/", include_in_schema=False)
async def root():
    return JSONResponse({"message": "PhishGuard API", "docs": "/docs"})


# ============================================================
# GLOBAL ERROR HANDLER
# ============================================================

@app.exception_handler(Exception)
async def global_error_handler(request: Request, exc: Exception):
    """Return a structured 500 without leaking internals."""
    logger.error(
        f"Unhandled exception: {type(exc).__name__}",
        extra={
            "error": str(exc),
            "error_type": type(exc).__name__,
            "path": request.url.path,
            "method": request.method,
        },
        exc_info=True,
    )
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error. The analysis could not be completed."},
    )


# ============================================================
# ROUTES
# ============================================================

async def _analyze_cached(text: str) -> dict:
    cached = await scan_cache.get(text)
    if cached is not None:
        logger.debug(
            "Cache hit",
            extra={"cached": True, "risk_score": cached["overallRisk"]},
        )
        return cached
    result = await scan_email(text)
    await scan_cache.put(text, result)
    return result


@app.post("/analyze", response_model=AnalyzeResponse)
async def analyze_email(request: AnalyzeRequest):
    """
    Score one email for phishing risk.

    The engine accepts text of any length. This endpoint rejects bodies
    whose text exceeds PHISHGUARD_MAX_TEXT_LENGTH characters with a 422,
    and any request over 1 MB with a 413.
    """
    return await _analyze_cached(request.text)


@app.post("/analyze/batch", response_model=AnalyzeBatchResponse)
async def analyze_batch(request: AnalyzeBatchRequest):
    """Score several emails. Results keep request order."""
    results = await asyncio.gather(
        *[_analyze_cached(item.text) for item in request.items]
    )

    logger.info(
        f"Batch complete: {len(results)}/{len(request.items)} analyzed",
        extra={"batch_size": len(request.items)},
    )
    return {
        "results": results,
        "total": len(request.items),
        "analyzed": len(results),
    }


@app.get("/rules", response_model=RulesResponse)
async def get_rules():
    """Return every indicator group the engine evaluates."""
    rules = scoring_engine.get_rules()
    return {
        "engine_version": ENGINE_VERSION,
        "total_rules": len(rules),
        "rules": rules,
    }


@app.get("/health", response_model=HealthResponse)
async def health():
    """Health check."""
    return {
        "status": "operational",
        "version": phishguard.__version__,
        "engine_version": ENGINE_VERSION,
        "rule_groups": len(scoring_engine.catalog),
        "cache": scan_cache.stats,
    }


# --- Security + Version Headers Middleware ---
@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers["X-PhishGuard-Version"] = phishguard.__version__
    response.headers["X-Engine-Version"] = ENGINE_VERSION
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    return response


# --- Body Size Limit Middleware ---
_MAX_BODY_BYTES = 1_048_576  # 1 MB


@app.middleware("http")
async def enforce_body_size_limit(request: Request, call_next):
    """Reject requests exceeding 1MB, by header or by actual body."""
    content_length = request.headers.get("content-length")
    if content_length:
        try:
            if int(content_length) > _MAX_BODY_BYTES:
                return JSONResponse(
                    status_code=413,
                    content={"detail": "Request body too large."},
                )
        except ValueError:
            pass  # Malformed content-length; let the framework handle it

    if request.method in ("POST", "PUT", "PATCH"):
        body = await request.body()
        if len(body) > _MAX_BODY_BYTES:
            return JSONResponse(
                status_code=413,
                content={"detail": "Request body too large."},
            )

    return await call_next(request)


# --- Request Logging Middleware ---
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every API request with method, path, status, duration."""
    path = request.url.path
    if path == "/health":
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


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("api.main:app", host=settings.HOST, port=settings.PORT)
