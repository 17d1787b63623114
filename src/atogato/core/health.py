"""Health check endpoint and metrics wiring.

``/health`` reports the database and the image store. A database failure
makes the instance unhealthy (503); an image store failure only marks it
degraded, since project creation survives failed uploads.
"""

import secrets
import time
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, status
from fastapi.responses import JSONResponse
from fastapi.security import APIKeyHeader
from prometheus_fastapi_instrumentator import Instrumentator
from sqlalchemy import text

from src.atogato.core.config import get_settings
from src.atogato.core.db import get_session
from src.atogato.core.exceptions import UploadError
from src.atogato.core.storage import get_image_store

HEALTH_CACHE_TTL = 10  # seconds

_health_cache: dict[str, Any] | None = None
_health_cache_time: float = 0


def reset_health_cache() -> None:
    """Reset health cache (for testing)."""
    global _health_cache, _health_cache_time
    _health_cache = None
    _health_cache_time = 0


async def check_database() -> str:
    """Return "healthy" or a short description of the failure."""
    try:
        async with get_session() as session:
            await session.execute(text("SELECT 1"))
    except Exception as e:
        return f"unhealthy: {e!s}"
    return "healthy"


async def check_image_storage() -> str:
    try:
        await get_image_store().ping()
    except UploadError as e:
        return f"unhealthy: {e.detail}"
    return "healthy"


def _overall_status(checks: dict[str, str]) -> str:
    if checks["database"] != "healthy":
        return "unhealthy"
    if checks["image_storage"] != "healthy":
        return "degraded"
    return "healthy"


def _respond(body: dict[str, Any]) -> JSONResponse:
    status_code = 503 if body["status"] == "unhealthy" else 200
    return JSONResponse(content=body, status_code=status_code)


def setup_health_endpoint(app: FastAPI) -> None:
    """Configure the health check endpoint."""

    @app.get("/health", include_in_schema=False)
    async def health() -> JSONResponse:
        global _health_cache, _health_cache_time

        now = time.time()
        age = now - _health_cache_time
        if _health_cache and age < HEALTH_CACHE_TTL:
            return _respond({**_health_cache, "cached": True, "cache_age_seconds": round(age, 1)})

        checks = {
            "database": await check_database(),
            "image_storage": await check_image_storage(),
        }
        _health_cache = {
            "status": _overall_status(checks),
            **checks,
            "timestamp": now,
        }
        _health_cache_time = now
        return _respond({**_health_cache, "cached": False})


def setup_metrics(app: FastAPI) -> None:
    """Configure Prometheus metrics with optional API key protection."""
    settings = get_settings()
    instrumentator = Instrumentator(excluded_handlers=["/health", "/metrics"]).instrument(app)

    if not settings.metrics_api_key:
        instrumentator.expose(app, endpoint="/metrics", include_in_schema=False)
        return

    api_key_header = APIKeyHeader(name="X-Metrics-Key", auto_error=False)

    async def verify_metrics_key(api_key: str | None = Depends(api_key_header)) -> None:
        expected = settings.metrics_api_key or ""
        if api_key is None or not secrets.compare_digest(api_key, expected):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid or missing metrics API key",
            )

    instrumentator.expose(
        app,
        endpoint="/metrics",
        include_in_schema=False,
        dependencies=[Depends(verify_metrics_key)],
    )
