"""Health check endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Request
from redis import RedisError

router = APIRouter()


@router.get("/health")
async def health_check(request: Request) -> dict:
    """Basic health check endpoint."""
    return {"status": "healthy", "service": "ingestion-service"}


@router.get("/ready")
def readiness_check(request: Request) -> dict:
    """Readiness check - verifies the sink backend is reachable."""
    redis = request.app.state.redis
    if redis is None:
        return {"status": "ready", "sink": "memory"}

    try:
        redis.ping()
        redis_healthy = True
    except RedisError:
        redis_healthy = False

    if redis_healthy:
        return {"status": "ready", "sink": "redis", "redis": "connected"}
    else:
        return {"status": "not_ready", "sink": "redis", "redis": "disconnected"}
