"""Ingestion Service main application.

Accepts log batches from workflow engines and UI components over HTTP and
dispatches them through the logweave facade.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from functools import partial
from typing import AsyncGenerator

import redis
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from logweave.config import SinkBackend, get_settings
from logweave.observability import get_logger, setup_logging
from logweave.sinks import InMemoryBufferSink, RedisBufferSink

from .api import health, logs

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Handles startup and shutdown of the sink backend.
    """
    settings = get_settings()
    setup_logging(service_name="ingestion-service")

    logger.info(
        "Starting Ingestion service",
        version=settings.app_version,
        sink=settings.sink.backend.value,
    )

    # Each request gets its own sink so one batch never flushes another's records
    client = None
    if settings.sink.backend == SinkBackend.REDIS:
        client = redis.Redis.from_url(settings.redis.url, decode_responses=True)
        app.state.sink_factory = partial(RedisBufferSink, client, settings.sink.redis_key)
    else:
        app.state.sink_factory = InMemoryBufferSink
    app.state.redis = client

    logger.info("Ingestion service started successfully")

    yield

    # Cleanup
    logger.info("Shutting down Ingestion service")
    if client is not None:
        client.close()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="logweave - Ingestion Service",
        description="Batch log ingestion for workflow engines and UI components",
        version=settings.app_version,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.is_development else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(health.router, tags=["Health"])
    app.include_router(logs.router, prefix="/api/v1")

    return app


app = create_app()
