"""API routers for the ingestion service."""

from . import health, logs

__all__ = ["health", "logs"]
