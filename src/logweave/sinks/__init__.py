"""Buffer sinks receiving built records."""

from logweave.config import Settings, SinkBackend, get_settings
from logweave.exceptions import SinkConfigurationError

from .base import BufferSink
from .memory import InMemoryBufferSink
from .redis_sink import RedisBufferSink


def create_sink(settings: Settings | None = None) -> BufferSink:
    """Build the sink selected by configuration."""
    settings = settings or get_settings()
    backend = settings.sink.backend
    if backend == SinkBackend.MEMORY:
        return InMemoryBufferSink()
    if backend == SinkBackend.REDIS:
        return RedisBufferSink.from_url(settings.redis.url, settings.sink.redis_key)
    raise SinkConfigurationError(f"Unknown sink backend: {backend}")


__all__ = [
    "BufferSink",
    "InMemoryBufferSink",
    "RedisBufferSink",
    "create_sink",
]
