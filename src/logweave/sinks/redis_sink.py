"""Redis list sink.

Records are buffered in process and pushed to a Redis list as JSON on
flush, in a single pipeline. A downstream worker pops the list, runs
post-processing and stores the result.
"""

from __future__ import annotations

import redis

from logweave.models.record import LogRecord
from logweave.observability import get_logger

logger = get_logger(__name__)


class RedisBufferSink:
    """Buffers records locally and RPUSHes them on flush."""

    def __init__(self, client: redis.Redis, key: str = "logweave:records"):
        """Initialize sink.

        Args:
            client: Synchronous Redis client
            key: List receiving serialized records
        """
        self._client = client
        self._key = key
        self._buffer: list[LogRecord] = []

    @classmethod
    def from_url(cls, url: str, key: str = "logweave:records") -> RedisBufferSink:
        return cls(redis.Redis.from_url(url, decode_responses=True), key)

    @property
    def pending(self) -> int:
        return len(self._buffer)

    def append(self, record: LogRecord) -> None:
        self._buffer.append(record)

    def flush(self) -> int:
        """Push buffered records.

        The buffer is cleared only after the pipeline succeeds, so a failed
        flush can be retried by the caller.
        """
        if not self._buffer:
            return 0

        payloads = [record.to_json() for record in self._buffer]
        with self._client.pipeline(transaction=True) as pipe:
            pipe.rpush(self._key, *payloads)
            pipe.execute()

        written = len(payloads)
        self._buffer.clear()
        logger.debug("Records flushed", sink="redis", key=self._key, count=written)
        return written

    def health_check(self) -> dict[str, str]:
        """Check Redis connectivity."""
        try:
            self._client.ping()
            return {"status": "healthy"}
        except redis.RedisError as e:
            return {"status": "unhealthy", "error": str(e)}
