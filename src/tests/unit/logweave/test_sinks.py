"""Unit tests for buffer sinks."""

import json
from unittest.mock import MagicMock

import pytest
import redis

from logweave.config import Settings, SinkBackend, SinkSettings
from logweave.core import LogBuilder
from logweave.sinks import InMemoryBufferSink, RedisBufferSink, create_sink


def make_record(summary: str):
    return LogBuilder().summary(summary).build()


@pytest.fixture
def redis_client():
    """Mock synchronous Redis client with a pipeline."""
    client = MagicMock()
    pipe = MagicMock()
    client.pipeline.return_value.__enter__.return_value = pipe
    client.pipe = pipe
    return client


class TestInMemorySink:
    """Test the in-process sink."""

    def test_append_then_flush(self) -> None:
        sink = InMemoryBufferSink()
        first, second = make_record("a"), make_record("b")
        sink.append(first)
        sink.append(second)

        assert sink.pending == [first, second]
        assert sink.flush() == 2
        assert sink.flushed == [first, second]
        assert sink.pending == []

    def test_records_in_arrival_order(self) -> None:
        sink = InMemoryBufferSink()
        first, second = make_record("a"), make_record("b")
        sink.append(first)
        sink.flush()
        sink.append(second)
        assert sink.records == [first, second]


class TestRedisSink:
    """Test the Redis list sink."""

    def test_flush_pushes_json(self, redis_client) -> None:
        sink = RedisBufferSink(redis_client, key="logs:test")
        sink.append(make_record("a"))
        sink.append(make_record("b"))

        assert sink.flush() == 2

        args = redis_client.pipe.rpush.call_args.args
        assert args[0] == "logs:test"
        assert [json.loads(p)["summary"] for p in args[1:]] == ["a", "b"]
        redis_client.pipe.execute.assert_called_once()
        assert sink.pending == 0

    def test_empty_flush_skips_redis(self, redis_client) -> None:
        sink = RedisBufferSink(redis_client)
        assert sink.flush() == 0
        redis_client.pipeline.assert_not_called()

    def test_failed_flush_keeps_buffer(self, redis_client) -> None:
        """Test redis errors propagate and nothing is lost."""
        redis_client.pipe.execute.side_effect = redis.ConnectionError("down")
        sink = RedisBufferSink(redis_client)
        sink.append(make_record("a"))

        with pytest.raises(redis.ConnectionError):
            sink.flush()
        assert sink.pending == 1

    def test_health_check(self, redis_client) -> None:
        sink = RedisBufferSink(redis_client)
        assert sink.health_check() == {"status": "healthy"}

        redis_client.ping.side_effect = redis.ConnectionError("down")
        assert sink.health_check()["status"] == "unhealthy"


class TestCreateSink:
    """Test sink selection from settings."""

    def test_memory_backend(self) -> None:
        settings = Settings(sink=SinkSettings(backend=SinkBackend.MEMORY))
        assert isinstance(create_sink(settings), InMemoryBufferSink)

    def test_redis_backend(self) -> None:
        settings = Settings(sink=SinkSettings(backend=SinkBackend.REDIS, redis_key="logs:x"))
        sink = create_sink(settings)
        assert isinstance(sink, RedisBufferSink)
        assert sink.pending == 0
