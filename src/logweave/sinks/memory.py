"""In-process sink, used for tests and local development."""

from __future__ import annotations

from logweave.models.record import LogRecord
from logweave.observability import get_logger

logger = get_logger(__name__)


class InMemoryBufferSink:
    """Keeps pending and flushed records in lists."""

    def __init__(self) -> None:
        self.pending: list[LogRecord] = []
        self.flushed: list[LogRecord] = []
        self.flush_count = 0

    def append(self, record: LogRecord) -> None:
        self.pending.append(record)

    def flush(self) -> int:
        written = len(self.pending)
        self.flushed.extend(self.pending)
        self.pending.clear()
        self.flush_count += 1
        logger.debug("Records flushed", sink="memory", count=written)
        return written

    @property
    def records(self) -> list[LogRecord]:
        """Everything received, flushed first, in arrival order."""
        return self.flushed + self.pending
