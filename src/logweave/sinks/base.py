"""Buffer/flush contract between the facade and persistence."""

from typing import Protocol

from logweave.models.record import LogRecord


class BufferSink(Protocol):
    """Destination for built records.

    append() must be cheap and in-memory. flush() persists everything
    appended so far and may be slow; its errors reach the caller unchanged.
    """

    def append(self, record: LogRecord) -> None:
        """Queue one record."""

    def flush(self) -> int:
        """Persist queued records and return how many were written."""
