"""Exceptions raised by the logweave package."""


class LogweaveError(Exception):
    """Base class for logweave errors."""


class BuilderConsumedError(LogweaveError):
    """A LogBuilder was used again after build()."""

    def __init__(self) -> None:
        super().__init__("LogBuilder has already been built; obtain a new builder per record")


class UnsupportedHttpObjectError(LogweaveError, TypeError):
    """Request/response object is neither a Starlette nor an httpx message."""

    def __init__(self, obj: object) -> None:
        self.obj = obj
        super().__init__(f"Cannot format HTTP object of type {type(obj).__name__}")


class SinkConfigurationError(LogweaveError):
    """Configured sink backend cannot be created."""
