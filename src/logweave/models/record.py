"""Immutable log record produced by LogBuilder."""

from typing import Any

from pydantic import ConfigDict, Field

from .base import LogweaveBaseModel
from .taxonomy import Category, Level


class LogRecord(LogweaveBaseModel):
    """One classified, attributed log entry ready for buffering.

    category, type and area are always populated; the builder substitutes
    defaults when a caller leaves them blank.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        use_enum_values=False,
    )

    category: Category
    type: str = Field(min_length=1)
    area: str = Field(min_length=1)
    level: Level = Level.INFO
    summary: str | None = None
    details: str | None = None
    stack_trace: str | None = None
    transaction_id: str | None = None
    created_timestamp: int = Field(description="Epoch milliseconds")
    duration: float | None = Field(default=None, description="Milliseconds")
    post_processing: str | None = Field(
        default=None, description="JSON-encoded post-processing controls"
    )
    attributes: dict[str, Any] = Field(default_factory=dict)
    create_issue: bool = False

    def to_json(self) -> str:
        """Serialize for sinks."""
        return self.model_dump_json()
