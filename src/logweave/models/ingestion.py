"""Externally-authored log requests accepted by batch ingestion.

Workflow engines and UI components send these in batches. Every field is
optional; the facade fills gaps with source-specific defaults. Input accepts
both snake_case and camelCase keys.
"""

from typing import Any

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

from .base import LogweaveBaseModel


class IngestionBaseModel(LogweaveBaseModel):
    """Lenient input model: camelCase aliases, unknown keys ignored."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
    )


class WorkflowLog(IngestionBaseModel):
    """One log request from a workflow/rules engine step."""

    workflow_name: str | None = Field(default=None, description="Workflow API name")
    element: str | None = Field(default=None, description="Step or element that logged")
    interview_id: str | None = Field(default=None, description="Running workflow instance")
    category: str | None = None
    type: str | None = None
    area: str | None = None
    level: str | None = None
    summary: str | None = None
    details: str | None = None
    stack_trace: str | None = None
    transaction_id: str | None = None
    record_id: str | None = Field(default=None, description="Related record identifier")
    created_timestamp: int | None = Field(default=None, description="Epoch milliseconds")
    duration: float | None = None
    additional_fields: str | dict[str, Any] | None = Field(
        default=None, description="JSON object, or its text, merged into attributes"
    )


class ComponentInfo(IngestionBaseModel):
    """Identifies the UI component that produced a log."""

    name: str | None = None
    function: str | None = None
    action: str | None = None
    category: str | None = None


class ComponentLog(IngestionBaseModel):
    """One log request from a UI component."""

    component: ComponentInfo = Field(default_factory=ComponentInfo)
    category: str | None = None
    type: str | None = None
    area: str | None = None
    level: str | None = None
    summary: str | None = None
    details: str | None = None
    stack_trace: str | None = None
    transaction_id: str | None = None
    user_id: str | None = None
    record_id: str | None = None
    created_timestamp: int | None = None
    duration: float | None = None
    create_issue: bool = False
    additional_fields: str | dict[str, Any] | None = None
