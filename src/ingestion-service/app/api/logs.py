"""Batch log ingestion endpoints for workflow engines and UI components."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Header, Request, status
from pydantic import BaseModel, Field

from logweave.core import PARSE_FAILURE_NOTE, FacadeContext
from logweave.models import ComponentLog, LogRecord, WorkflowLog
from logweave.observability import get_logger
from logweave.sinks import BufferSink

logger = get_logger(__name__)
router = APIRouter(prefix="/logs", tags=["Logs"])


class IngestResponse(BaseModel):
    """Result of a batch ingestion."""

    accepted: int = Field(description="Records built and flushed")
    transaction_id: str | None = Field(
        default=None, description="Transaction the batch was resumed into"
    )
    annotated: int = Field(
        default=0, description="Records whose additional fields could not be parsed"
    )


def get_sink(request: Request) -> BufferSink:
    """Dependency providing a sink for one request."""
    return request.app.state.sink_factory()


def _response(records: list[LogRecord], transaction_id: str | None) -> IngestResponse:
    annotated = sum(1 for r in records if r.details and PARSE_FAILURE_NOTE in r.details)
    return IngestResponse(
        accepted=len(records),
        transaction_id=transaction_id,
        annotated=annotated,
    )


@router.post("/workflow", response_model=IngestResponse, status_code=status.HTTP_202_ACCEPTED)
def ingest_workflow_logs(
    entries: list[WorkflowLog],
    sink: Annotated[BufferSink, Depends(get_sink)],
    x_transaction_id: Annotated[str | None, Header()] = None,
) -> IngestResponse:
    """Record a batch of workflow log requests and flush once."""
    with FacadeContext(sink=sink, transaction_id=x_transaction_id) as facade:
        records = facade.log_from_workflow(entries)
        logger.info("Workflow batch ingested", count=len(records))
        return _response(records, facade.transaction_id)


@router.post("/component", response_model=IngestResponse, status_code=status.HTTP_202_ACCEPTED)
def ingest_component_logs(
    entries: list[ComponentLog],
    sink: Annotated[BufferSink, Depends(get_sink)],
    x_transaction_id: Annotated[str | None, Header()] = None,
) -> IngestResponse:
    """Record a batch of UI component log requests and flush once."""
    with FacadeContext(sink=sink, transaction_id=x_transaction_id) as facade:
        records = facade.log_from_component(entries)
        logger.info("Component batch ingested", count=len(records))
        return _response(records, facade.transaction_id)
