"""Pytest configuration and shared fixtures."""

import os
from typing import Any

import pytest

# Set test environment before importing settings
os.environ["ENV"] = "development"
os.environ["LOG_LEVEL"] = "DEBUG"
os.environ["LOG_FORMAT"] = "text"
os.environ["SINK_BACKEND"] = "memory"

from logweave.core import LogFacade  # noqa: E402
from logweave.sinks import InMemoryBufferSink  # noqa: E402


class SequentialIdSource:
    """Predictable transaction identifiers."""

    def __init__(self) -> None:
        self.issued = 0

    def new_id(self) -> str:
        self.issued += 1
        return f"txn-{self.issued:04d}"


class FailingFlushSink(InMemoryBufferSink):
    """Sink whose flush always fails."""

    def flush(self) -> int:
        raise RuntimeError("storage unavailable")


@pytest.fixture
def sink() -> InMemoryBufferSink:
    return InMemoryBufferSink()


@pytest.fixture
def id_source() -> SequentialIdSource:
    return SequentialIdSource()


@pytest.fixture
def facade(sink: InMemoryBufferSink, id_source: SequentialIdSource) -> LogFacade:
    """Facade writing to an in-memory sink."""
    return LogFacade(sink, id_source=id_source)


@pytest.fixture
def failing_facade() -> LogFacade:
    return LogFacade(FailingFlushSink())


@pytest.fixture
def sample_workflow_log() -> dict[str, Any]:
    """Workflow log request as a workflow engine would send it."""
    return {
        "workflowName": "Close_Opportunity",
        "element": "Update_Records_1",
        "interviewId": "0Fo5e000000AbCd",
        "summary": "Opportunity closed",
        "details": "Stage moved to Closed Won",
        "recordId": "0065e00000XyZ12",
        "additionalFields": '{"amount": 1200, "currency": "EUR"}',
    }


@pytest.fixture
def sample_component_log() -> dict[str, Any]:
    """Component log request as a UI component would send it."""
    return {
        "component": {
            "name": "accountCard",
            "function": "handleSave",
            "category": "Component",
        },
        "summary": "Save failed",
        "details": "Validation rule blocked save",
        "level": "error",
        "userId": "0055e000001UsEr",
        "recordId": "0015e00000AcCnT",
    }


# =============================================================================
# Markers
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line(
        "markers", "integration: Integration tests (require external services)"
    )
