"""Test fixtures for the Ingestion service."""

from __future__ import annotations

import os

import pytest
from fastapi.testclient import TestClient

os.environ["ENV"] = "development"
os.environ["LOG_FORMAT"] = "text"
os.environ["SINK_BACKEND"] = "memory"

from app.main import app  # noqa: E402
from logweave.sinks import InMemoryBufferSink  # noqa: E402


@pytest.fixture
def recording_sink() -> InMemoryBufferSink:
    return InMemoryBufferSink()


@pytest.fixture
def client(recording_sink: InMemoryBufferSink):
    """Test client whose requests all write to one recording sink."""
    with TestClient(app) as test_client:
        app.state.sink_factory = lambda: recording_sink
        yield test_client
