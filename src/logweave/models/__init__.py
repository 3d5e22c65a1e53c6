"""Data models for logweave.

All models follow these conventions:
- Timestamps: epoch milliseconds
- IDs: UUID v4 text unless caller-supplied
- Field names: lowercase snake_case
"""

# Base
from .base import LogweaveBaseModel

# Batch ingestion input
from .ingestion import ComponentInfo, ComponentLog, WorkflowLog

# Post-processing controls
from .post_processing import PostProcessingControls, PostProcessingControlsBuilder

# Records
from .record import LogRecord

# Taxonomy
from .taxonomy import (
    Area,
    Category,
    Level,
    LogType,
    SystemAttribute,
    is_known_area,
    is_known_type,
)

__all__ = [
    # Base
    "LogweaveBaseModel",
    # Taxonomy
    "Area",
    "Category",
    "Level",
    "LogType",
    "SystemAttribute",
    "is_known_area",
    "is_known_type",
    # Records
    "LogRecord",
    # Post-processing
    "PostProcessingControls",
    "PostProcessingControlsBuilder",
    # Ingestion
    "ComponentInfo",
    "ComponentLog",
    "WorkflowLog",
]
