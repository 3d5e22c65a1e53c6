"""logweave - structured logging facade.

This package contains:
- core: record builder, transaction correlation, dispatch facade
- models: record, taxonomy, post-processing and ingestion models
- sinks: buffer/flush destinations
- http: request/response formatting for integration records
- config: configuration management
- observability: structured logging for logweave itself
"""

__version__ = "0.1.0"

from logweave.core import (
    FacadeContext,
    LogBuilder,
    LogFacade,
    get_facade,
)
from logweave.models import (
    Area,
    Category,
    Level,
    LogRecord,
    LogType,
    PostProcessingControlsBuilder,
)

__all__ = [
    "Area",
    "Category",
    "FacadeContext",
    "Level",
    "LogBuilder",
    "LogFacade",
    "LogRecord",
    "LogType",
    "PostProcessingControlsBuilder",
    "get_facade",
]
