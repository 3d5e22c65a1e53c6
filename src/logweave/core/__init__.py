"""Record construction, correlation and dispatch."""

from .builder import LogBuilder, now_millis
from .correlation import IdentifierSource, TransactionCorrelation, UUIDIdentifierSource
from .facade import PARSE_FAILURE_NOTE, FacadeContext, LogFacade, get_facade
from .failures import ExceptionFailure, Failure, as_failure
from .stack import StackOffset, capture_stack

__all__ = [
    # Builder
    "LogBuilder",
    "now_millis",
    # Correlation
    "IdentifierSource",
    "TransactionCorrelation",
    "UUIDIdentifierSource",
    # Facade
    "FacadeContext",
    "LogFacade",
    "PARSE_FAILURE_NOTE",
    "get_facade",
    # Failures
    "ExceptionFailure",
    "Failure",
    "as_failure",
    # Stack
    "StackOffset",
    "capture_stack",
]
