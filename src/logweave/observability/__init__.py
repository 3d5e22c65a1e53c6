"""Structured logging for logweave internals."""

from .logging import (
    add_transaction_context,
    get_logger,
    setup_logging,
    transaction_id_var,
)

__all__ = [
    # Setup
    "setup_logging",
    "get_logger",
    # Context
    "transaction_id_var",
    "add_transaction_context",
]
