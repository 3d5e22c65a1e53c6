"""Transaction correlation.

A transaction ties records from independent executions (a request, the
background job it queues, the workflow that job triggers) together under one
identifier. The first execution starts it, hands the identifier along, and
the others resume it.
"""

from __future__ import annotations

from typing import Protocol
from uuid import uuid4

from logweave.observability import get_logger, transaction_id_var

logger = get_logger(__name__)


class IdentifierSource(Protocol):
    """Produces fresh correlation identifiers."""

    def new_id(self) -> str: ...


class UUIDIdentifierSource:
    """Random UUID v4 text, hyphen-grouped."""

    def new_id(self) -> str:
        return str(uuid4())


class TransactionCorrelation:
    """Holds the current transaction identifier for one facade."""

    def __init__(self, id_source: IdentifierSource | None = None) -> None:
        self._id_source = id_source or UUIDIdentifierSource()
        self._transaction_id: str | None = None

    @property
    def current(self) -> str | None:
        return self._transaction_id

    def start(self) -> str:
        """Begin a new transaction and return its identifier."""
        self._set(self._id_source.new_id())
        logger.debug("Transaction started", transaction_id=self._transaction_id)
        return self._transaction_id

    def resume(self, transaction_id: str) -> None:
        """Adopt an identifier issued elsewhere, verbatim."""
        self._set(transaction_id)
        logger.debug("Transaction resumed", transaction_id=transaction_id)

    def stop(self) -> None:
        self._set(None)

    def _set(self, transaction_id: str | None) -> None:
        self._transaction_id = transaction_id
        transaction_id_var.set(transaction_id)
