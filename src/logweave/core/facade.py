"""Dispatch facade.

The facade is the single entry point for call sites. It classifies records,
stamps the active transaction, captures stacks, and hands records to a
BufferSink.

Every category has two methods:
- add_<category>(): build the record and append it to the sink
- <category>(): add, then flush immediately

One facade serves one logical execution (a request, a job, a task). Use
get_facade() to reach the facade bound to the current context, or
FacadeContext to bind a fresh one to a scope:

    with FacadeContext(sink=sink) as facade:
        facade.start_transaction()
        facade.error(LogType.BACKEND, Area.ACCOUNTS, "Sync failed", details)
"""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import Any

from logweave.config import Settings, get_settings
from logweave.http import HttpPairFormatter
from logweave.models.ingestion import ComponentLog, WorkflowLog
from logweave.models.post_processing import PostProcessingControlsBuilder
from logweave.models.record import LogRecord
from logweave.models.taxonomy import Area, Category, Level, LogType, SystemAttribute
from logweave.observability import get_logger, transaction_id_var
from logweave.sinks import BufferSink, create_sink

from .builder import LogBuilder
from .correlation import IdentifierSource, TransactionCorrelation
from .failures import Failure, as_failure
from .stack import StackOffset, capture_stack

logger = get_logger(__name__)

PARSE_FAILURE_NOTE = "Additional fields could not be parsed"


class LogFacade:
    """Builds classified records and dispatches them to a sink."""

    def __init__(
        self,
        sink: BufferSink | None = None,
        *,
        id_source: IdentifierSource | None = None,
        formatter: HttpPairFormatter | None = None,
        settings: Settings | None = None,
    ):
        settings = settings or get_settings()
        self._sink = sink if sink is not None else create_sink(settings)
        self._correlation = TransactionCorrelation(id_source)
        self._offset = StackOffset()
        self._formatter = formatter or HttpPairFormatter(settings.http)
        self._default_type = settings.records.default_type
        self._default_area = settings.records.default_area
        self._template: LogBuilder | None = None

    @property
    def sink(self) -> BufferSink:
        return self._sink

    @property
    def stack_offset(self) -> StackOffset:
        return self._offset

    # =========================================================================
    # Transactions
    # =========================================================================

    @property
    def transaction_id(self) -> str | None:
        return self._correlation.current

    def start_transaction(self) -> str:
        """Start a new transaction; every following record carries its ID."""
        return self._correlation.start()

    def resume_transaction(self, transaction_id: str) -> None:
        """Continue a transaction started by another execution."""
        self._correlation.resume(transaction_id)

    def stop_transaction(self) -> None:
        self._correlation.stop()

    # =========================================================================
    # Builders and generic dispatch
    # =========================================================================

    def new_builder(self) -> LogBuilder:
        """Fresh builder stamped with the current transaction."""
        return LogBuilder(self._default_type, self._default_area).transaction_id(
            self.transaction_id
        )

    def set_template(self, builder: LogBuilder | None) -> None:
        """Remember common fields to start later records from."""
        self._template = builder.copy() if builder is not None else None

    def from_template(self) -> LogBuilder:
        """Copy of the template, or a fresh builder when none is set."""
        if self._template is None:
            return self.new_builder()
        builder = self._template.copy()
        if builder.get("transaction_id") is None:
            builder.transaction_id(self.transaction_id)
        return builder

    def add_log(self, builder: LogBuilder) -> LogRecord:
        """Build and append without flushing."""
        record = builder.build()
        self._sink.append(record)
        logger.debug(
            "Log record buffered",
            category=record.category.value,
            record_type=record.type,
            area=record.area,
        )
        return record

    def log(self, builder: LogBuilder) -> LogRecord:
        with self._emitting():
            return self.add_log(builder)

    def flush(self) -> int:
        return self._sink.flush()

    @contextmanager
    def _emitting(self) -> Iterator[None]:
        # Offset covers the emit method's frame; the with-block adds none
        self._offset.increment()
        try:
            yield
            self.flush()
        finally:
            self._offset.reset()

    # =========================================================================
    # Errors
    # =========================================================================

    def add_error(
        self,
        type: LogType | str | None,
        area: Area | str | None,
        summary: str | None,
        details: str | None,
    ) -> LogRecord:
        """Error record with a stack captured at the call site."""
        builder = (
            self.new_builder()
            .category(Category.APPLICATION)
            .level(Level.ERROR)
            .type(type)
            .area(area)
            .summary(summary)
            .details(details)
            .stack_trace(capture_stack(self._offset.value))
            .create_issue()
        )
        return self.add_log(builder)

    def error(
        self,
        type: LogType | str | None,
        area: Area | str | None,
        summary: str | None,
        details: str | None,
    ) -> LogRecord:
        with self._emitting():
            return self.add_error(type, area, summary, details)

    def add_exception(self, failure: BaseException | Failure, area: Area | str | None) -> LogRecord:
        """Error record classified from a caught failure.

        The stack is the failure's own, not the logging call site's.
        """
        builder = self._failure_builder(as_failure(failure)).category(Category.APPLICATION).area(area)
        return self.add_log(builder)

    def exception(self, failure: BaseException | Failure, area: Area | str | None) -> LogRecord:
        with self._emitting():
            return self.add_exception(failure, area)

    def _failure_builder(self, failure: Failure) -> LogBuilder:
        type_name = failure.type_name if failure.type_name and failure.type_name.strip() else None
        return (
            self.new_builder()
            .level(Level.ERROR)
            .type(type_name or LogType.BACKEND)
            .summary(failure.message)
            .details(f"{failure}\n\n{failure.stack_trace}")
            .stack_trace(failure.stack_trace)
            .create_issue()
        )

    # =========================================================================
    # Warnings, debug and events
    # =========================================================================

    def add_warning(
        self,
        type: LogType | str | None,
        area: Area | str | None,
        summary: str | None,
        details: str | None,
    ) -> LogRecord:
        """Warning record; stack and context are left to post-processing."""
        controls = PostProcessingControlsBuilder().stack_trace().user_info().object_info()
        builder = (
            self.new_builder()
            .category(Category.WARNING)
            .level(Level.WARNING)
            .type(type)
            .area(area)
            .summary(summary)
            .details(details)
            .post_processing(controls)
        )
        return self.add_log(builder)

    def warning(
        self,
        type: LogType | str | None,
        area: Area | str | None,
        summary: str | None,
        details: str | None,
    ) -> LogRecord:
        with self._emitting():
            return self.add_warning(type, area, summary, details)

    def add_debug(
        self,
        type: LogType | str | None,
        area: Area | str | None,
        summary: str | None,
        details: str | None,
        duration: float | None = None,
    ) -> LogRecord:
        """Debug record.

        Captures a stack locally and also requests one from post-processing.
        """
        controls = (
            PostProcessingControlsBuilder()
            .stack_trace()
            .user_info()
            .object_info()
            .pending_jobs()
            .total_active_session()
        )
        builder = (
            self.new_builder()
            .category(Category.DEBUG)
            .level(Level.DEBUG)
            .type(type)
            .area(area)
            .summary(summary)
            .details(details)
            .duration(duration)
            .stack_trace(capture_stack(self._offset.value))
            .post_processing(controls)
        )
        return self.add_log(builder)

    def debug(
        self,
        type: LogType | str | None,
        area: Area | str | None,
        summary: str | None,
        details: str | None,
        duration: float | None = None,
    ) -> LogRecord:
        with self._emitting():
            return self.add_debug(type, area, summary, details, duration)

    def add_event(
        self,
        type: LogType | str | None,
        area: Area | str | None,
        summary: str | None,
        details: str | None,
        level: Level | str = Level.INFO,
    ) -> LogRecord:
        controls = PostProcessingControlsBuilder().stack_trace().user_info().object_info()
        builder = (
            self.new_builder()
            .category(Category.EVENT)
            .level(level)
            .type(type)
            .area(area)
            .summary(summary)
            .details(details)
            .post_processing(controls)
        )
        return self.add_log(builder)

    def event(
        self,
        type: LogType | str | None,
        area: Area | str | None,
        summary: str | None,
        details: str | None,
        level: Level | str = Level.INFO,
    ) -> LogRecord:
        with self._emitting():
            return self.add_event(type, area, summary, details, level)

    # =========================================================================
    # Integration errors
    # =========================================================================

    def add_integration_error(
        self,
        type: LogType | str | None,
        area: Area | str | None,
        summary: str | None,
        details: str | None,
        request: Any,
        response: Any,
    ) -> LogRecord:
        """Integration failure described by the caller.

        request/response may be Starlette (inbound) or httpx (outbound)
        messages.
        """
        builder = (
            self.new_builder()
            .category(Category.INTEGRATION)
            .level(Level.ERROR)
            .type(type)
            .area(area)
            .summary(summary)
            .details(details)
            .stack_trace(capture_stack(self._offset.value))
            .attribute(SystemAttribute.HTTP_PAIR, self._formatter.to_json(request, response))
            .create_issue()
        )
        return self.add_log(builder)

    def integration_error(
        self,
        type: LogType | str | None,
        area: Area | str | None,
        summary: str | None,
        details: str | None,
        request: Any,
        response: Any,
    ) -> LogRecord:
        with self._emitting():
            return self.add_integration_error(type, area, summary, details, request, response)

    def add_integration_exception(
        self,
        failure: BaseException | Failure,
        area: Area | str | None,
        request: Any,
        response: Any,
    ) -> LogRecord:
        """Integration failure classified from a caught exception."""
        builder = (
            self._failure_builder(as_failure(failure))
            .category(Category.INTEGRATION)
            .area(area)
            .attribute(SystemAttribute.HTTP_PAIR, self._formatter.to_json(request, response))
        )
        return self.add_log(builder)

    def integration_exception(
        self,
        failure: BaseException | Failure,
        area: Area | str | None,
        request: Any,
        response: Any,
    ) -> LogRecord:
        with self._emitting():
            return self.add_integration_exception(failure, area, request, response)

    # =========================================================================
    # Batch ingestion
    # =========================================================================

    def log_from_workflow(
        self, entries: Sequence[WorkflowLog | Mapping[str, Any]]
    ) -> list[LogRecord]:
        """Record a batch from a workflow engine, then flush once.

        The whole batch is validated before anything reaches the sink.
        """
        validated = [WorkflowLog.model_validate(entry) for entry in entries]
        records = [self.add_log(self._workflow_builder(entry)) for entry in validated]
        self.flush()
        return records

    def log_from_component(
        self, entries: Sequence[ComponentLog | Mapping[str, Any]]
    ) -> list[LogRecord]:
        """Record a batch from UI components, then flush once."""
        validated = [ComponentLog.model_validate(entry) for entry in entries]
        records = [self.add_log(self._component_builder(entry)) for entry in validated]
        self.flush()
        return records

    def _workflow_builder(self, entry: WorkflowLog) -> LogBuilder:
        summary = entry.summary
        if not summary:
            summary = ": ".join(p for p in (entry.workflow_name, entry.element) if p) or None

        builder = (
            self.new_builder()
            .category(Category.parse(entry.category) or Category.WORKFLOW)
            .type(entry.type or LogType.BACKEND)
            .area(entry.area or entry.workflow_name)
            .level(Level.parse(entry.level, Level.INFO))
            .summary(summary)
            .stack_trace(entry.stack_trace)
            .created_timestamp(entry.created_timestamp)
            .duration(entry.duration)
            .related_object(entry.record_id)
        )
        if entry.transaction_id:
            builder.transaction_id(entry.transaction_id)
        if entry.interview_id:
            builder.attribute(SystemAttribute.FLOW_INTERVIEW_ID, entry.interview_id)
        return self._apply_additional_fields(builder, entry.details, entry.additional_fields)

    def _component_builder(self, entry: ComponentLog) -> LogBuilder:
        component = entry.component
        operation = ".".join(
            p for p in (component.name, component.function or component.action) if p
        ) or None
        category = (
            Category.parse(entry.category)
            or Category.parse(component.category)
            or Category.COMPONENT
        )

        builder = (
            self.new_builder()
            .category(category)
            .type(entry.type or LogType.FRONTEND)
            .area(entry.area or component.name)
            .level(Level.parse(entry.level, Level.INFO))
            .summary(entry.summary or operation)
            .stack_trace(entry.stack_trace)
            .created_timestamp(entry.created_timestamp)
            .duration(entry.duration)
            .create_issue(entry.create_issue)
            .attribute(SystemAttribute.USER_ID, entry.user_id)
            .attribute(SystemAttribute.OPERATION, operation)
            .attribute(SystemAttribute.RELATED_OBJECT_ID, entry.record_id)
        )
        if entry.transaction_id:
            builder.transaction_id(entry.transaction_id)
        return self._apply_additional_fields(builder, entry.details, entry.additional_fields)

    def _apply_additional_fields(
        self, builder: LogBuilder, details: str | None, raw: str | dict[str, Any] | None
    ) -> LogBuilder:
        """Merge caller JSON into attributes; annotate details if it is malformed."""
        if isinstance(raw, dict):
            builder.attributes(raw)
        elif raw and raw.strip():
            try:
                fields = json.loads(raw)
                if not isinstance(fields, dict):
                    raise ValueError(f"expected a JSON object, got {type(fields).__name__}")
            except ValueError as e:
                logger.warning(
                    "Additional fields could not be parsed",
                    error=str(e),
                    transaction_id=builder.get("transaction_id"),
                )
                note = f"{PARSE_FAILURE_NOTE}: {e}"
                details = f"{details}\n\n{note}" if details else note
            else:
                builder.attributes(fields)
        return builder.details(details)


# =============================================================================
# Context binding
# =============================================================================

_current_facade: ContextVar[LogFacade | None] = ContextVar("current_facade", default=None)


def get_facade() -> LogFacade:
    """Facade bound to the current context, created on first access."""
    facade = _current_facade.get()
    if facade is None:
        facade = LogFacade()
        _current_facade.set(facade)
    return facade


class FacadeContext:
    """Binds a fresh facade to a scope.

    Usage:
        with FacadeContext(sink=sink, transaction_id=incoming_id) as facade:
            facade.warning(...)
    """

    def __init__(
        self,
        sink: BufferSink | None = None,
        transaction_id: str | None = None,
        **facade_kwargs: Any,
    ):
        self.facade = LogFacade(sink, **facade_kwargs)
        self._transaction_id = transaction_id
        self._token: Token[LogFacade | None] | None = None
        self._transaction_token: Token[str | None] | None = None

    def __enter__(self) -> LogFacade:
        self._token = _current_facade.set(self.facade)
        # Transactions started inside the scope must not outlive it
        self._transaction_token = transaction_id_var.set(None)
        if self._transaction_id:
            self.facade.resume_transaction(self._transaction_id)
        return self.facade

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if self._transaction_token is not None:
            transaction_id_var.reset(self._transaction_token)
            self._transaction_token = None
        if self._token is not None:
            _current_facade.reset(self._token)
            self._token = None

    async def __aenter__(self) -> LogFacade:
        return self.__enter__()

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.__exit__(exc_type, exc_val, exc_tb)
