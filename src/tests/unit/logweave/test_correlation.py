"""Unit tests for transaction correlation and stack capture."""

import re
from uuid import UUID

from logweave.core import LogFacade, StackOffset, TransactionCorrelation, capture_stack
from logweave.models import LogType
from logweave.observability import transaction_id_var


def frame_names(stack: str) -> list[str]:
    """Function names in a rendered stack, outermost first."""
    return re.findall(r", in (\S+)\n", stack)


class TestTransactionCorrelation:
    """Test start/resume/stop."""

    def test_default_ids_are_uuid4(self) -> None:
        correlation = TransactionCorrelation()
        transaction_id = correlation.start()
        assert UUID(transaction_id).version == 4
        assert correlation.current == transaction_id

    def test_start_generates_fresh_ids(self) -> None:
        correlation = TransactionCorrelation()
        assert correlation.start() != correlation.start()

    def test_resume_is_verbatim(self) -> None:
        correlation = TransactionCorrelation()
        correlation.resume("not-a-uuid ")
        assert correlation.current == "not-a-uuid "

    def test_stop_clears(self) -> None:
        correlation = TransactionCorrelation()
        correlation.start()
        correlation.stop()
        assert correlation.current is None

    def test_context_var_mirrors_current(self) -> None:
        """Test internal log lines can pick up the active transaction."""
        correlation = TransactionCorrelation()
        correlation.resume("txn-ctx")
        assert transaction_id_var.get() == "txn-ctx"
        correlation.stop()
        assert transaction_id_var.get() is None


class TestFacadeCorrelation:
    """Test records pick up the facade's transaction."""

    def test_records_share_started_transaction(self, facade: LogFacade, sink) -> None:
        transaction_id = facade.start_transaction()
        for i in range(3):
            facade.add_event(LogType.BACKEND, "Accounts", f"step {i}", None)

        assert transaction_id == "txn-0001"
        assert [r.transaction_id for r in sink.pending] == [transaction_id] * 3

    def test_stop_then_build_has_no_transaction(self, facade: LogFacade) -> None:
        facade.start_transaction()
        facade.stop_transaction()
        record = facade.add_warning(LogType.BACKEND, "Accounts", "after stop", None)
        assert record.transaction_id is None

    def test_resume_then_build_uses_given_id(self, facade: LogFacade) -> None:
        facade.resume_transaction("X")
        record = facade.add_warning(LogType.BACKEND, "Accounts", "resumed", None)
        assert record.transaction_id == "X"

    def test_no_transaction_by_default(self, facade: LogFacade) -> None:
        assert facade.transaction_id is None
        assert facade.add_event(None, None, "plain", None).transaction_id is None


class TestStackOffset:
    """Test the offset counter."""

    def test_increment_and_reset(self) -> None:
        offset = StackOffset()
        offset.increment()
        offset.increment()
        assert offset.value == 2
        offset.reset()
        assert offset.value == 0


class TestCaptureStack:
    """Test trimming of capture frames."""

    def test_caller_frame_is_dropped(self) -> None:
        def log_helper() -> str:
            return capture_stack()

        names = frame_names(log_helper())
        assert names[-1] == "test_caller_frame_is_dropped"
        assert "log_helper" not in names
        assert "capture_stack" not in names

    def test_skip_drops_wrapper_frames(self) -> None:
        def inner() -> str:
            return capture_stack(skip=1)

        def wrapper() -> str:
            return inner()

        names = frame_names(wrapper())
        assert names[-1] == "test_skip_drops_wrapper_frames"
        assert "wrapper" not in names

    def test_oversized_skip_yields_empty(self) -> None:
        assert capture_stack(skip=10_000) == ""
