"""Tests for reaction_service.utils.service_logger and consume.logger."""

from __future__ import annotations

from io import StringIO
from typing import Any
from unittest.mock import MagicMock

from rich.console import Console

from reaction_service.consume.logger import ConsumeLogger
from reaction_service.consume.subscriber import TopicStats
from reaction_service.utils.service_logger import BaseServiceLogger


def _capture(logger: BaseServiceLogger) -> BaseServiceLogger:
    logger.console = Console(file=StringIO(), force_terminal=True, width=120)
    return logger


def _output(logger: BaseServiceLogger) -> str:
    logger.console.file.seek(0)
    return logger.console.file.read()


class ConcreteLogger(BaseServiceLogger):
    """Concrete implementation for testing the abstract base class."""

    def __init__(self) -> None:
        super().__init__("test_logger")

    def summary(self, **kwargs: Any) -> None:
        self.print_summary("Test", elapsed=0.0, stats={})


# ---------------------------------------------------------------------------
# TestBaseServiceLogger
# ---------------------------------------------------------------------------


class TestBaseServiceLogger:
    """Tests for BaseServiceLogger."""

    def test_info_delegates_to_python_logger(self) -> None:
        logger = ConcreteLogger()
        logger._logger = MagicMock()

        logger.info("hello")

        logger._logger.info.assert_called_once_with("hello")

    def test_error_delegates_to_python_logger(self) -> None:
        logger = ConcreteLogger()
        logger._logger = MagicMock()

        logger.error("boom")

        logger._logger.error.assert_called_once_with("boom")

    def test_success_prints_checkmark(self) -> None:
        logger = _capture(ConcreteLogger())

        logger.success("done")

        assert "done" in _output(logger)

    def test_print_summary_outputs_panel(self) -> None:
        logger = _capture(ConcreteLogger())

        logger.print_summary(
            "Test Service",
            elapsed=12.3,
            stats={"Messages": 1200},
            extra_sections={"topic.a": {"received": 5}},
        )

        output = _output(logger)
        assert "Test Service Stopped" in output
        assert "1,200" in output
        assert "topic.a" in output
        assert "12.3s" in output


# ---------------------------------------------------------------------------
# TestConsumeLogger
# ---------------------------------------------------------------------------


class TestConsumeLogger:
    """Tests for ConsumeLogger."""

    def test_cascade_applied_names_single_resource(self) -> None:
        logger = ConsumeLogger()
        logger._logger = MagicMock()

        logger.cascade_applied("t", ["r1"])

        assert "r1" in logger._logger.info.call_args[0][0]

    def test_cascade_applied_counts_many_resources(self) -> None:
        logger = ConsumeLogger()
        logger._logger = MagicMock()

        logger.cascade_applied("t", ["r1", "r2", "r3"])

        assert "3 resources" in logger._logger.info.call_args[0][0]

    def test_cascade_failed_logs_with_traceback(self) -> None:
        logger = ConsumeLogger()
        logger._logger = MagicMock()

        try:
            raise RuntimeError("db down")
        except RuntimeError as e:
            logger.cascade_failed("t", ["r1"], e)

        msg = logger._logger.exception.call_args[0][0]
        assert "r1" in msg
        assert "db down" in msg

    def test_retrying_pending_logs_delay(self) -> None:
        logger = ConsumeLogger()
        logger._logger = MagicMock()

        logger.retrying_pending("t", 4.0)

        assert "4.0s" in logger._logger.warning.call_args[0][0]

    def test_reconnecting_logs_warning(self) -> None:
        logger = ConsumeLogger()
        logger._logger = MagicMock()

        logger.reconnecting("t", 2.0, "gone")

        msg = logger._logger.warning.call_args[0][0]
        assert "2.0" in msg
        assert "gone" in msg

    def test_summary_totals_topics(self) -> None:
        logger = _capture(ConsumeLogger())
        stats = {"a": TopicStats(received=2, cascaded=2), "b": TopicStats(received=1, failed=1)}

        logger.summary(stats=stats, elapsed=3.0)

        output = _output(logger)
        assert "Cascade consumer Stopped" in output
        assert "Messages received" in output
