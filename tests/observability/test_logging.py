"""Tests for structured logging."""

import pytest

from blognest.observability.logging import (
    add_session_id,
    clear_session_id,
    get_logger,
    session_id_var,
    set_session_id,
    setup_logging,
)


class TestStructuredLogging:
    """Tests for structured logging setup."""

    def test_setup_logging_with_json_format(self) -> None:
        """setup_logging should configure JSON logging."""
        setup_logging(log_level="INFO", json_logs=True)
        logger = get_logger(__name__)
        assert logger is not None

    def test_setup_logging_with_console_format(self) -> None:
        """setup_logging should configure console logging."""
        setup_logging(log_level="DEBUG", json_logs=False)
        logger = get_logger(__name__)
        assert logger is not None

    def test_setup_logging_rejects_unknown_level(self) -> None:
        """An unknown level name should raise ValueError."""
        with pytest.raises(ValueError, match="Unknown log level"):
            setup_logging(log_level="chatty")

    def test_logs_go_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Log lines should not be written to stdout."""
        setup_logging(log_level="INFO", json_logs=True)
        get_logger("blognest.test").info("posts_saved", count=2)

        captured = capsys.readouterr()
        assert "posts_saved" not in captured.out
        assert "posts_saved" in captured.err

    def test_get_logger_returns_logger(self) -> None:
        """get_logger should return a valid logger instance."""
        logger = get_logger("test_module")
        assert hasattr(logger, "info")
        assert hasattr(logger, "error")
        assert hasattr(logger, "warning")


class TestSessionId:
    """Tests for session ID management."""

    def test_session_id_added_to_events(self) -> None:
        """add_session_id should stamp events while a session is active."""
        set_session_id("run-123")
        try:
            event = add_session_id(None, "info", {"event": "posts_saved"})
        finally:
            clear_session_id()

        assert event["session_id"] == "run-123"

    def test_clear_session_id_removes_id(self) -> None:
        """After clear_session_id events are no longer stamped."""
        set_session_id("run-123")
        clear_session_id()

        assert session_id_var.get() is None
        assert "session_id" not in add_session_id(None, "info", {"event": "posts_saved"})
