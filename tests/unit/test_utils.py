"""
Unit Tests for Error Handling and Logging Utilities
"""
import json
import logging
import pytest
import sys
import os

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'src'))

from schemagen.utils import (
    ConfigConflictError,
    ErrorCategory,
    ErrorSeverity,
    NotFoundWarning,
    QueryFailure,
    QueryFailureWarning,
    clear_context,
    get_logger,
    get_run_id,
    log_context,
    log_operation,
    set_run_id,
)
from schemagen.utils.logging import StructuredFormatter


class TestErrors:
    """Tests for exceptions and diagnostics"""

    def test_conflict_error(self):
        """Conflicts are unrecoverable configuration errors"""
        error = ConfigConflictError("like_table", "not_like_table")
        assert error.category == ErrorCategory.CONFIGURATION
        assert not error.recoverable
        assert str(error).startswith("[configuration]")
        assert error.to_dict()["error_type"] == "ConfigConflictError"

    def test_query_failure_context(self):
        """Query failures carry their SQL and table"""
        error = QueryFailure("failed", sql_query="SELECT 1", table_name="t_user")
        assert error.context.sql_query == "SELECT 1"
        assert error.context.table_name == "t_user"
        assert error.severity == ErrorSeverity.MEDIUM

    def test_warning_from_failure(self):
        """Failures convert into diagnostics"""
        warning = QueryFailureWarning.from_error(
            QueryFailure("failed", sql_query="SELECT 1", table_name="t_user")
        )
        assert warning.kind == "QueryFailureWarning"
        assert warning.to_dict() == {
            "kind": "QueryFailureWarning",
            "message": "failed",
            "table_name": "t_user",
            "severity": "medium",
        }

    def test_not_found_warning(self):
        """Missing names are kept on the diagnostic"""
        warning = NotFoundWarning(message="missing", names=["a", "b"])
        assert warning.names == ["a", "b"]
        assert warning.severity == ErrorSeverity.LOW


class TestLoggingContext:
    """Tests for run and table logging context"""

    def setup_method(self):
        clear_context()

    def test_run_id(self):
        """Run ids are generated when not given"""
        run_id = set_run_id()
        assert get_run_id() == run_id
        assert set_run_id("fixed") == "fixed"
        clear_context()
        assert get_run_id() is None

    def test_log_context_restores(self):
        """Context is restored on exit"""
        set_run_id("outer")
        with log_context(run_id="inner", table_name="t_user"):
            assert get_run_id() == "inner"
        assert get_run_id() == "outer"

    def test_structured_formatter(self):
        """JSON records include the table context"""
        record = logging.LogRecord("schemagen", logging.INFO, __file__, 1, "hello", None, None)
        with log_context(table_name="t_user"):
            entry = json.loads(StructuredFormatter().format(record))
        assert entry["message"] == "hello"
        assert entry["table_name"] == "t_user"

    def test_log_operation_success(self):
        """Completed operations record their status"""
        logger = get_logger("schemagen.test")
        with log_operation(logger, "discover", db_type="sqlite") as ctx:
            ctx["tables"] = 3
        assert ctx["status"] == "success"
        assert ctx["tables"] == 3
        assert "duration_ms" in ctx

    def test_log_operation_failure(self):
        """Failures are logged and re-raised"""
        logger = get_logger("schemagen.test")
        with pytest.raises(RuntimeError):
            with log_operation(logger, "discover") as ctx:
                raise RuntimeError("boom")
        assert ctx["status"] == "error"
        assert ctx["error_type"] == "RuntimeError"
