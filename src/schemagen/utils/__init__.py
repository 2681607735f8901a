"""
Utilities Package for schemagen
"""
from .logging import (
    setup_logging,
    get_logger,
    set_run_id,
    get_run_id,
    clear_context,
    log_context,
    log_operation,
)

from .errors import (
    ErrorSeverity,
    ErrorCategory,
    ErrorContext,
    SchemaGenError,
    ConfigurationError,
    ConfigConflictError,
    DatabaseConnectionError,
    QueryFailure,
    Diagnostic,
    NotFoundWarning,
    EmptyCatalogWarning,
    KeywordWarning,
    QueryFailureWarning,
)

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    "set_run_id",
    "get_run_id",
    "clear_context",
    "log_context",
    "log_operation",
    # Errors
    "ErrorSeverity",
    "ErrorCategory",
    "ErrorContext",
    "SchemaGenError",
    "ConfigurationError",
    "ConfigConflictError",
    "DatabaseConnectionError",
    "QueryFailure",
    # Diagnostics
    "Diagnostic",
    "NotFoundWarning",
    "EmptyCatalogWarning",
    "KeywordWarning",
    "QueryFailureWarning",
]
