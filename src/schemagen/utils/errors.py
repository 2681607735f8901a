"""
Error Handling Module for schemagen
Defines custom exceptions and the non-fatal diagnostics collected during a run
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorSeverity(str, Enum):
    """Error severity levels"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """Error categories for classification"""
    DATABASE = "database"
    CATALOG = "catalog"
    CONFIGURATION = "configuration"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Additional context for errors"""
    run_id: Optional[str] = None
    table_name: Optional[str] = None
    sql_query: Optional[str] = None
    database_type: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.utcnow)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "run_id": self.run_id,
            "table_name": self.table_name,
            "sql_query": self.sql_query,
            "database_type": self.database_type,
            "timestamp": self.timestamp.isoformat(),
            "metadata": self.metadata,
        }


class SchemaGenError(Exception):
    """Base exception for schemagen"""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.INTERNAL,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        context: Optional[ErrorContext] = None,
        recoverable: bool = True,
        suggestions: Optional[List[str]] = None,
        original_error: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.recoverable = recoverable
        self.suggestions = suggestions or []
        self.original_error = original_error

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "recoverable": self.recoverable,
            "suggestions": self.suggestions,
            "context": self.context.to_dict(),
            "original_error": str(self.original_error) if self.original_error else None,
        }

    def __str__(self) -> str:
        return f"[{self.category.value}] {self.message}"


class ConfigurationError(SchemaGenError):
    """Configuration errors"""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        context: Optional[ErrorContext] = None,
        original_error: Optional[Exception] = None
    ):
        suggestions = ["Review configuration settings"]
        if config_key:
            suggestions.append(f"Check configuration for key: {config_key}")

        super().__init__(
            message=message,
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.HIGH,
            context=context,
            recoverable=False,
            suggestions=suggestions,
            original_error=original_error
        )
        self.config_key = config_key


class ConfigConflictError(ConfigurationError):
    """Two mutually exclusive strategy options are both set"""

    def __init__(
        self,
        first_option: str,
        second_option: str,
        context: Optional[ErrorContext] = None
    ):
        super().__init__(
            message=f"<strategy> options '{first_option}' and '{second_option}' "
                    f"are mutually exclusive, configure only one of them",
            config_key=first_option,
            context=context,
        )
        self.suggestions.append(f"Remove either '{first_option}' or '{second_option}'")
        self.first_option = first_option
        self.second_option = second_option


class DatabaseConnectionError(SchemaGenError):
    """Database connection failure"""

    def __init__(
        self,
        message: str,
        context: Optional[ErrorContext] = None,
        original_error: Optional[Exception] = None
    ):
        super().__init__(
            message=message,
            category=ErrorCategory.DATABASE,
            severity=ErrorSeverity.HIGH,
            context=context,
            recoverable=False,
            suggestions=[
                "Check database host and port configuration",
                "Verify database credentials",
                "Install the driver extra for the configured database type",
            ],
            original_error=original_error
        )


class QueryFailure(SchemaGenError):
    """A catalog query failed"""

    def __init__(
        self,
        message: str,
        sql_query: Optional[str] = None,
        table_name: Optional[str] = None,
        context: Optional[ErrorContext] = None,
        original_error: Optional[Exception] = None
    ):
        context = context or ErrorContext()
        context.sql_query = sql_query
        context.table_name = table_name

        suggestions = ["Check that the configured database type matches the catalog"]
        if table_name:
            suggestions.append(f"Check if table '{table_name}' is readable by the connected user")

        super().__init__(
            message=message,
            category=ErrorCategory.CATALOG,
            severity=ErrorSeverity.MEDIUM,
            context=context,
            recoverable=True,
            suggestions=suggestions,
            original_error=original_error
        )
        self.sql_query = sql_query
        self.table_name = table_name


@dataclass
class Diagnostic:
    """A non-fatal problem noticed while building the table models"""
    message: str
    table_name: Optional[str] = None
    severity: ErrorSeverity = ErrorSeverity.LOW

    @property
    def kind(self) -> str:
        return self.__class__.__name__

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "message": self.message,
            "table_name": self.table_name,
            "severity": self.severity.value,
        }


@dataclass
class NotFoundWarning(Diagnostic):
    """Configured include/exclude names that matched no catalog table"""
    names: List[str] = field(default_factory=list)


@dataclass
class EmptyCatalogWarning(Diagnostic):
    """The table list query returned a row with a blank table name"""


@dataclass
class KeywordWarning(Diagnostic):
    """A column name collides with a reserved word"""
    column_name: Optional[str] = None


@dataclass
class QueryFailureWarning(Diagnostic):
    """A catalog query failed and its part of the model was degraded"""
    sql_query: Optional[str] = None
    severity: ErrorSeverity = ErrorSeverity.MEDIUM

    @classmethod
    def from_error(cls, error: QueryFailure) -> "QueryFailureWarning":
        return cls(
            message=error.message,
            table_name=error.table_name,
            sql_query=error.sql_query,
        )
