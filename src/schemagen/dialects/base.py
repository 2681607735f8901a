"""
Base Dialect Query Module
Defines the catalog queries and column accessors each database product supplies
"""
from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Type

from ..catalog import CatalogRow
from ..config import DatabaseType
from ..keys import KeyResolver, MarkerKeyResolver


class BaseDbQuery(ABC):
    """
    Catalog SQL and result-column names for one database product

    tables_sql must end inside a WHERE clause so that filter conditions can
    be appended with " AND ...".
    """

    # Table list accessors
    table_name: str = "NAME"
    table_comment: str = "COMMENT"

    # Field list accessors
    field_name: str = "FIELD"
    field_type: str = "TYPE"
    field_comment: str = "COMMENT"
    field_key: str = "KEY"

    @property
    @abstractmethod
    def database_type(self) -> DatabaseType:
        """Return the database type"""
        pass

    @abstractmethod
    def tables_sql(self, schema_name: Optional[str] = None) -> str:
        """SQL listing the tables of a schema"""
        pass

    @abstractmethod
    def table_fields_sql(self, table_name: str, schema_name: Optional[str] = None) -> str:
        """SQL listing the columns of one table"""
        pass

    def field_custom(self) -> Optional[List[str]]:
        """Extra field-list columns copied into FieldModel.custom_map"""
        return None

    def is_key_identity(self, row: CatalogRow) -> bool:
        """Whether a key column is filled by the database (auto increment)"""
        return False

    def key_resolver(self) -> KeyResolver:
        return MarkerKeyResolver()

    def pk_query_sql(self, table_name: str) -> str:
        """Secondary primary-key query, for dialects resolving keys by constraint lookup"""
        raise NotImplementedError(f"{type(self).__name__} has no primary key query")

    def get_table_comment(self, row: CatalogRow) -> str:
        return self.format_comment(row.get_string(self.table_comment))

    def get_field_comment(self, row: CatalogRow) -> str:
        return self.format_comment(row.get_string(self.field_comment))

    @staticmethod
    def format_comment(comment: Optional[str]) -> str:
        """Blank comments become "", line breaks are replaced by tabs"""
        if comment is None or not comment.strip():
            return ""
        return comment.replace("\r\n", "\t").replace("\n", "\t")

    @staticmethod
    def quote(value: str) -> str:
        """SQL string literal"""
        return "'" + value.replace("'", "''") + "'"

    @staticmethod
    def quote_identifier(name: str, mark: str = '"') -> str:
        """Delimited identifier, the delimiter doubled inside the name"""
        return mark + name.replace(mark, mark * 2) + mark


# Type alias for dialect classes
DbQueryClass = Type[BaseDbQuery]


class DialectRegistry:
    """Registry for dialect query providers using Factory pattern"""

    _dialects: Dict[DatabaseType, DbQueryClass] = {}
    _lock = threading.Lock()

    @classmethod
    def register(cls, db_type: DatabaseType, query_class: DbQueryClass) -> None:
        """Register a dialect query class"""
        with cls._lock:
            cls._dialects[db_type] = query_class

    @classmethod
    def get_query_class(cls, db_type: DatabaseType) -> DbQueryClass:
        """Get dialect query class for database type"""
        with cls._lock:
            if db_type not in cls._dialects:
                raise ValueError(f"No dialect registered for database type: {db_type}")
            return cls._dialects[db_type]

    @classmethod
    def create(cls, db_type: DatabaseType) -> BaseDbQuery:
        """Create dialect query instance for database type"""
        return cls.get_query_class(DatabaseType(db_type))()

    @classmethod
    def get_supported_types(cls) -> List[DatabaseType]:
        """Get list of supported database types"""
        with cls._lock:
            return list(cls._dialects.keys())

    @classmethod
    def is_supported(cls, db_type: DatabaseType) -> bool:
        """Check if database type is supported"""
        with cls._lock:
            return db_type in cls._dialects


def register_dialect(*db_types: DatabaseType):
    """Decorator to register a dialect query class for one or more database types"""
    def decorator(cls: DbQueryClass) -> DbQueryClass:
        for db_type in db_types:
            DialectRegistry.register(db_type, cls)
        return cls
    return decorator
