"""
Primary Key Resolution

Catalogs report primary keys differently: most mark key columns inline in
the column listing, some with their own literal, and some only expose keys
through a separate constraint/index view. Each dialect picks one resolver.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, Set

from .catalog import CatalogRow, execute_query
from .utils import get_logger

if TYPE_CHECKING:
    from .dialects.base import BaseDbQuery

logger = get_logger(__name__)

KeyMatcher = Callable[[CatalogRow], bool]


class KeyResolver(ABC):
    """Decides which rows of a field-list query are primary-key columns"""

    @abstractmethod
    def prepare(self, connection: Any, table_name: str, query: "BaseDbQuery") -> KeyMatcher:
        """
        Prepare key detection for one table

        Called before the field-list query runs. May issue its own catalog
        query and raise QueryFailure.

        Returns:
            Predicate telling whether a field-list row is a key column
        """


class InlineKeyResolver(KeyResolver):
    """Reads the key marker column of each field-list row"""

    def prepare(self, connection: Any, table_name: str, query: "BaseDbQuery") -> KeyMatcher:
        def matcher(row: CatalogRow) -> bool:
            key = row.get_string(query.field_key)
            return bool(key and key.strip()) and self.is_key_marker(key)
        return matcher

    @abstractmethod
    def is_key_marker(self, value: str) -> bool:
        pass


class MarkerKeyResolver(InlineKeyResolver):
    """Key columns carry the marker "PRI" (any case)"""

    def __init__(self, marker: str = "PRI"):
        self.marker = marker.upper()

    def is_key_marker(self, value: str) -> bool:
        return value.upper() == self.marker


class FlagKeyResolver(InlineKeyResolver):
    """Key columns carry the literal "1" """

    def __init__(self, flag: str = "1"):
        self.flag = flag

    def is_key_marker(self, value: str) -> bool:
        return value == self.flag


class ConstraintQueryKeyResolver(KeyResolver):
    """Looks key columns up with a secondary constraint query"""

    TRUE_VALUES = ("true", "1", "yes")

    def prepare(self, connection: Any, table_name: str, query: "BaseDbQuery") -> KeyMatcher:
        sql = query.pk_query_sql(table_name)
        result = execute_query(connection, sql, table_name=table_name).raise_for_error()

        key_columns: Set[str] = set()
        for row in result.rows:
            primary_key = row.get_string(query.field_key)
            if primary_key and primary_key.strip().lower() in self.TRUE_VALUES:
                column = row.get_string(query.field_name)
                if column:
                    key_columns.add(column)

        logger.debug(f"Key columns of {table_name}: {sorted(key_columns)}")

        def matcher(row: CatalogRow) -> bool:
            return row.get_string(query.field_name) in key_columns
        return matcher
