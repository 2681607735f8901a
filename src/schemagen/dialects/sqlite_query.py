"""
SQLite Dialect Query
Catalog queries for SQLite
"""
from __future__ import annotations

from typing import Optional

from ..catalog import CatalogRow
from ..config import DatabaseType
from ..keys import FlagKeyResolver, KeyResolver
from .base import BaseDbQuery, register_dialect


@register_dialect(DatabaseType.SQLITE)
class SqliteQuery(BaseDbQuery):
    """SQLite catalog queries

    sqlite_master has no comments, so views get the comment "VIEW" and
    tables an empty one. PRAGMA table_info reports the key position in "pk".
    """

    table_name = "name"
    table_comment = "comment"
    field_name = "name"
    field_type = "type"
    field_comment = "comment"
    field_key = "pk"

    @property
    def database_type(self) -> DatabaseType:
        return DatabaseType.SQLITE

    def tables_sql(self, schema_name: Optional[str] = None) -> str:
        return (
            "SELECT name, CASE WHEN type = 'view' THEN 'VIEW' ELSE '' END AS comment "
            "FROM sqlite_master "
            "WHERE type IN ('table', 'view') AND name NOT LIKE 'sqlite_%'"
        )

    def table_fields_sql(self, table_name: str, schema_name: Optional[str] = None) -> str:
        return f"PRAGMA table_info({self.quote(table_name)})"

    def field_custom(self):
        return ["notnull", "dflt_value"]

    def key_resolver(self) -> KeyResolver:
        return FlagKeyResolver("1")

    def is_key_identity(self, row: CatalogRow) -> bool:
        # INTEGER PRIMARY KEY aliases the rowid
        return (row.get_string(self.field_type) or "").upper() == "INTEGER"
