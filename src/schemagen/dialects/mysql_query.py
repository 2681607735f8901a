"""
MySQL Dialect Query
Catalog queries for MySQL/MariaDB
"""
from __future__ import annotations

from typing import List, Optional

from ..catalog import CatalogRow
from ..config import DatabaseType
from .base import BaseDbQuery, register_dialect


@register_dialect(DatabaseType.MYSQL, DatabaseType.MARIADB)
class MySqlQuery(BaseDbQuery):
    """MySQL/MariaDB catalog queries

    SHOW TABLE STATUS reports the comment "VIEW" for views.
    """

    table_name = "NAME"
    table_comment = "COMMENT"
    field_name = "FIELD"
    field_type = "TYPE"
    field_comment = "COMMENT"
    field_key = "KEY"

    @property
    def database_type(self) -> DatabaseType:
        return DatabaseType.MYSQL

    def tables_sql(self, schema_name: Optional[str] = None) -> str:
        return "show table status WHERE 1=1"

    def table_fields_sql(self, table_name: str, schema_name: Optional[str] = None) -> str:
        return f"show full fields FROM {self.quote_identifier(table_name, '`')}"

    def field_custom(self) -> Optional[List[str]]:
        return ["NULL", "DEFAULT"]

    def is_key_identity(self, row: CatalogRow) -> bool:
        return "auto_increment" == (row.get_string("EXTRA") or "").lower()
