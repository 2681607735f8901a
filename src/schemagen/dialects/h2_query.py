"""
H2 Dialect Query
Catalog queries for the H2 database
"""
from __future__ import annotations

from typing import Optional

from ..catalog import CatalogRow
from ..config import DatabaseType
from ..keys import ConstraintQueryKeyResolver, KeyResolver
from .base import BaseDbQuery, register_dialect


@register_dialect(DatabaseType.H2)
class H2Query(BaseDbQuery):
    """H2 catalog queries

    INFORMATION_SCHEMA.COLUMNS carries no key marker; keys come from the
    PRIMARY_KEY flag of INFORMATION_SCHEMA.INDEXES.
    """

    table_name = "TABLE_NAME"
    table_comment = "REMARKS"
    field_name = "COLUMN_NAME"
    field_type = "TYPE_NAME"
    field_comment = "REMARKS"
    field_key = "PRIMARY_KEY"

    @property
    def database_type(self) -> DatabaseType:
        return DatabaseType.H2

    def tables_sql(self, schema_name: Optional[str] = None) -> str:
        return (
            "SELECT * FROM INFORMATION_SCHEMA.TABLES "
            f"WHERE TABLE_SCHEMA = {self.quote(schema_name or 'PUBLIC')}"
        )

    def table_fields_sql(self, table_name: str, schema_name: Optional[str] = None) -> str:
        return (
            "SELECT * FROM INFORMATION_SCHEMA.COLUMNS "
            f"WHERE TABLE_SCHEMA = {self.quote(schema_name or 'PUBLIC')} "
            f"AND TABLE_NAME = {self.quote(table_name)} ORDER BY ORDINAL_POSITION"
        )

    def pk_query_sql(self, table_name: str) -> str:
        return f"SELECT * FROM INFORMATION_SCHEMA.INDEXES WHERE TABLE_NAME = {self.quote(table_name)}"

    def key_resolver(self) -> KeyResolver:
        return ConstraintQueryKeyResolver()

    def is_key_identity(self, row: CatalogRow) -> bool:
        default = (row.get_string("COLUMN_DEFAULT") or "").upper()
        return "NEXT VALUE FOR" in default or (row.get_string("IS_IDENTITY") or "").upper() == "YES"
