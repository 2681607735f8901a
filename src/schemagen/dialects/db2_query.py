"""
DB2 Dialect Query
Catalog queries for IBM DB2
"""
from __future__ import annotations

from typing import Optional

from ..catalog import CatalogRow
from ..config import DatabaseType
from ..keys import FlagKeyResolver, KeyResolver
from .base import BaseDbQuery, register_dialect


@register_dialect(DatabaseType.DB2)
class DB2Query(BaseDbQuery):
    """DB2 catalog queries, key columns are flagged with "1" """

    table_name = "NAME"
    table_comment = "COMMENTS"
    field_name = "FIELD"
    field_type = "TYPE"
    field_comment = "COMMENTS"
    field_key = "KEY"

    @property
    def database_type(self) -> DatabaseType:
        return DatabaseType.DB2

    def tables_sql(self, schema_name: Optional[str] = None) -> str:
        return (
            "SELECT * FROM (SELECT DISTINCT T.TABNAME AS NAME, T.REMARKS AS COMMENTS "
            f"FROM SYSCAT.TABLES T WHERE T.TABSCHEMA = {self.quote(schema_name or '')}) AS TABLES "
            "WHERE 1=1"
        )

    def table_fields_sql(self, table_name: str, schema_name: Optional[str] = None) -> str:
        return (
            "SELECT T.COLNAME AS FIELD, T.TYPENAME AS TYPE, T.REMARKS AS COMMENTS, "
            "CASE WHEN T.KEYSEQ = 1 THEN '1' ELSE '0' END AS KEY, T.IDENTITY "
            f"FROM SYSCAT.COLUMNS T WHERE T.TABSCHEMA = {self.quote(schema_name or '')} "
            f"AND T.TABNAME = {self.quote(table_name)} ORDER BY T.COLNO"
        )

    def key_resolver(self) -> KeyResolver:
        return FlagKeyResolver("1")

    def is_key_identity(self, row: CatalogRow) -> bool:
        return (row.get_string("IDENTITY") or "").upper() == "Y"
