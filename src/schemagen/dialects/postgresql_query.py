"""
PostgreSQL Dialect Query
Catalog queries for PostgreSQL
"""
from __future__ import annotations

from typing import Optional

from ..catalog import CatalogRow
from ..config import DatabaseType
from .base import BaseDbQuery, register_dialect


@register_dialect(DatabaseType.POSTGRESQL)
class PostgreSqlQuery(BaseDbQuery):
    """PostgreSQL catalog queries"""

    table_name = "tablename"
    table_comment = "comments"
    field_name = "name"
    field_type = "type"
    field_comment = "comment"
    field_key = "key"

    @property
    def database_type(self) -> DatabaseType:
        return DatabaseType.POSTGRESQL

    def tables_sql(self, schema_name: Optional[str] = None) -> str:
        schema = schema_name or "public"
        return (
            "SELECT A.tablename, obj_description(B.oid, 'pg_class') AS comments "
            "FROM pg_tables A, pg_class B "
            f"WHERE A.schemaname = {self.quote(schema)} AND A.tablename = B.relname"
        )

    def table_fields_sql(self, table_name: str, schema_name: Optional[str] = None) -> str:
        schema = schema_name or "public"
        return (
            "SELECT A.attname AS name, format_type(A.atttypid, A.atttypmod) AS type, "
            "col_description(A.attrelid, A.attnum) AS comment, D.column_default, "
            "(CASE WHEN (SELECT COUNT(*) FROM pg_constraint AS PC "
            "WHERE A.attnum = PC.conkey[1] AND PC.contype = 'p' AND PC.conrelid = C.oid) > 0 "
            "THEN 'PRI' ELSE '' END) AS key "
            "FROM pg_class AS C, pg_attribute AS A, information_schema.columns D "
            f"WHERE A.attrelid = {self.quote(self.qualified_name(table_name, schema))}::regclass AND A.attrelid = C.oid "
            "AND A.attnum > 0 AND NOT A.attisdropped AND D.column_name = A.attname "
            f"AND D.table_schema = {self.quote(schema)} AND D.table_name = {self.quote(table_name)} "
            "ORDER BY A.attnum"
        )

    def qualified_name(self, table_name: str, schema: str) -> str:
        """schema.table as regclass input, case preserved"""
        return f"{self.quote_identifier(schema)}.{self.quote_identifier(table_name)}"

    def is_key_identity(self, row: CatalogRow) -> bool:
        default = row.get_string("column_default") or ""
        return default.startswith("nextval(")
