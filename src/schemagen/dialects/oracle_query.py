"""
Oracle Dialect Query
Catalog queries for Oracle Database
"""
from __future__ import annotations

from typing import Optional

from ..config import DatabaseType
from .base import BaseDbQuery, register_dialect


@register_dialect(DatabaseType.ORACLE)
class OracleQuery(BaseDbQuery):
    """Oracle catalog queries"""

    table_name = "TABLE_NAME"
    table_comment = "COMMENTS"
    field_name = "COLUMN_NAME"
    field_type = "DATA_TYPE"
    field_comment = "COMMENTS"
    field_key = "KEY"

    @property
    def database_type(self) -> DatabaseType:
        return DatabaseType.ORACLE

    def tables_sql(self, schema_name: Optional[str] = None) -> str:
        return f"SELECT * FROM ALL_TAB_COMMENTS WHERE OWNER = {self.quote(schema_name or '')}"

    def table_fields_sql(self, table_name: str, schema_name: Optional[str] = None) -> str:
        owner = self.quote(schema_name or "")
        return (
            "SELECT A.COLUMN_NAME, "
            "CASE WHEN A.DATA_TYPE = 'NUMBER' THEN "
            "(CASE WHEN A.DATA_PRECISION IS NULL THEN A.DATA_TYPE "
            "WHEN NVL(A.DATA_SCALE, 0) > 0 THEN A.DATA_TYPE || '(' || A.DATA_PRECISION || ',' || A.DATA_SCALE || ')' "
            "ELSE A.DATA_TYPE || '(' || A.DATA_PRECISION || ')' END) "
            "ELSE A.DATA_TYPE END DATA_TYPE, "
            "B.COMMENTS, DECODE(C.POSITION, '1', 'PRI') KEY "
            "FROM ALL_TAB_COLUMNS A "
            f"INNER JOIN ALL_COL_COMMENTS B ON A.TABLE_NAME = B.TABLE_NAME "
            f"AND A.COLUMN_NAME = B.COLUMN_NAME AND B.OWNER = {owner} "
            f"LEFT JOIN ALL_CONSTRAINTS D ON D.TABLE_NAME = A.TABLE_NAME "
            f"AND D.CONSTRAINT_TYPE = 'P' AND D.OWNER = {owner} "
            f"LEFT JOIN ALL_CONS_COLUMNS C ON C.CONSTRAINT_NAME = D.CONSTRAINT_NAME "
            f"AND C.COLUMN_NAME = A.COLUMN_NAME AND C.OWNER = {owner} "
            f"WHERE A.OWNER = {owner} AND A.TABLE_NAME = {self.quote(table_name)} "
            "ORDER BY A.COLUMN_ID"
        )
