"""
SQL Server Dialect Query
Catalog queries for Microsoft SQL Server
"""
from __future__ import annotations

from typing import Optional

from ..catalog import CatalogRow
from ..config import DatabaseType
from .base import BaseDbQuery, register_dialect


@register_dialect(DatabaseType.SQLSERVER)
class SqlServerQuery(BaseDbQuery):
    """SQL Server catalog queries"""

    table_name = "TABLE_NAME"
    table_comment = "COMMENTS"
    field_name = "COLUMN_NAME"
    field_type = "DATA_TYPE"
    field_comment = "COMMENTS"
    field_key = "KEY"

    @property
    def database_type(self) -> DatabaseType:
        return DatabaseType.SQLSERVER

    def tables_sql(self, schema_name: Optional[str] = None) -> str:
        return (
            "SELECT * FROM ("
            "SELECT CAST(so.name AS VARCHAR(500)) AS TABLE_NAME, "
            "CAST(sep.value AS VARCHAR(500)) AS COMMENTS "
            "FROM sysobjects so "
            "LEFT JOIN sys.extended_properties sep ON sep.major_id = so.id AND sep.minor_id = 0 "
            "WHERE (xtype = 'U' OR xtype = 'V')"
            ") AS TABLES WHERE 1=1"
        )

    def table_fields_sql(self, table_name: str, schema_name: Optional[str] = None) -> str:
        return (
            "SELECT CAST(a.name AS VARCHAR(500)) AS TABLE_NAME, "
            "CAST(b.name AS VARCHAR(500)) AS COLUMN_NAME, "
            "CAST(c.value AS NVARCHAR(500)) AS COMMENTS, "
            "CAST(sys.types.name AS VARCHAR(500)) AS DATA_TYPE, "
            "(SELECT CASE COUNT(1) WHEN 1 THEN 'PRI' ELSE '' END "
            "FROM syscolumns, sysobjects, sysindexes, sysindexkeys, systypes "
            "WHERE syscolumns.xusertype = systypes.xusertype AND syscolumns.id = object_id(a.name) "
            "AND sysobjects.xtype = 'PK' AND sysobjects.parent_obj = syscolumns.id "
            "AND sysindexes.id = syscolumns.id AND sysobjects.name = sysindexes.name "
            "AND sysindexkeys.id = syscolumns.id AND sysindexkeys.indid = sysindexes.indid "
            "AND syscolumns.colid = sysindexkeys.colid AND syscolumns.name = b.name) AS 'KEY', "
            "b.is_identity AS isIdentity "
            "FROM (SELECT name, object_id FROM sys.tables UNION ALL SELECT name, object_id FROM sys.views) a "
            "INNER JOIN sys.columns b ON b.object_id = a.object_id "
            "LEFT JOIN sys.types ON b.user_type_id = sys.types.user_type_id "
            "LEFT JOIN sys.extended_properties c ON c.major_id = b.object_id AND c.minor_id = b.column_id "
            f"WHERE a.name = {self.quote(table_name)} AND sys.types.name != 'sysname'"
        )

    def is_key_identity(self, row: CatalogRow) -> bool:
        return (row.get_string("isIdentity") or "") in ("1", "True", "true")
