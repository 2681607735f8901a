"""
Dialect Query Package
Catalog SQL and column accessors per database product
"""
from .base import (
    BaseDbQuery,
    DialectRegistry,
    register_dialect,
)

# Import dialects to register them
from .mysql_query import MySqlQuery
from .postgresql_query import PostgreSqlQuery
from .oracle_query import OracleQuery
from .sqlite_query import SqliteQuery
from .db2_query import DB2Query
from .h2_query import H2Query
from .sqlserver_query import SqlServerQuery

from ..config import DatabaseType


def create_db_query(db_type: DatabaseType) -> BaseDbQuery:
    """
    Factory function to create the dialect query provider for a database type

    Raises:
        ValueError: If database type is not supported
    """
    return DialectRegistry.create(db_type)


def get_supported_databases() -> list:
    """Get list of supported database types"""
    return DialectRegistry.get_supported_types()


__all__ = [
    "BaseDbQuery",
    "DialectRegistry",
    "register_dialect",
    "MySqlQuery",
    "PostgreSqlQuery",
    "OracleQuery",
    "SqliteQuery",
    "DB2Query",
    "H2Query",
    "SqlServerQuery",
    "create_db_query",
    "get_supported_databases",
]
