"""
Unit Tests for Dialect Queries
"""
import pytest
import sys
import os

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'src'))

from schemagen import (
    BaseDbQuery,
    ConstraintQueryKeyResolver,
    DatabaseType,
    DialectRegistry,
    FlagKeyResolver,
    MarkerKeyResolver,
    create_db_query,
    get_supported_databases,
)
from schemagen.catalog import CatalogRow
from schemagen.dialects import (
    DB2Query,
    H2Query,
    MySqlQuery,
    OracleQuery,
    PostgreSqlQuery,
    SqliteQuery,
    SqlServerQuery,
)


class TestDialectRegistry:
    """Tests for the dialect registry"""

    def test_all_types_registered(self):
        """Every database type has a dialect"""
        supported = get_supported_databases()
        for db_type in DatabaseType:
            assert db_type in supported
            assert DialectRegistry.is_supported(db_type)

    @pytest.mark.parametrize("db_type,query_class", [
        (DatabaseType.MYSQL, MySqlQuery),
        (DatabaseType.MARIADB, MySqlQuery),
        (DatabaseType.POSTGRESQL, PostgreSqlQuery),
        (DatabaseType.ORACLE, OracleQuery),
        (DatabaseType.SQLITE, SqliteQuery),
        (DatabaseType.DB2, DB2Query),
        (DatabaseType.H2, H2Query),
        (DatabaseType.SQLSERVER, SqlServerQuery),
    ])
    def test_create(self, db_type, query_class):
        """The factory returns the registered class"""
        query = create_db_query(db_type)
        assert isinstance(query, query_class)
        assert isinstance(query, BaseDbQuery)

    def test_create_from_value(self):
        """Plain type names are accepted"""
        assert isinstance(create_db_query("postgresql"), PostgreSqlQuery)

    def test_unknown_type(self):
        """Unknown products are rejected"""
        with pytest.raises(ValueError):
            create_db_query("informix")


class TestDialectQueries:
    """Tests for the per-product SQL and accessors"""

    @pytest.mark.parametrize("db_type", list(DatabaseType))
    def test_tables_sql_accepts_conditions(self, db_type):
        """Table lists end inside a WHERE clause"""
        query = create_db_query(db_type)
        sql = query.tables_sql(query_schema(db_type))
        assert "WHERE" in sql.upper()

    def test_mysql(self):
        """MySQL reads SHOW statements"""
        query = MySqlQuery()
        assert query.table_fields_sql("t_user") == "show full fields FROM `t_user`"
        assert query.field_custom() == ["NULL", "DEFAULT"]
        assert query.is_key_identity(CatalogRow(["Extra"], ["auto_increment"]))
        assert not query.is_key_identity(CatalogRow(["Extra"], [""]))

    def test_sqlite(self):
        """SQLite reads PRAGMA table_info"""
        query = SqliteQuery()
        assert query.table_fields_sql("t_user") == "PRAGMA table_info('t_user')"
        assert query.is_key_identity(CatalogRow(["type"], ["INTEGER"]))
        assert not query.is_key_identity(CatalogRow(["type"], ["BIGINT"]))

    def test_h2_uses_index_view(self):
        """H2 keys come from a secondary query"""
        query = H2Query()
        assert "INFORMATION_SCHEMA.INDEXES" in query.pk_query_sql("T_USER")
        assert "'T_USER'" in query.pk_query_sql("T_USER")

    def test_key_resolvers(self):
        """Each product declares how it marks keys"""
        assert isinstance(MySqlQuery().key_resolver(), MarkerKeyResolver)
        assert isinstance(PostgreSqlQuery().key_resolver(), MarkerKeyResolver)
        assert isinstance(SqliteQuery().key_resolver(), FlagKeyResolver)
        assert isinstance(DB2Query().key_resolver(), FlagKeyResolver)
        assert isinstance(H2Query().key_resolver(), ConstraintQueryKeyResolver)

    def test_inline_dialects_have_no_key_query(self):
        """Only constraint-lookup dialects provide a key query"""
        with pytest.raises(NotImplementedError):
            MySqlQuery().pk_query_sql("t_user")

    def test_format_comment(self):
        """Blank comments become empty, line breaks become tabs"""
        assert BaseDbQuery.format_comment(None) == ""
        assert BaseDbQuery.format_comment("   ") == ""
        assert BaseDbQuery.format_comment("a\r\nb\nc") == "a\tb\tc"

    def test_quote(self):
        """Literals are single quoted with quotes doubled"""
        assert BaseDbQuery.quote("it's") == "'it''s'"

    def test_quote_identifier(self):
        """Identifiers keep their case, delimiters are doubled"""
        assert BaseDbQuery.quote_identifier('My"Table') == '"My""Table"'
        assert BaseDbQuery.quote_identifier("a`b", "`") == "`a``b`"

    def test_mysql_fields_sql_escapes_backticks(self):
        """Backticks inside a table name cannot end the identifier"""
        assert MySqlQuery().table_fields_sql("a`b") == "show full fields FROM `a``b`"

    def test_postgresql_regclass_is_quoted(self):
        """Mixed-case names and quotes survive the regclass cast"""
        sql = PostgreSqlQuery().table_fields_sql("User's", "Sales")
        assert "A.attrelid = '\"Sales\".\"User''s\"'::regclass" in sql
        assert "D.table_name = 'User''s'" in sql

    def test_comment_accessors(self):
        """Comments are read through the dialect's column names"""
        query = PostgreSqlQuery()
        row = CatalogRow(["tablename", "comments"], ["t_user", "users\nall"])
        assert query.get_table_comment(row) == "users\tall"


def query_schema(db_type):
    return "app" if db_type in (DatabaseType.MYSQL, DatabaseType.MARIADB) else None
