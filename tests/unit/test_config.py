"""
Unit Tests for Configuration
"""
import pytest
import sys
import os

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'src'))

from schemagen import (
    ConfigConflictError,
    ConfigurationError,
    DatabaseConnectionError,
    DatabaseType,
    DataSourceConfig,
    GeneratorSettings,
    LikeTable,
    PackageConfig,
    SqlLike,
    StrategyConfig,
    TemplateConfig,
)
from schemagen.dialects import MySqlQuery, SqliteQuery


class TestLikeTable:
    """Tests for LIKE expressions"""

    def test_wildcards(self):
        """The like mode decides where % goes"""
        assert LikeTable(value="user").sql_value == "%user%"
        assert LikeTable(value="user", like=SqlLike.LEFT).sql_value == "%user"
        assert LikeTable(value="user", like=SqlLike.RIGHT).sql_value == "user%"

    def test_string_shorthand(self):
        """A bare string is a default LIKE expression"""
        strategy = StrategyConfig(like_table="user")
        assert strategy.like_table == LikeTable(value="user", like=SqlLike.DEFAULT)


class TestStrategyConfig:
    """Tests for strategy options"""

    def test_defaults(self):
        """Out of the box nothing is filtered and SQL filtering is on"""
        strategy = StrategyConfig()
        assert strategy.include == set()
        assert strategy.exclude == set()
        assert strategy.enable_sql_filter is True
        assert strategy.skip_view is False
        strategy.validate_filters()

    def test_conflicts(self):
        """Mutually exclusive options raise a configuration error"""
        with pytest.raises(ConfigConflictError) as exc_info:
            StrategyConfig(include={"a"}, exclude={"b"}).validate_filters()
        assert isinstance(exc_info.value, ConfigurationError)
        assert "include" in str(exc_info.value)
        assert "exclude" in str(exc_info.value)

    def test_column_naming_defaults_to_naming(self):
        """Column naming follows table naming unless set"""
        strategy = StrategyConfig(naming="no_change")
        assert strategy.get_column_naming() == strategy.naming

    def test_common_fields(self):
        """Super entity columns are compared by property name"""
        strategy = StrategyConfig(super_entity_columns={"createTime"})
        assert strategy.is_common_field("createTime")
        assert not strategy.is_common_field("create_time")


class TestPackageAndTemplateConfig:
    """Tests for package layout and template switches"""

    def test_join_package(self):
        """Sub-packages hang below parent and module"""
        config = PackageConfig(parent="com.example", module_name="sys")
        assert config.get_parent() == "com.example.sys"
        assert config.join_package(config.service_impl) == "com.example.sys.service.impl"

    def test_disable_template(self):
        """Disabled artifacts have no template"""
        template = TemplateConfig().disable("controller", "xml")
        assert template.controller is None
        assert template.xml is None
        assert template.entity is not None

    def test_disable_unknown_template(self):
        """Unknown artifacts are rejected"""
        with pytest.raises(ConfigurationError):
            TemplateConfig().disable("dto")


class TestDataSourceConfig:
    """Tests for data source settings"""

    @pytest.mark.parametrize("db_type,options,expected", [
        (DatabaseType.POSTGRESQL, {}, "public"),
        (DatabaseType.ORACLE, {"username": "scott"}, "SCOTT"),
        (DatabaseType.DB2, {"username": "db2inst1"}, "DB2INST1"),
        (DatabaseType.H2, {}, "PUBLIC"),
        (DatabaseType.SQLSERVER, {}, "dbo"),
        (DatabaseType.MYSQL, {"database": "app"}, "app"),
        (DatabaseType.MYSQL, {"database": "app", "schema_name": "other"}, "other"),
    ])
    def test_schema_name(self, db_type, options, expected):
        """Each product has its own default schema"""
        assert DataSourceConfig(db_type=db_type, **options).get_schema_name() == expected

    def test_default_ports(self):
        """Default ports follow the product"""
        assert DataSourceConfig(db_type=DatabaseType.MYSQL).get_default_port() == 3306
        assert DataSourceConfig(db_type=DatabaseType.POSTGRESQL).get_default_port() == 5432

    def test_db_query_from_registry(self):
        """The dialect comes from the registry unless supplied"""
        assert isinstance(DataSourceConfig(db_type=DatabaseType.MARIADB).get_db_query(), MySqlQuery)

        custom = SqliteQuery()
        assert DataSourceConfig(db_type=DatabaseType.MYSQL, db_query=custom).get_db_query() is custom

    def test_supplied_connection_is_used(self):
        """An external connection is returned as is"""
        connection = object()
        config = DataSourceConfig(db_type=DatabaseType.MYSQL, connection=connection)
        assert config.get_connection() is connection

    def test_sqlite_connection(self, tmp_path):
        """SQLite connections are opened from the file path"""
        config = DataSourceConfig(db_type=DatabaseType.SQLITE, sqlite_path=str(tmp_path / "app.db"))
        connection = config.get_connection()
        try:
            assert connection.execute("SELECT 1").fetchone() == (1,)
        finally:
            connection.close()

    def test_opened_connection_is_not_kept(self, tmp_path):
        """Each call opens a fresh connection the config does not hold"""
        config = DataSourceConfig(db_type=DatabaseType.SQLITE, sqlite_path=str(tmp_path / "app.db"))
        first = config.get_connection()
        first.close()

        second = config.get_connection()
        try:
            assert config.connection is None
            assert second is not first
            assert second.execute("SELECT 1").fetchone() == (1,)
        finally:
            second.close()

    def test_no_builtin_driver(self):
        """Products without a bundled driver need a supplied connection"""
        with pytest.raises(DatabaseConnectionError):
            DataSourceConfig(db_type=DatabaseType.H2).get_connection()

    def test_password_is_secret(self):
        """Passwords are not exposed when dumped"""
        config = DataSourceConfig(db_type=DatabaseType.MYSQL, password="s3cret")
        assert "s3cret" not in str(config.model_dump())
        assert config.password.get_secret_value() == "s3cret"


class TestGeneratorSettings:
    """Tests for loading complete settings"""

    def test_from_yaml(self, tmp_path):
        """YAML files map onto the configuration sections"""
        config_file = tmp_path / "schemagen.yaml"
        config_file.write_text(
            "datasource:\n"
            "  db_type: mysql\n"
            "  database: app\n"
            "  password: secret\n"
            "strategy:\n"
            "  include: [sys_user, sys_role]\n"
            "  like_table: sys\n"
            "global:\n"
            "  active_record: true\n"
            "  service_name: '%sService'\n"
            "package:\n"
            "  parent: com.example\n"
            "log_level: DEBUG\n"
        )

        settings = GeneratorSettings.from_yaml(str(config_file))

        assert settings.datasource.db_type == DatabaseType.MYSQL
        assert settings.datasource.password.get_secret_value() == "secret"
        assert settings.strategy.include == {"sys_user", "sys_role"}
        assert settings.strategy.like_table.value == "sys"
        assert settings.global_config.active_record is True
        assert settings.global_config.service_name == "%sService"
        assert settings.package.parent == "com.example"
        assert settings.log_level == "DEBUG"

    def test_from_yaml_missing_file(self, tmp_path):
        """An unreadable file is a configuration error"""
        with pytest.raises(ConfigurationError):
            GeneratorSettings.from_yaml(str(tmp_path / "missing.yaml"))

    def test_from_env(self, monkeypatch, tmp_path):
        """SCHEMAGEN_* variables configure the data source and strategy"""
        monkeypatch.setenv("SCHEMAGEN_DB_TYPE", "postgresql")
        monkeypatch.setenv("SCHEMAGEN_DB_HOST", "db.internal")
        monkeypatch.setenv("SCHEMAGEN_DB_PORT", "5433")
        monkeypatch.setenv("SCHEMAGEN_DB_NAME", "app")
        monkeypatch.setenv("SCHEMAGEN_DB_PASSWORD", "pw")
        monkeypatch.setenv("SCHEMAGEN_EXCLUDE", "flyway_schema_history, tmp_.*")
        monkeypatch.setenv("SCHEMAGEN_SKIP_VIEW", "true")
        monkeypatch.setenv("SCHEMAGEN_PACKAGE", "com.example")

        settings = GeneratorSettings.from_env(str(tmp_path / "absent.env"))

        assert settings.datasource.db_type == DatabaseType.POSTGRESQL
        assert settings.datasource.host == "db.internal"
        assert settings.datasource.port == 5433
        assert settings.datasource.password.get_secret_value() == "pw"
        assert settings.strategy.exclude == {"flyway_schema_history", "tmp_.*"}
        assert settings.strategy.skip_view is True
        assert settings.package.parent == "com.example"
