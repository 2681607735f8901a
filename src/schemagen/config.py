"""
Configuration Management for schemagen
Uses Pydantic for validation and type safety
"""
from __future__ import annotations

import os
import tempfile
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Set

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

from .models import FieldFill
from .utils import ConfigConflictError, ConfigurationError, DatabaseConnectionError, get_logger

if TYPE_CHECKING:
    from .builder import SchemaModelBuilder
    from .dialects.base import BaseDbQuery

logger = get_logger(__name__)


class DatabaseType(str, Enum):
    """Supported database types"""
    MYSQL = "mysql"
    MARIADB = "mariadb"
    POSTGRESQL = "postgresql"
    ORACLE = "oracle"
    SQLITE = "sqlite"
    DB2 = "db2"
    H2 = "h2"
    SQLSERVER = "sqlserver"


class NamingStrategy(str, Enum):
    """How catalog names are turned into class/property names"""
    NO_CHANGE = "no_change"
    UNDERLINE_TO_CAMEL = "underline_to_camel"


class DateType(str, Enum):
    """Which family of date/time types the type converter targets"""
    ONLY_DATE = "only_date"
    SQL_PACK = "sql_pack"
    TIME_PACK = "time_pack"


class IdType(str, Enum):
    """Primary-key generation strategy written into entity annotations"""
    AUTO = "AUTO"
    NONE = "NONE"
    INPUT = "INPUT"
    ASSIGN_ID = "ASSIGN_ID"
    ASSIGN_UUID = "ASSIGN_UUID"


class SqlLike(str, Enum):
    """Where the wildcard goes in a LIKE expression"""
    LEFT = "left"
    RIGHT = "right"
    DEFAULT = "default"


class LikeTable(BaseModel):
    """A LIKE / NOT LIKE table name expression"""
    value: str
    like: SqlLike = SqlLike.DEFAULT

    @property
    def sql_value(self) -> str:
        """The value with its % wildcards applied"""
        if self.like == SqlLike.LEFT:
            return f"%{self.value}"
        if self.like == SqlLike.RIGHT:
            return f"{self.value}%"
        return f"%{self.value}%"


class TableFill(BaseModel):
    """Auto-fill rule for a column name"""
    field_name: str
    field_fill: FieldFill


class PackageConfig(BaseModel):
    """Package layout of the generated sources"""
    parent: str = "com.baomidou"
    module_name: str = ""
    entity: str = "entity"
    service: str = "service"
    service_impl: str = "service.impl"
    mapper: str = "mapper"
    xml: str = "mapper.xml"
    controller: str = "controller"
    path_info: Optional[Dict[str, str]] = None

    def get_parent(self) -> str:
        if self.module_name:
            return f"{self.parent}.{self.module_name}"
        return self.parent

    def join_package(self, sub_package: str) -> str:
        parent = self.get_parent()
        return f"{parent}.{sub_package}" if parent else sub_package


class TemplateConfig(BaseModel):
    """Template per artifact; an artifact whose template is None is not generated"""
    entity: Optional[str] = "/templates/entity.java"
    service: Optional[str] = "/templates/service.java"
    service_impl: Optional[str] = "/templates/serviceImpl.java"
    mapper: Optional[str] = "/templates/mapper.java"
    xml: Optional[str] = "/templates/mapper.xml"
    controller: Optional[str] = "/templates/controller.java"

    def disable(self, *artifacts: str) -> "TemplateConfig":
        for artifact in artifacts:
            if artifact not in type(self).model_fields:
                raise ConfigurationError(f"Unknown template artifact: {artifact}", config_key="template")
            setattr(self, artifact, None)
        return self


class StrategyConfig(BaseModel):
    """Table selection and field handling strategy"""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    # Table selection
    include: Set[str] = Field(default_factory=set)
    exclude: Set[str] = Field(default_factory=set)
    like_table: Optional[LikeTable] = None
    not_like_table: Optional[LikeTable] = None
    skip_view: bool = False
    enable_sql_filter: bool = True

    # Entity shape
    super_entity_class: Optional[str] = None
    super_entity_columns: Set[str] = Field(default_factory=set)
    version_field_name: Optional[str] = None
    table_fill_list: List[TableFill] = Field(default_factory=list)

    # Naming
    naming: NamingStrategy = NamingStrategy.UNDERLINE_TO_CAMEL
    column_naming: Optional[NamingStrategy] = None
    table_prefix: List[str] = Field(default_factory=list)
    field_prefix: List[str] = Field(default_factory=list)

    # Pluggable policies
    name_convert: Optional[Any] = None
    common_field_predicate: Optional[Callable[[str], bool]] = None

    @field_validator('like_table', 'not_like_table', mode='before')
    @classmethod
    def parse_like_table(cls, v: Any) -> Any:
        """Accept a bare string as a default LIKE expression"""
        if isinstance(v, str):
            return {"value": v}
        return v

    def validate_filters(self) -> None:
        """
        Reject mutually exclusive table filters

        Raises:
            ConfigConflictError: include and exclude, or like_table and
                not_like_table, are both configured
        """
        if self.include and self.exclude:
            raise ConfigConflictError("include", "exclude")
        if self.like_table is not None and self.not_like_table is not None:
            raise ConfigConflictError("like_table", "not_like_table")

    def get_column_naming(self) -> NamingStrategy:
        return self.column_naming or self.naming

    def get_name_convert(self) -> Any:
        if self.name_convert is not None:
            return self.name_convert
        from .converters import DefaultNameConverter
        return DefaultNameConverter(self)

    def is_common_field(self, property_name: str) -> bool:
        """Whether a property is inherited from the configured super entity"""
        if self.common_field_predicate is not None:
            return bool(self.common_field_predicate(property_name))
        return property_name in self.super_entity_columns


class GlobalConfig(BaseModel):
    """Run-wide generation options"""
    output_dir: str = Field(default_factory=tempfile.gettempdir)
    active_record: bool = False
    id_type: Optional[IdType] = None
    date_type: DateType = DateType.TIME_PACK

    # Artifact name formats, "%s" is replaced by the entity name
    entity_name: Optional[str] = None
    mapper_name: Optional[str] = None
    xml_name: Optional[str] = None
    service_name: Optional[str] = None
    service_impl_name: Optional[str] = None
    controller_name: Optional[str] = None


class DataSourceConfig(BaseModel):
    """Catalog connection and dialect configuration"""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    db_type: DatabaseType
    host: str = "localhost"
    port: Optional[int] = None
    database: str = ""
    username: Optional[str] = None
    password: Optional[SecretStr] = None
    schema_name: Optional[str] = None
    connection_timeout: int = Field(default=30, ge=1, le=300)

    # SQLite specific
    sqlite_path: Optional[str] = None

    # Externally owned objects
    connection: Optional[Any] = Field(default=None, exclude=True)
    db_query: Optional[Any] = Field(default=None, exclude=True)
    type_convert: Optional[Any] = Field(default=None, exclude=True)
    keywords_handler: Optional[Any] = Field(default=None, exclude=True)

    def get_default_port(self) -> int:
        """Get default port for database type"""
        ports = {
            DatabaseType.MYSQL: 3306,
            DatabaseType.MARIADB: 3306,
            DatabaseType.POSTGRESQL: 5432,
            DatabaseType.ORACLE: 1521,
            DatabaseType.DB2: 50000,
            DatabaseType.H2: 9092,
            DatabaseType.SQLSERVER: 1433,
            DatabaseType.SQLITE: 0,
        }
        return ports.get(self.db_type, 3306)

    def get_schema_name(self) -> Optional[str]:
        """Catalog schema the table list is read from"""
        if self.schema_name:
            return self.schema_name
        if self.db_type == DatabaseType.POSTGRESQL:
            return "public"
        if self.db_type in (DatabaseType.ORACLE, DatabaseType.DB2) and self.username:
            return self.username.upper()
        if self.db_type == DatabaseType.H2:
            return "PUBLIC"
        if self.db_type == DatabaseType.SQLSERVER:
            return "dbo"
        return self.database or None

    def get_db_query(self) -> "BaseDbQuery":
        if self.db_query is not None:
            return self.db_query
        from .dialects import create_db_query
        return create_db_query(self.db_type)

    def get_type_convert(self) -> Any:
        if self.type_convert is not None:
            return self.type_convert
        from .converters import DefaultTypeConverter
        return DefaultTypeConverter(self.db_type)

    def get_connection(self) -> Any:
        """
        Return the externally supplied connection, or open a new one

        A connection opened here belongs to the caller and is not kept on
        the config, so every call yields a fresh handle.

        Raises:
            DatabaseConnectionError: the driver is missing or refused the connection
        """
        if self.connection is not None:
            return self.connection

        password = self.password.get_secret_value() if self.password else None
        port = self.port or self.get_default_port()

        try:
            if self.db_type == DatabaseType.SQLITE:
                import sqlite3
                db_path = self.sqlite_path or self.database or ":memory:"
                connection = sqlite3.connect(db_path, timeout=self.connection_timeout)

            elif self.db_type in (DatabaseType.MYSQL, DatabaseType.MARIADB):
                import mysql.connector
                connection = mysql.connector.connect(
                    host=self.host,
                    port=port,
                    database=self.database,
                    user=self.username,
                    password=password,
                    connection_timeout=self.connection_timeout,
                )

            elif self.db_type == DatabaseType.POSTGRESQL:
                import psycopg2
                connection = psycopg2.connect(
                    host=self.host,
                    port=port,
                    dbname=self.database,
                    user=self.username,
                    password=password,
                    connect_timeout=self.connection_timeout,
                )

            elif self.db_type == DatabaseType.ORACLE:
                import oracledb
                connection = oracledb.connect(
                    user=self.username,
                    password=password,
                    dsn=f"{self.host}:{port}/{self.database}",
                )

            else:
                raise DatabaseConnectionError(
                    f"No built-in driver for {self.db_type.value}; "
                    f"pass an open DB-API connection as 'connection'"
                )

        except ImportError as e:
            raise DatabaseConnectionError(
                f"Driver for {self.db_type.value} is not installed. "
                f"Install it with: pip install schemagen[{self.db_type.value}]",
                original_error=e,
            )
        except DatabaseConnectionError:
            raise
        except Exception as e:
            raise DatabaseConnectionError(
                f"Could not connect to {self.db_type.value} database '{self.database}': {e}",
                original_error=e,
            )

        logger.info(f"Opened {self.db_type.value} connection to '{self.database or self.sqlite_path}'")
        return connection


class GeneratorSettings(BaseModel):
    """Complete generator configuration, loadable from YAML or environment"""
    model_config = ConfigDict(populate_by_name=True)

    datasource: DataSourceConfig
    package: PackageConfig = Field(default_factory=PackageConfig)
    strategy: StrategyConfig = Field(default_factory=StrategyConfig)
    template: TemplateConfig = Field(default_factory=TemplateConfig)
    global_config: GlobalConfig = Field(default_factory=GlobalConfig, alias="global")
    log_level: str = "INFO"

    @classmethod
    def from_yaml(cls, path: str) -> "GeneratorSettings":
        """Create configuration from a YAML file"""
        try:
            with open(path, 'r', encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Cannot read configuration file {path}: {e}", original_error=e)
        return cls.model_validate(data)

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "GeneratorSettings":
        """Create configuration from environment variables (and an optional .env file)"""
        load_dotenv(env_file)

        db_config = DataSourceConfig(
            db_type=DatabaseType(os.getenv("SCHEMAGEN_DB_TYPE", "mysql")),
            host=os.getenv("SCHEMAGEN_DB_HOST", "localhost"),
            port=int(os.getenv("SCHEMAGEN_DB_PORT")) if os.getenv("SCHEMAGEN_DB_PORT") else None,
            database=os.getenv("SCHEMAGEN_DB_NAME", ""),
            username=os.getenv("SCHEMAGEN_DB_USER"),
            password=SecretStr(os.getenv("SCHEMAGEN_DB_PASSWORD", "")) if os.getenv("SCHEMAGEN_DB_PASSWORD") else None,
            schema_name=os.getenv("SCHEMAGEN_DB_SCHEMA"),
            sqlite_path=os.getenv("SCHEMAGEN_SQLITE_PATH"),
        )

        strategy = StrategyConfig(
            include=_split_env("SCHEMAGEN_INCLUDE"),
            exclude=_split_env("SCHEMAGEN_EXCLUDE"),
            skip_view=os.getenv("SCHEMAGEN_SKIP_VIEW", "false").lower() == "true",
            table_prefix=sorted(_split_env("SCHEMAGEN_TABLE_PREFIX")),
        )

        global_config = GlobalConfig(
            output_dir=os.getenv("SCHEMAGEN_OUTPUT_DIR", tempfile.gettempdir()),
            active_record=os.getenv("SCHEMAGEN_ACTIVE_RECORD", "false").lower() == "true",
        )

        return cls(
            datasource=db_config,
            strategy=strategy,
            global_config=global_config,
            package=PackageConfig(parent=os.getenv("SCHEMAGEN_PACKAGE", "com.baomidou")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

    def create_builder(self) -> "SchemaModelBuilder":
        """Build the table models described by this configuration"""
        from .builder import SchemaModelBuilder
        return SchemaModelBuilder(
            package_config=self.package,
            data_source_config=self.datasource,
            strategy_config=self.strategy,
            template_config=self.template,
            global_config=self.global_config,
        )


def _split_env(name: str) -> Set[str]:
    value = os.getenv(name, "")
    return {part.strip() for part in value.split(",") if part.strip()}
