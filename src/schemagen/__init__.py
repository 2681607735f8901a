"""
schemagen
=========

Database catalog introspection for code generators.

Reads the table and column metadata of a relational database and turns it
into generator-ready table models: filtered table lists, typed fields with
primary-key, keyword and auto-fill annotations, and the entity, mapper,
service and controller names a template stage renders from.

Features:
- MySQL/MariaDB, PostgreSQL, Oracle, SQLite, DB2, H2 and SQL Server catalogs
- Include/exclude (exact, case-insensitive or regex) and LIKE/NOT LIKE table filters
- Per-dialect primary key resolution
- Pluggable naming, type conversion and keyword escaping
- YAML / environment configuration

Quick Start:
------------

    import sqlite3
    from schemagen import DataSourceConfig, DatabaseType, SchemaModelBuilder, StrategyConfig

    ds = DataSourceConfig(db_type=DatabaseType.SQLITE, connection=sqlite3.connect("app.db"))
    strategy = StrategyConfig(include={"sys_user", "sys_role"})

    with SchemaModelBuilder(data_source_config=ds, strategy_config=strategy) as builder:
        for table in builder.table_info_list:
            print(table.entity_name, [f.property_name for f in table.fields])

From a configuration file:
--------------------------

    settings = GeneratorSettings.from_yaml("schemagen.yaml")
    with settings.create_builder() as builder:
        export_table_models(builder.table_info_list, "tables.yaml")
"""

__version__ = "1.0.0"
__author__ = "schemagen contributors"

# Configuration
from .config import (
    DatabaseType,
    NamingStrategy,
    DateType,
    IdType,
    SqlLike,
    LikeTable,
    TableFill,
    PackageConfig,
    TemplateConfig,
    StrategyConfig,
    GlobalConfig,
    DataSourceConfig,
    GeneratorSettings,
)

# Models
from .models import (
    FieldFill,
    ColumnType,
    FieldModel,
    TableModel,
    export_table_models,
)

# Dialects
from .dialects import (
    BaseDbQuery,
    DialectRegistry,
    create_db_query,
    get_supported_databases,
)

# Pipeline
from .keys import (
    KeyResolver,
    MarkerKeyResolver,
    FlagKeyResolver,
    ConstraintQueryKeyResolver,
)
from .table_filter import TableFilter, FilterResult
from .field_extractor import FieldExtractor, FieldExtraction
from .naming import NameResolver, required_imports
from .builder import SchemaModelBuilder

# Policies
from .converters import (
    NameConverter,
    TypeConverter,
    DefaultNameConverter,
    DefaultTypeConverter,
    DbColumnType,
)
from .keywords import (
    KeyWordsHandler,
    BaseKeyWordsHandler,
    MySqlKeyWordsHandler,
    PostgreSqlKeyWordsHandler,
    H2KeyWordsHandler,
)

# Utilities
from .utils import (
    setup_logging,
    get_logger,
    SchemaGenError,
    ConfigurationError,
    ConfigConflictError,
    DatabaseConnectionError,
    QueryFailure,
    Diagnostic,
    NotFoundWarning,
    EmptyCatalogWarning,
    KeywordWarning,
    QueryFailureWarning,
)

__all__ = [
    # Version
    "__version__",
    # Configuration
    "DatabaseType",
    "NamingStrategy",
    "DateType",
    "IdType",
    "SqlLike",
    "LikeTable",
    "TableFill",
    "PackageConfig",
    "TemplateConfig",
    "StrategyConfig",
    "GlobalConfig",
    "DataSourceConfig",
    "GeneratorSettings",
    # Models
    "FieldFill",
    "ColumnType",
    "FieldModel",
    "TableModel",
    "export_table_models",
    # Dialects
    "BaseDbQuery",
    "DialectRegistry",
    "create_db_query",
    "get_supported_databases",
    # Pipeline
    "KeyResolver",
    "MarkerKeyResolver",
    "FlagKeyResolver",
    "ConstraintQueryKeyResolver",
    "TableFilter",
    "FilterResult",
    "FieldExtractor",
    "FieldExtraction",
    "NameResolver",
    "required_imports",
    "SchemaModelBuilder",
    # Policies
    "NameConverter",
    "TypeConverter",
    "DefaultNameConverter",
    "DefaultTypeConverter",
    "DbColumnType",
    "KeyWordsHandler",
    "BaseKeyWordsHandler",
    "MySqlKeyWordsHandler",
    "PostgreSqlKeyWordsHandler",
    "H2KeyWordsHandler",
    # Utilities
    "setup_logging",
    "get_logger",
    "SchemaGenError",
    "ConfigurationError",
    "ConfigConflictError",
    "DatabaseConnectionError",
    "QueryFailure",
    "Diagnostic",
    "NotFoundWarning",
    "EmptyCatalogWarning",
    "KeywordWarning",
    "QueryFailureWarning",
]
