"""
Schema Model Builder

Orchestrates one generation run over a catalog connection:
1. Validate the table filter configuration
2. Discover and filter the table list
3. Extract the fields of the retained tables
4. Resolve artifact names and imports
5. Hand the table models to the rendering stage
"""
from __future__ import annotations

import os
import tempfile
import uuid
import warnings
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .catalog import execute_query
from .config import (
    DataSourceConfig,
    GlobalConfig,
    PackageConfig,
    StrategyConfig,
    TemplateConfig,
)
from .field_extractor import FieldExtractor
from .models import TableModel
from .naming import NameResolver
from .table_filter import TableFilter
from .utils import (
    Diagnostic,
    EmptyCatalogWarning,
    NotFoundWarning,
    QueryFailure,
    QueryFailureWarning,
    get_logger,
    log_context,
    log_operation,
)

logger = get_logger(__name__)

ARTIFACTS = ("entity", "mapper", "xml", "service", "service_impl", "controller")


def join_path(parent_dir: Optional[str], package_name: str) -> str:
    """Output directory of a package: dots become path separators"""
    if not parent_dir or not parent_dir.strip():
        parent_dir = tempfile.gettempdir()
    return os.path.join(parent_dir, *package_name.split("."))


class SchemaModelBuilder:
    """
    Builds the table models of a catalog

    The models are built on construction. A conflicting filter configuration
    raises ConfigConflictError before the connection is touched; catalog
    query failures are logged, recorded in ``diagnostics`` and degrade the
    result instead of raising.

    Usage:
        with SchemaModelBuilder(data_source_config=ds, strategy_config=strategy) as builder:
            for table in builder.table_info_list:
                render(table)
    """

    def __init__(
        self,
        package_config: Optional[PackageConfig] = None,
        data_source_config: Optional[DataSourceConfig] = None,
        strategy_config: Optional[StrategyConfig] = None,
        template_config: Optional[TemplateConfig] = None,
        global_config: Optional[GlobalConfig] = None,
    ):
        if data_source_config is None:
            raise ValueError("data_source_config is required")

        self.strategy_config = strategy_config or StrategyConfig()
        self.table_filter = TableFilter(self.strategy_config)
        self.table_filter.validate()

        self.data_source_config = data_source_config
        self.package_config = package_config or PackageConfig()
        self.template_config = template_config or TemplateConfig()
        self.global_config = global_config or GlobalConfig()

        self.package_info: Dict[str, str] = {}
        self.path_info: Dict[str, str] = {}
        self._handle_package()

        self.db_query = data_source_config.get_db_query()
        self._connection: Any = data_source_config.get_connection()
        self._closed = False

        self._diagnostics: List[Diagnostic] = []
        self._table_info_list: List[TableModel] = self._build_tables()

    @property
    def table_info_list(self) -> Tuple[TableModel, ...]:
        return tuple(self._table_info_list)

    @property
    def diagnostics(self) -> Tuple[Diagnostic, ...]:
        return tuple(self._diagnostics)

    def _handle_package(self) -> None:
        config = self.package_config
        self.package_info = {"module_name": config.module_name}
        for artifact in ARTIFACTS:
            self.package_info[artifact] = config.join_package(getattr(config, artifact))

        if config.path_info is not None:
            self.path_info = dict(config.path_info)
            return

        for artifact in ARTIFACTS:
            if getattr(self.template_config, artifact):
                self.path_info[f"{artifact}_path"] = join_path(
                    self.global_config.output_dir, self.package_info[artifact]
                )

    def _build_tables(self) -> List[TableModel]:
        db_type = self.data_source_config.db_type
        schema_name = self.data_source_config.get_schema_name()

        with log_context(run_id=str(uuid.uuid4())), \
                log_operation(logger, "build_table_models", db_type=db_type.value) as ctx:
            base_sql = self.db_query.tables_sql(schema_name)
            sql = self.table_filter.build_tables_sql(base_sql, self.db_query)

            result = execute_query(self._connection, sql)
            try:
                result.raise_for_error()
            except QueryFailure as e:
                logger.error(f"Table discovery failed: {e.message}")
                self._record(QueryFailureWarning.from_error(e))
                ctx["tables"] = 0
                return []

            filtered = self.table_filter.apply(
                result.rows, self.db_query, self._excluded_rows(base_sql)
            )

            if filtered.blank_rows:
                self._warn(EmptyCatalogWarning(
                    message=f"Table list returned {filtered.blank_rows} row(s) without a table name"
                ))
            # Missing include names are reported as not found instead
            if not filtered.discovered and not self.strategy_config.include:
                self._warn(EmptyCatalogWarning(message="The current database has no tables"))
            if filtered.not_exist_tables:
                self._warn(NotFoundWarning(
                    message=f"Tables {filtered.not_exist_tables} do not exist in the database",
                    names=list(filtered.not_exist_tables),
                ))

            tables = filtered.tables
            self._extract_fields(tables, schema_name)

            resolver = NameResolver(self.strategy_config, self.global_config)
            for table in tables:
                resolver.resolve(table)

            ctx["discovered"] = len(filtered.discovered)
            ctx["tables"] = len(tables)
            return tables

    def _excluded_rows(self, base_sql: str) -> List[Any]:
        """Rows removed by a pushed-down NOT IN, for not-found reporting"""
        sql = self.table_filter.build_excluded_sql(base_sql, self.db_query)
        if sql is None:
            return []
        result = execute_query(self._connection, sql)
        try:
            result.raise_for_error()
        except QueryFailure as e:
            logger.error(f"Excluded table lookup failed: {e.message}")
            self._record(QueryFailureWarning.from_error(e))
            return []
        return result.rows

    def _extract_fields(self, tables: Iterable[TableModel], schema_name: Optional[str]) -> None:
        """Only retained tables are queried"""
        extractor = FieldExtractor(
            connection=self._connection,
            query=self.db_query,
            strategy=self.strategy_config,
            global_config=self.global_config,
            type_convert=self.data_source_config.get_type_convert(),
            keywords_handler=self.data_source_config.keywords_handler,
            schema_name=schema_name,
        )
        for table in tables:
            extraction = extractor.extract(table.name)
            table.fields = extraction.fields
            table.common_fields = extraction.common_fields
            table.has_primary_key = extraction.has_primary_key
            self._diagnostics.extend(extraction.diagnostics)

    def _warn(self, diagnostic: Diagnostic) -> None:
        logger.warning(diagnostic.message)
        self._record(diagnostic)

    def _record(self, diagnostic: Diagnostic) -> None:
        self._diagnostics.append(diagnostic)

    def format_comment(self, comment: Optional[str]) -> str:
        """Deprecated: use the dialect query's format_comment"""
        warnings.warn(
            "SchemaModelBuilder.format_comment is deprecated, use BaseDbQuery.format_comment",
            DeprecationWarning,
            stacklevel=2,
        )
        return self.db_query.format_comment(comment)

    def set_table_info_list(self, table_info_list: Iterable[TableModel]) -> "SchemaModelBuilder":
        """Deprecated: append table models built elsewhere"""
        warnings.warn(
            "SchemaModelBuilder.set_table_info_list is deprecated",
            DeprecationWarning,
            stacklevel=2,
        )
        self._table_info_list.extend(table_info_list)
        return self

    def close(self) -> None:
        """Close the catalog connection; later calls do nothing"""
        if self._closed:
            return
        self._closed = True
        if self._connection is None:
            return
        try:
            self._connection.close()
        except Exception as e:
            logger.error(f"Failed to close catalog connection: {e}", exc_info=True)

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> "SchemaModelBuilder":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
