"""
Field Extractor

Turns the field-list query of one table into FieldModels: primary-key
detection through the dialect's KeyResolver, keyword escaping, type
resolution, fill rules and routing of inherited columns into common_fields.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from .catalog import CatalogRow, execute_query
from .keys import KeyResolver
from .models import FieldFill, FieldModel
from .utils import (
    Diagnostic,
    KeywordWarning,
    QueryFailure,
    QueryFailureWarning,
    get_logger,
    log_context,
)

if TYPE_CHECKING:
    from .config import GlobalConfig, StrategyConfig
    from .converters import NameConverter, TypeConverter
    from .dialects.base import BaseDbQuery
    from .keywords import KeyWordsHandler

logger = get_logger(__name__)


@dataclass
class FieldExtraction:
    """Fields of one table"""
    fields: List[FieldModel] = field(default_factory=list)
    common_fields: List[FieldModel] = field(default_factory=list)
    has_primary_key: bool = False
    error: Optional[QueryFailure] = None
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def failed(self) -> bool:
        return self.error is not None


class FieldExtractor:
    """Extracts the fields of catalog tables over a borrowed connection"""

    def __init__(
        self,
        connection: Any,
        query: "BaseDbQuery",
        strategy: "StrategyConfig",
        global_config: "GlobalConfig",
        type_convert: "TypeConverter",
        keywords_handler: Optional["KeyWordsHandler"] = None,
        name_convert: Optional["NameConverter"] = None,
        schema_name: Optional[str] = None,
        key_resolver: Optional[KeyResolver] = None,
    ):
        self.connection = connection
        self.query = query
        self.strategy = strategy
        self.global_config = global_config
        self.type_convert = type_convert
        self.keywords_handler = keywords_handler
        self.name_convert = name_convert or strategy.get_name_convert()
        self.schema_name = schema_name
        self.key_resolver = key_resolver or query.key_resolver()

    def extract(self, table_name: str) -> FieldExtraction:
        """
        Query and build the fields of a table

        A failing catalog query is logged and leaves the extraction empty;
        it never raises.
        """
        result = FieldExtraction()

        with log_context(table_name=table_name):
            try:
                is_key = self.key_resolver.prepare(self.connection, table_name, self.query)
                sql = self.query.table_fields_sql(table_name, self.schema_name)
                rows = execute_query(self.connection, sql, table_name=table_name).raise_for_error().rows
            except QueryFailure as e:
                logger.error(f"Field extraction for table {table_name} abandoned: {e.message}")
                result.error = e
                result.diagnostics.append(QueryFailureWarning.from_error(e))
                return result

            for row in rows:
                table_field = self._build_field(table_name, row, result)

                if is_key(row):
                    if not result.has_primary_key:
                        table_field.key_flag = True
                        table_field.key_identity_flag = self.query.is_key_identity(row)
                        result.has_primary_key = True
                    else:
                        # Composite keys are not supported, the first key column wins
                        logger.warning(
                            f"Table {table_name} has more than one primary key column, "
                            f"ignoring key flag of {table_field.name}"
                        )

                if self.strategy.is_common_field(table_field.property_name):
                    result.common_fields.append(table_field)
                else:
                    result.fields.append(table_field)

        logger.debug(
            f"Extracted {len(result.fields)} fields and {len(result.common_fields)} common fields "
            f"from {table_name}"
        )
        return result

    def _build_field(self, table_name: str, row: CatalogRow, result: FieldExtraction) -> FieldModel:
        column_name = row.get_string(self.query.field_name) or ""
        table_field = FieldModel(name=column_name)

        custom = self.query.field_custom()
        if custom:
            table_field.custom_map = self._custom_map(custom, row)

        if self.keywords_handler is not None and self.keywords_handler.is_keyword(column_name):
            message = f"Table [{table_name}] has column [{column_name}] that is a database keyword or reserved word"
            logger.warning(message)
            result.diagnostics.append(
                KeywordWarning(message=message, table_name=table_name, column_name=column_name)
            )
            table_field.keyword = True
            table_field.column_name = self.keywords_handler.format_column(column_name)

        table_field.type = row.get_string(self.query.field_type) or ""
        table_field.property_name = self.name_convert.property_name_convert(table_field)
        table_field.column_type = self.type_convert.process_type_convert(self.global_config, table_field)
        table_field.comment = self.query.get_field_comment(row)
        table_field.fill = self._fill_for(column_name)
        return table_field

    @staticmethod
    def _custom_map(columns: List[str], row: CatalogRow) -> Dict[str, Any]:
        return {column: (row[column] if column in row else None) for column in columns}

    def _fill_for(self, column_name: str) -> Optional[FieldFill]:
        for table_fill in self.strategy.table_fill_list:
            if table_fill.field_name.lower() == column_name.lower():
                return table_fill.field_fill
        return None
