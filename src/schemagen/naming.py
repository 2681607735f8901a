"""
Naming Resolver

Derives the entity, mapper, xml, service, service implementation and
controller names of each table, and the imports its entity needs.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, FrozenSet, Optional, Set

from .config import NamingStrategy
from .models import TableModel
from .utils import get_logger

if TYPE_CHECKING:
    from .config import GlobalConfig, StrategyConfig
    from .converters import NameConverter

logger = get_logger(__name__)

MAPPER = "Mapper"
SERVICE = "Service"
SERVICE_IMPL = "ServiceImpl"
CONTROLLER = "Controller"

ACTIVE_RECORD_MODEL = "com.baomidou.mybatisplus.extension.activerecord.Model"
ID_TYPE = "com.baomidou.mybatisplus.annotation.IdType"
TABLE_ID = "com.baomidou.mybatisplus.annotation.TableId"
VERSION = "com.baomidou.mybatisplus.annotation.Version"


def _apply_format(name_format: str, entity_name: str) -> str:
    """Substitute %s; any other % is kept literally"""
    return name_format.replace("%s", entity_name)


def _format_or(name_format: Optional[str], entity_name: str, default: str) -> str:
    if name_format and name_format.strip():
        return _apply_format(name_format, entity_name)
    return default


def required_imports(
    table: TableModel,
    strategy: "StrategyConfig",
    global_config: "GlobalConfig",
) -> FrozenSet[str]:
    """
    Imports required by a table's entity

    - a configured super class, or the active-record base class when no
      super class is set
    - IdType/TableId when an id type is configured and the table has a key
    - Version when a field's property name equals the version field name
    """
    imports: Set[str] = set()

    if strategy.super_entity_class and strategy.super_entity_class.strip():
        imports.add(strategy.super_entity_class)
    elif global_config.active_record:
        imports.add(ACTIVE_RECORD_MODEL)

    if global_config.id_type is not None and table.has_primary_key:
        imports.add(ID_TYPE)
        imports.add(TABLE_ID)

    version_field = strategy.version_field_name
    if version_field and any(f.property_name == version_field for f in table.fields):
        imports.add(VERSION)

    return frozenset(imports)


class NameResolver:
    """Assigns artifact names and imports to table models"""

    def __init__(
        self,
        strategy: "StrategyConfig",
        global_config: "GlobalConfig",
        name_convert: Optional["NameConverter"] = None,
    ):
        self.strategy = strategy
        self.global_config = global_config
        self.name_convert = name_convert or strategy.get_name_convert()

    def resolve(self, table: TableModel) -> TableModel:
        """Fill in the derived names and imports of a table"""
        entity_name = self.name_convert.entity_name_convert(table)
        gc = self.global_config

        if gc.entity_name and gc.entity_name.strip():
            table.convert = True
            table.entity_name = _apply_format(gc.entity_name, entity_name)
        else:
            table.convert = self._needs_table_annotation(table, entity_name)
            table.entity_name = entity_name

        table.mapper_name = _format_or(gc.mapper_name, entity_name, entity_name + MAPPER)
        table.xml_name = _format_or(gc.xml_name, entity_name, entity_name + MAPPER)
        table.service_name = _format_or(gc.service_name, entity_name, "I" + entity_name + SERVICE)
        table.service_impl_name = _format_or(gc.service_impl_name, entity_name, entity_name + SERVICE_IMPL)
        table.controller_name = _format_or(gc.controller_name, entity_name, entity_name + CONTROLLER)

        table.required_imports = required_imports(table, self.strategy, self.global_config)
        logger.debug(f"Resolved {table.name} -> {table.entity_name}")
        return table

    def _needs_table_annotation(self, table: TableModel, entity_name: str) -> bool:
        """Whether the entity name cannot be mapped back to the table name by convention"""
        name = table.name.lower()
        if any(prefix and name.startswith(prefix.lower()) for prefix in self.strategy.table_prefix):
            return True
        if self.strategy.naming == NamingStrategy.NO_CHANGE:
            return name != entity_name.lower()
        return name.replace("_", "") != entity_name.lower()
