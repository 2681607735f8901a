"""
Naming and Type Conversion Policies

Both policies are pluggable: StrategyConfig.name_convert and
DataSourceConfig.type_convert accept any object with the matching method.
The defaults below cover the common conventions.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Optional, Protocol, runtime_checkable

from .models import ColumnType, FieldModel, TableModel

if TYPE_CHECKING:
    from .config import DatabaseType, GlobalConfig, StrategyConfig


@runtime_checkable
class NameConverter(Protocol):
    """Turns catalog names into entity and property names"""

    def entity_name_convert(self, table: TableModel) -> str:
        ...

    def property_name_convert(self, field: FieldModel) -> str:
        ...


@runtime_checkable
class TypeConverter(Protocol):
    """Resolves a raw catalog column type into a target-language type"""

    def process_type_convert(self, global_config: "GlobalConfig", field: FieldModel) -> ColumnType:
        ...


def underline_to_camel(name: str) -> str:
    """user_login_log -> userLoginLog; all-caps and underscored names are lower-cased first"""
    if not name or not name.strip():
        return ""
    if name.isupper() or "_" in name:
        name = name.lower()
    parts = [part for part in name.split("_") if part]
    if not parts:
        return ""
    return parts[0] + "".join(part[0].upper() + part[1:] for part in parts[1:])


def capital_first(name: str) -> str:
    if not name:
        return name
    return name[0].upper() + name[1:]


def remove_prefix(name: str, prefixes: Iterable[str]) -> str:
    """Strip the first matching prefix, compared case-insensitively"""
    lower = name.lower()
    for prefix in prefixes:
        if prefix and lower.startswith(prefix.lower()):
            return name[len(prefix):]
    return name


class DefaultNameConverter:
    """Name conversion driven by the strategy's naming options and prefixes"""

    def __init__(self, strategy: "StrategyConfig"):
        self.strategy = strategy

    def entity_name_convert(self, table: TableModel) -> str:
        from .config import NamingStrategy

        name = remove_prefix(table.name, self.strategy.table_prefix)
        if self.strategy.naming == NamingStrategy.UNDERLINE_TO_CAMEL:
            return capital_first(underline_to_camel(name))
        return capital_first(name)

    def property_name_convert(self, field: FieldModel) -> str:
        from .config import NamingStrategy

        name = remove_prefix(field.name, self.strategy.field_prefix)
        if self.strategy.get_column_naming() == NamingStrategy.UNDERLINE_TO_CAMEL:
            return underline_to_camel(name)
        return name


class DbColumnType:
    """Java types the default converter resolves to"""
    STRING = ColumnType("String")
    LONG = ColumnType("Long")
    INTEGER = ColumnType("Integer")
    FLOAT = ColumnType("Float")
    DOUBLE = ColumnType("Double")
    BOOLEAN = ColumnType("Boolean")
    BYTE_ARRAY = ColumnType("byte[]")
    BIG_DECIMAL = ColumnType("BigDecimal", "java.math.BigDecimal")
    BIG_INTEGER = ColumnType("BigInteger", "java.math.BigInteger")

    DATE = ColumnType("Date", "java.util.Date")
    SQL_DATE = ColumnType("Date", "java.sql.Date")
    SQL_TIME = ColumnType("Time", "java.sql.Time")
    TIMESTAMP = ColumnType("Timestamp", "java.sql.Timestamp")

    LOCAL_DATE = ColumnType("LocalDate", "java.time.LocalDate")
    LOCAL_TIME = ColumnType("LocalTime", "java.time.LocalTime")
    LOCAL_DATE_TIME = ColumnType("LocalDateTime", "java.time.LocalDateTime")
    YEAR = ColumnType("Year", "java.time.Year")


class DefaultTypeConverter:
    """
    Keyword-based mapping of catalog types to Java types

    Matches on fragments of the lower-cased catalog type, so "varchar(64)",
    "VARCHAR2" and "character varying" all resolve to String.
    """

    def __init__(self, db_type: Optional["DatabaseType"] = None):
        self.db_type = db_type

    def process_type_convert(self, global_config: "GlobalConfig", field: FieldModel) -> ColumnType:
        t = (field.type or "").lower()

        if "tinyint(1)" in t or "bool" in t:
            return DbColumnType.BOOLEAN
        if any(k in t for k in ("char", "text", "json", "enum", "clob", "uuid", "xml")):
            return DbColumnType.STRING
        if "bigint" in t:
            return DbColumnType.LONG
        # PostgreSQL interval and point would otherwise match "int"
        if "interval" in t or "point" in t:
            return DbColumnType.STRING
        if "int" in t:
            return DbColumnType.INTEGER
        if "bit" in t:
            return DbColumnType.BOOLEAN
        if any(k in t for k in ("date", "time", "year")):
            return self._date_type(global_config, t)
        if "decimal" in t or "numeric" in t:
            return DbColumnType.BIG_DECIMAL
        if "number" in t:
            return self._number_type(t)
        if "float" in t:
            return DbColumnType.FLOAT
        if "double" in t or "real" in t:
            return DbColumnType.DOUBLE
        if any(k in t for k in ("blob", "binary", "bytea", "image", "raw")):
            return DbColumnType.BYTE_ARRAY
        return DbColumnType.STRING

    @staticmethod
    def _number_type(t: str) -> ColumnType:
        # Oracle NUMBER(p) / NUMBER(p,s)
        if "," in t:
            return DbColumnType.BIG_DECIMAL
        digits = "".join(ch for ch in t if ch.isdigit())
        if not digits:
            return DbColumnType.BIG_DECIMAL
        precision = int(digits)
        if precision <= 9:
            return DbColumnType.INTEGER
        if precision <= 18:
            return DbColumnType.LONG
        return DbColumnType.BIG_DECIMAL

    @staticmethod
    def _date_type(global_config: "GlobalConfig", t: str) -> ColumnType:
        from .config import DateType

        date_type = global_config.date_type
        if date_type == DateType.ONLY_DATE:
            return DbColumnType.DATE

        if date_type == DateType.SQL_PACK:
            if "timestamp" in t or "datetime" in t:
                return DbColumnType.TIMESTAMP
            if "date" in t:
                return DbColumnType.SQL_DATE
            if "time" in t:
                return DbColumnType.SQL_TIME
            return DbColumnType.SQL_DATE

        if "timestamp" in t or "datetime" in t:
            return DbColumnType.LOCAL_DATE_TIME
        if "date" in t:
            return DbColumnType.LOCAL_DATE
        if "time" in t:
            return DbColumnType.LOCAL_TIME
        return DbColumnType.YEAR
