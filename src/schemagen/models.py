"""
Table and Field Models

The generator-ready description of a catalog: one TableModel per retained
table, each holding its FieldModels. These objects are what the template
rendering stage consumes.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, FrozenSet, Iterable, List, Optional

import yaml


class FieldFill(str, Enum):
    """When an auto-filled value is applied to a field"""
    DEFAULT = "DEFAULT"
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    INSERT_UPDATE = "INSERT_UPDATE"


VIEW_COMMENT = "VIEW"


@dataclass(frozen=True)
class ColumnType:
    """Resolved target-language type of a column"""
    type: str
    pkg: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "pkg": self.pkg}


@dataclass
class FieldModel:
    """A single catalog column, normalized for code generation"""
    name: str
    column_name: str = ""
    property_name: str = ""
    type: str = ""
    column_type: Optional[ColumnType] = None
    comment: str = ""
    key_flag: bool = False
    key_identity_flag: bool = False
    keyword: bool = False
    fill: Optional[FieldFill] = None
    custom_map: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.column_name:
            self.column_name = self.name

    @property
    def capital_name(self) -> str:
        """Property name with its first letter upper-cased (accessor stem)"""
        if not self.property_name:
            return ""
        return self.property_name[0].upper() + self.property_name[1:]

    @property
    def property_type(self) -> Optional[str]:
        return self.column_type.type if self.column_type else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "column_name": self.column_name,
            "property_name": self.property_name,
            "type": self.type,
            "column_type": self.column_type.to_dict() if self.column_type else None,
            "comment": self.comment,
            "key_flag": self.key_flag,
            "key_identity_flag": self.key_identity_flag,
            "keyword": self.keyword,
            "fill": self.fill.value if self.fill else None,
            "custom_map": {k: _plain(v) for k, v in self.custom_map.items()},
        }


@dataclass
class TableModel:
    """A catalog table with its fields and derived artifact names"""
    name: str
    comment: str = ""
    has_primary_key: bool = False
    fields: List[FieldModel] = field(default_factory=list)
    common_fields: List[FieldModel] = field(default_factory=list)

    # Derived artifact names
    entity_name: Optional[str] = None
    mapper_name: Optional[str] = None
    xml_name: Optional[str] = None
    service_name: Optional[str] = None
    service_impl_name: Optional[str] = None
    controller_name: Optional[str] = None
    convert: bool = False

    required_imports: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def is_view(self) -> bool:
        return self.comment == VIEW_COMMENT

    @property
    def key_field(self) -> Optional[FieldModel]:
        """The retained primary-key field, if any"""
        for f in self.fields:
            if f.key_flag:
                return f
        for f in self.common_fields:
            if f.key_flag:
                return f
        return None

    @property
    def field_names(self) -> str:
        """Comma separated column names, as used in generated base column lists"""
        return ", ".join(f.column_name for f in self.fields)

    def get_field(self, name: str) -> Optional[FieldModel]:
        """Get a field by raw column name (case-insensitive)"""
        name_lower = name.lower()
        for f in self.fields + self.common_fields:
            if f.name.lower() == name_lower:
                return f
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "comment": self.comment,
            "has_primary_key": self.has_primary_key,
            "entity_name": self.entity_name,
            "mapper_name": self.mapper_name,
            "xml_name": self.xml_name,
            "service_name": self.service_name,
            "service_impl_name": self.service_impl_name,
            "controller_name": self.controller_name,
            "convert": self.convert,
            "required_imports": sorted(self.required_imports),
            "fields": [f.to_dict() for f in self.fields],
            "common_fields": [f.to_dict() for f in self.common_fields],
        }


def _plain(value: Any) -> Any:
    """Coerce driver-specific catalog values into YAML/JSON friendly ones"""
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


def export_table_models(
    tables: Iterable[TableModel],
    path: str,
    fmt: Optional[str] = None,
) -> Path:
    """
    Write table models to a YAML or JSON file

    Args:
        tables: Table models to export
        path: Output file path
        fmt: "yaml" or "json"; inferred from the file suffix when omitted

    Returns:
        Path of the written file
    """
    out = Path(path)
    if fmt is None:
        fmt = "json" if out.suffix.lower() == ".json" else "yaml"

    data = {"tables": [t.to_dict() for t in tables]}
    out.parent.mkdir(parents=True, exist_ok=True)

    with open(out, "w", encoding="utf-8") as f:
        if fmt == "json":
            json.dump(data, f, indent=2, ensure_ascii=False)
        elif fmt == "yaml":
            yaml.safe_dump(data, f, sort_keys=False, allow_unicode=True)
        else:
            raise ValueError(f"Unsupported export format: {fmt}")

    return out
