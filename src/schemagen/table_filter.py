"""
Table Filter

Narrows the catalog table list with the strategy's include/exclude names
and LIKE/NOT LIKE expressions. The same rules can be pushed down into the
table-list SQL; in-memory filtering always runs afterwards, so both paths
retain the same tables.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Sequence, Set

from .catalog import CatalogRow
from .models import TableModel, VIEW_COMMENT
from .utils import get_logger

if TYPE_CHECKING:
    from .config import LikeTable, StrategyConfig
    from .dialects.base import BaseDbQuery

logger = get_logger(__name__)

# Names containing any of these are patterns, not literal table names
PATTERN_CHARS = re.compile(r"[~!/@#$%^&*()\-=+\\|\[\]{};:'\",<.>?]")


@dataclass
class FilterResult:
    """Outcome of filtering the catalog table list"""
    tables: List[TableModel] = field(default_factory=list)
    discovered: List[TableModel] = field(default_factory=list)
    not_exist_tables: List[str] = field(default_factory=list)
    blank_rows: int = 0

    @property
    def table_names(self) -> List[str]:
        return [t.name for t in self.tables]


def is_pattern(name: str) -> bool:
    """Whether a configured name uses pattern characters"""
    return PATTERN_CHARS.search(name) is not None


def table_name_matches(pattern: str, table_name: str) -> bool:
    """Case-insensitive equality, or a full regular-expression match"""
    if pattern.lower() == table_name.lower():
        return True
    try:
        return re.fullmatch(pattern, table_name) is not None
    except re.error:
        return False


def like_to_regex(expression: str) -> "re.Pattern[str]":
    """Translate a SQL LIKE expression into a case-insensitive regex"""
    parts = []
    for ch in expression:
        if ch == "%":
            parts.append(".*")
        elif ch == "_":
            parts.append(".")
        else:
            parts.append(re.escape(ch))
    return re.compile("".join(parts), re.IGNORECASE | re.DOTALL)


def like_matches(like: "LikeTable", table_name: str) -> bool:
    return like_to_regex(like.sql_value).fullmatch(table_name) is not None


class TableFilter:
    """Applies the strategy's table selection rules"""

    def __init__(self, strategy: "StrategyConfig"):
        self.strategy = strategy

    def validate(self) -> None:
        """Raises ConfigConflictError for mutually exclusive options"""
        self.strategy.validate_filters()

    def build_tables_sql(self, base_sql: str, query: "BaseDbQuery") -> str:
        """
        Append the filter conditions to the table-list SQL

        Only applies when enable_sql_filter is set. Comparisons are made on
        LOWER(name) to keep the case-insensitive semantics of the in-memory
        rules. Include names are pushed down only when none of them is a
        pattern; for exclude only the literal names are pushed down.
        """
        if not self.strategy.enable_sql_filter:
            return base_sql

        column = f"LOWER({query.table_name})"
        sql = base_sql + self._like_clause(column, query)

        include = sorted(self.strategy.include)
        if include and not any(is_pattern(name) for name in include):
            sql += f" AND {column} IN ({self._in_list(include, query)})"
        else:
            excluded = self.pushed_exclude()
            if excluded:
                sql += f" AND {column} NOT IN ({self._in_list(excluded, query)})"

        return sql

    def pushed_exclude(self) -> List[str]:
        """Exclude names removed by the table-list SQL"""
        if not self.strategy.enable_sql_filter or self.strategy.include:
            return []
        return sorted(name for name in self.strategy.exclude if not is_pattern(name))

    def build_excluded_sql(self, base_sql: str, query: "BaseDbQuery") -> Optional[str]:
        """
        SQL listing the tables that the pushed-down NOT IN removed

        Those rows still count as discovered and as matched exclude names.
        Returns None when nothing was pushed down.
        """
        excluded = self.pushed_exclude()
        if not excluded:
            return None
        column = f"LOWER({query.table_name})"
        return (
            base_sql
            + self._like_clause(column, query)
            + f" AND {column} IN ({self._in_list(excluded, query)})"
        )

    def _like_clause(self, column: str, query: "BaseDbQuery") -> str:
        if self.strategy.like_table is not None:
            return f" AND {column} LIKE {query.quote(self.strategy.like_table.sql_value.lower())}"
        if self.strategy.not_like_table is not None:
            return f" AND {column} NOT LIKE {query.quote(self.strategy.not_like_table.sql_value.lower())}"
        return ""

    @staticmethod
    def _in_list(names: Sequence[str], query: "BaseDbQuery") -> str:
        return ",".join(query.quote(name) for name in sorted({n.lower() for n in names}))

    def apply(
        self,
        rows: Sequence[CatalogRow],
        query: "BaseDbQuery",
        excluded_rows: Sequence[CatalogRow] = (),
    ) -> FilterResult:
        """
        Filter table-list rows, preserving catalog order

        Views (comment "VIEW") are dropped first when skip_view is set.
        ``excluded_rows`` are the rows a pushed-down NOT IN removed; they are
        discovered and matched but never retained.
        """
        result = FilterResult()
        include = self.strategy.include
        exclude = self.strategy.exclude
        matched: Set[str] = set()

        for row in rows:
            table = self._discover(row, query, result)
            if table is None:
                continue

            if include:
                hits = self._matching(include, table.name)
                matched.update(hits)
                if hits:
                    result.tables.append(table)
            elif exclude:
                hits = self._matching(exclude, table.name)
                matched.update(hits)
                if not hits:
                    result.tables.append(table)
            else:
                result.tables.append(table)

        for row in excluded_rows:
            table = self._discover(row, query, result)
            if table is not None:
                matched.update(self._matching(exclude, table.name))

        configured = include or exclude
        result.not_exist_tables = sorted(
            name for name in configured
            if name not in matched and not is_pattern(name)
        )
        return result

    def _discover(self, row: CatalogRow, query: "BaseDbQuery", result: FilterResult) -> Optional[TableModel]:
        table_name = row.get_string(query.table_name)
        if table_name is None or not table_name.strip():
            result.blank_rows += 1
            return None

        comment = query.get_table_comment(row)
        if self.strategy.skip_view and comment == VIEW_COMMENT:
            logger.debug(f"Skipping view {table_name}")
            return None

        if not self._passes_like(table_name):
            return None

        table = TableModel(name=table_name, comment=comment)
        result.discovered.append(table)
        return table

    def _passes_like(self, table_name: str) -> bool:
        if self.strategy.like_table is not None:
            return like_matches(self.strategy.like_table, table_name)
        if self.strategy.not_like_table is not None:
            return not like_matches(self.strategy.not_like_table, table_name)
        return True

    @staticmethod
    def _matching(patterns: Set[str], table_name: str) -> Set[str]:
        return {p for p in patterns if table_name_matches(p, table_name)}
