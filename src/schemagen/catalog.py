"""
Catalog Query Execution
Runs catalog SQL on a borrowed DB-API connection
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence

from .utils import QueryFailure, get_logger

logger = get_logger(__name__)


class CatalogRow(Mapping[str, Any]):
    """
    One catalog result row with case-insensitive column lookup

    Drivers disagree on the case of catalog column labels (MySQL returns
    "Field", H2 returns "COLUMN_NAME"), so accessors are matched ignoring case.
    """

    def __init__(self, columns: Sequence[str], values: Sequence[Any]):
        self._values: Dict[str, Any] = {}
        self._labels: Dict[str, str] = {}
        for column, value in zip(columns, values):
            self._values[column] = value
            self._labels.setdefault(column.lower(), column)

    def __getitem__(self, key: str) -> Any:
        if key in self._values:
            return self._values[key]
        label = self._labels.get(key.lower())
        if label is None:
            raise KeyError(key)
        return self._values[label]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and (key in self._values or key.lower() in self._labels)

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def get_string(self, key: Optional[str]) -> Optional[str]:
        """Column value as text, None when the column is absent or NULL"""
        if not key or key not in self:
            return None
        value = self[key]
        if value is None:
            return None
        if isinstance(value, bytes):
            return value.decode("utf-8", errors="replace")
        return str(value)

    def __repr__(self) -> str:
        return f"CatalogRow({self._values!r})"


@dataclass
class QueryResult:
    """Result of a catalog query execution"""
    success: bool
    sql: str = ""
    columns: List[str] = field(default_factory=list)
    rows: List[CatalogRow] = field(default_factory=list)
    row_count: int = 0
    execution_time_ms: float = 0.0
    error_message: Optional[str] = None
    error: Optional[Exception] = None
    table_name: Optional[str] = None

    def raise_for_error(self) -> "QueryResult":
        """Raise QueryFailure if the query did not succeed"""
        if not self.success:
            raise QueryFailure(
                message=f"Catalog query failed: {self.error_message}",
                sql_query=self.sql,
                table_name=self.table_name,
                original_error=self.error,
            )
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "sql": self.sql,
            "columns": self.columns,
            "rows": [dict(row) for row in self.rows],
            "row_count": self.row_count,
            "execution_time_ms": self.execution_time_ms,
            "error_message": self.error_message,
        }


def execute_query(connection: Any, sql: str, table_name: Optional[str] = None) -> QueryResult:
    """
    Execute a catalog query and return its rows

    The connection is borrowed: only the cursor opened here is closed.
    Driver errors are reported through QueryResult, never raised.
    """
    start_time = time.time()
    cursor = None

    try:
        cursor = connection.cursor()
        cursor.execute(sql)

        if cursor.description:
            columns = [desc[0] for desc in cursor.description]
            rows = [CatalogRow(columns, row) for row in cursor.fetchall()]
        else:
            columns = []
            rows = []

        execution_time = (time.time() - start_time) * 1000
        logger.debug(f"Catalog query returned {len(rows)} rows in {execution_time:.1f}ms: {sql}")

        return QueryResult(
            success=True,
            sql=sql,
            columns=columns,
            rows=rows,
            row_count=len(rows),
            execution_time_ms=execution_time,
            table_name=table_name,
        )

    except Exception as e:
        execution_time = (time.time() - start_time) * 1000
        return QueryResult(
            success=False,
            sql=sql,
            execution_time_ms=execution_time,
            error_message=str(e),
            error=e,
            table_name=table_name,
        )

    finally:
        if cursor is not None:
            try:
                cursor.close()
            except Exception as e:
                logger.debug(f"Ignoring cursor close failure: {e}")
