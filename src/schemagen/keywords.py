"""
Reserved Keyword Handling

A column named like a reserved word (``order``, ``key``, ``desc``) must be
escaped when written into generated SQL. Handlers detect such names and
produce the escaped form.
"""
from __future__ import annotations

from typing import FrozenSet, Iterable, Optional, Protocol, runtime_checkable


@runtime_checkable
class KeyWordsHandler(Protocol):
    """Detects and escapes reserved-word column names"""

    def is_keyword(self, column_name: str) -> bool:
        ...

    def format_column(self, column_name: str) -> str:
        ...


class BaseKeyWordsHandler:
    """Case-insensitive keyword set with a format-string escape"""

    format_style: str = "%s"
    default_keywords: FrozenSet[str] = frozenset()

    def __init__(self, keywords: Optional[Iterable[str]] = None):
        words = keywords if keywords is not None else self.default_keywords
        self.keywords = frozenset(word.upper() for word in words)

    def is_keyword(self, column_name: str) -> bool:
        return column_name.upper() in self.keywords

    def format_column(self, column_name: str) -> str:
        return self.format_style % column_name


class MySqlKeyWordsHandler(BaseKeyWordsHandler):
    """MySQL reserved words, escaped with backticks"""

    format_style = "`%s`"
    default_keywords = frozenset({
        "ACCESSIBLE", "ADD", "ALL", "ALTER", "ANALYZE", "AND", "AS", "ASC", "BETWEEN",
        "BIGINT", "BINARY", "BLOB", "BOTH", "BY", "CALL", "CASCADE", "CASE", "CHANGE",
        "CHAR", "CHARACTER", "CHECK", "COLLATE", "COLUMN", "CONDITION", "CONSTRAINT",
        "CONTINUE", "CONVERT", "CREATE", "CROSS", "CURRENT_DATE", "CURRENT_TIME",
        "CURRENT_TIMESTAMP", "CURRENT_USER", "CURSOR", "DATABASE", "DATABASES",
        "DECIMAL", "DECLARE", "DEFAULT", "DELAYED", "DELETE", "DESC", "DESCRIBE",
        "DISTINCT", "DIV", "DOUBLE", "DROP", "DUAL", "EACH", "ELSE", "ELSEIF",
        "ENCLOSED", "ESCAPED", "EXISTS", "EXIT", "EXPLAIN", "FALSE", "FETCH", "FLOAT",
        "FOR", "FORCE", "FOREIGN", "FROM", "FULLTEXT", "FUNCTION", "GENERATED", "GET",
        "GRANT", "GROUP", "GROUPS", "HAVING", "IF", "IGNORE", "IN", "INDEX", "INNER",
        "INSERT", "INT", "INTEGER", "INTERVAL", "INTO", "IS", "ITERATE", "JOIN", "KEY",
        "KEYS", "KILL", "LEADING", "LEAVE", "LEFT", "LIKE", "LIMIT", "LINES", "LOAD",
        "LOCK", "LONG", "LOOP", "MATCH", "MOD", "NATURAL", "NOT", "NULL", "NUMERIC",
        "ON", "OPTION", "OR", "ORDER", "OUT", "OUTER", "PARTITION", "PRECISION",
        "PRIMARY", "PROCEDURE", "RANGE", "RANK", "READ", "REAL", "REFERENCES", "REGEXP",
        "RELEASE", "RENAME", "REPEAT", "REPLACE", "REQUIRE", "RESTRICT", "RETURN",
        "REVOKE", "RIGHT", "RLIKE", "ROW", "ROWS", "SCHEMA", "SELECT", "SET", "SHOW",
        "SMALLINT", "SPATIAL", "SQL", "STARTING", "SYSTEM", "TABLE", "TERMINATED",
        "THEN", "TO", "TRAILING", "TRIGGER", "TRUE", "UNDO", "UNION", "UNIQUE",
        "UNLOCK", "UNSIGNED", "UPDATE", "USAGE", "USE", "USING", "VALUES", "VARCHAR",
        "WHEN", "WHERE", "WHILE", "WINDOW", "WITH", "WRITE", "XOR", "ZEROFILL",
    })


class PostgreSqlKeyWordsHandler(BaseKeyWordsHandler):
    """PostgreSQL reserved words, escaped with double quotes"""

    format_style = '"%s"'
    default_keywords = frozenset({
        "ALL", "ANALYSE", "ANALYZE", "AND", "ANY", "ARRAY", "AS", "ASC", "ASYMMETRIC",
        "AUTHORIZATION", "BINARY", "BOTH", "CASE", "CAST", "CHECK", "COLLATE",
        "COLLATION", "COLUMN", "CONCURRENTLY", "CONSTRAINT", "CREATE", "CROSS",
        "CURRENT_CATALOG", "CURRENT_DATE", "CURRENT_ROLE", "CURRENT_SCHEMA",
        "CURRENT_TIME", "CURRENT_TIMESTAMP", "CURRENT_USER", "DEFAULT", "DEFERRABLE",
        "DESC", "DISTINCT", "DO", "ELSE", "END", "EXCEPT", "FALSE", "FETCH", "FOR",
        "FOREIGN", "FREEZE", "FROM", "FULL", "GRANT", "GROUP", "HAVING", "ILIKE", "IN",
        "INITIALLY", "INNER", "INTERSECT", "INTO", "IS", "ISNULL", "JOIN", "LATERAL",
        "LEADING", "LEFT", "LIKE", "LIMIT", "LOCALTIME", "LOCALTIMESTAMP", "NATURAL",
        "NOT", "NOTNULL", "NULL", "OFFSET", "ON", "ONLY", "OR", "ORDER", "OUTER",
        "OVERLAPS", "PLACING", "PRIMARY", "REFERENCES", "RETURNING", "RIGHT", "SELECT",
        "SESSION_USER", "SIMILAR", "SOME", "SYMMETRIC", "TABLE", "TABLESAMPLE", "THEN",
        "TO", "TRAILING", "TRUE", "UNION", "UNIQUE", "USER", "USING", "VARIADIC",
        "VERBOSE", "WHEN", "WHERE", "WINDOW", "WITH",
    })


class H2KeyWordsHandler(BaseKeyWordsHandler):
    """H2 reserved words, escaped with double quotes"""

    format_style = '"%s"'
    default_keywords = frozenset({
        "ALL", "AND", "ARRAY", "AS", "BETWEEN", "BOTH", "CASE", "CHECK", "CONSTRAINT",
        "CROSS", "CURRENT_CATALOG", "CURRENT_DATE", "CURRENT_SCHEMA", "CURRENT_TIME",
        "CURRENT_TIMESTAMP", "CURRENT_USER", "DAY", "DEFAULT", "DISTINCT", "ELSE", "END",
        "EXCEPT", "EXISTS", "FALSE", "FETCH", "FOR", "FOREIGN", "FROM", "FULL", "GROUP",
        "HAVING", "HOUR", "IF", "ILIKE", "IN", "INNER", "INTERSECT", "INTERVAL", "IS",
        "JOIN", "KEY", "LEADING", "LEFT", "LIKE", "LIMIT", "LOCALTIME", "LOCALTIMESTAMP",
        "MINUS", "MINUTE", "MONTH", "NATURAL", "NOT", "NULL", "OFFSET", "ON", "OR",
        "ORDER", "PRIMARY", "QUALIFY", "REGEXP", "RIGHT", "ROW", "ROWNUM", "SECOND",
        "SELECT", "SESSION_USER", "SET", "SOME", "SYMMETRIC", "SYSTEM_USER", "TABLE",
        "TO", "TOP", "TRAILING", "TRUE", "UESCAPE", "UNION", "UNIQUE", "UNKNOWN", "USER",
        "USING", "VALUE", "VALUES", "WHEN", "WHERE", "WINDOW", "WITH", "YEAR",
    })
