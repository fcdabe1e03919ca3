"""
SQL module for statement building and result remapping.

This module provides the building blocks shared by every execution path:
literal formatting, statement composition, SELECT alias extraction and
positional row remapping.
"""

from .core.identifier import qualify_table, quote_identifier
from .core.literals import SqlLiteral, ValueKind, format_value
from .dialects.mysql import MySQLDialect
from .exceptions import (
    AliasParseError,
    ArityMismatchError,
    RecordDecodeError,
    SqlAccessError,
    StatementBuildError,
    StatementExecutionError,
)
from .operations.statements import (
    StatementBuilder,
    build_count,
    build_delete_by_field,
    build_delete_by_id,
    build_insert,
    build_insert_many,
    build_select_by_id,
    build_update,
)
from .parsing.aliases import extract_aliases, parse_field_list
from .results.models import QueryResult
from .results.remapper import remap, remap_rows

__all__ = [
    "quote_identifier",
    "qualify_table",
    "SqlLiteral",
    "ValueKind",
    "format_value",
    "MySQLDialect",
    "StatementBuilder",
    "build_count",
    "build_delete_by_field",
    "build_delete_by_id",
    "build_insert",
    "build_insert_many",
    "build_select_by_id",
    "build_update",
    "extract_aliases",
    "parse_field_list",
    "QueryResult",
    "remap",
    "remap_rows",
    "SqlAccessError",
    "StatementBuildError",
    "AliasParseError",
    "ArityMismatchError",
    "RecordDecodeError",
    "StatementExecutionError",
]
