"""
Query operations shared by plain and transactional execution.

Each function takes an executor so the same remapping logic serves pooled
connections and open transactions alike.

Example:
    >>> sql = build_select_by_id("feedback", 33, "id as id, feedback.content as cc")
    >>> records, first = run(executor, sql, shape=Feedback, first_shape=Tuple[int, str])
"""

from typing import Any, Optional, Sequence, Union

from sql_access.infrastructure.sql.exceptions import SqlAccessError
from sql_access.infrastructure.sql.parsing.aliases import (
    extract_aliases,
    parse_field_list,
)
from sql_access.infrastructure.sql.results.models import QueryResult
from sql_access.infrastructure.sql.results.remapper import remap
from sql_access.utils.logging import get_logger

from .executor import SqlExecutor

logger = get_logger(__name__)


def run_id(executor: SqlExecutor, sql: str) -> int:
    """
    Run an INSERT/UPDATE/DELETE statement.

    Returns:
        The last inserted id, or 0 if the statement generated none
    """
    last_id = executor.execute_statement(sql)
    logger.info("sql_access.statement.completed", last_insert_id=last_id)
    return last_id


def _fetch_and_remap(
    executor: SqlExecutor,
    sql: str,
    aliases: Sequence[str],
    shape: Optional[Any],
    first_shape: Optional[Any],
    scalar: bool,
    strict: bool,
) -> QueryResult:
    rows = executor.execute_query(sql, scalar=scalar)
    try:
        result = remap(rows, aliases, shape=shape, first_shape=first_shape, strict=strict)
    except SqlAccessError as e:
        e.sql = sql
        logger.error("sql_access.query.remap_failed", **e.to_dict())
        raise

    logger.info(
        "sql_access.query.completed",
        row_count=len(result.records),
        fields=list(aliases),
    )
    return result


def run(
    executor: SqlExecutor,
    sql: str,
    shape: Optional[Any] = None,
    first_shape: Optional[Any] = None,
    scalar: bool = False,
    strict: bool = False,
    case_sensitive: bool = True,
) -> QueryResult:
    """
    Run a SELECT and key every row by the aliases in its column list.

    Aliases are extracted before the query is sent, so unparseable SQL
    fails without touching the database.

    Args:
        executor: Plain or transactional executor
        sql: SELECT text
        shape: Shape each record is decoded into (None keeps dicts)
        first_shape: Shape the first raw row is decoded into
        scalar: Query returns a single column; rows pass through unkeyed
        strict: Decode without pydantic type coercion
        case_sensitive: Only recognise ``as``/``AS`` spelled in one case

    Raises:
        AliasParseError: If the SELECT ... FROM clause cannot be parsed
        ArityMismatchError: If rows do not match the extracted aliases
        RecordDecodeError: If records do not fit ``shape``
        StatementExecutionError: If the database rejects the query
    """
    aliases = extract_aliases(sql, case_sensitive=case_sensitive)
    return _fetch_and_remap(executor, sql, aliases, shape, first_shape, scalar, strict)


def run_select(
    executor: SqlExecutor,
    sql: str,
    fields: Union[str, Sequence[str]],
    shape: Optional[Any] = None,
    first_shape: Optional[Any] = None,
    scalar: bool = False,
    strict: bool = False,
) -> QueryResult:
    """
    Run a SELECT with an explicit field list instead of parsing the SQL.

    Use this for ``SELECT *``, computed columns, nested selects or anything
    else the alias extractor cannot read.

    Args:
        fields: ``"id, cc"`` or ``["id", "cc"]``, one name per column
    """
    aliases = parse_field_list(fields)
    return _fetch_and_remap(executor, sql, aliases, shape, first_shape, scalar, strict)
