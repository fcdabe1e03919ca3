"""
Statement execution over a SQLAlchemy connection.

``SqlExecutor`` is the only capability the query operations need: run a
statement and get the last inserted id, or run a query and get raw rows.
``ConnectionExecutor`` provides it for any SQLAlchemy ``Connection``,
whether it is a plain pooled connection or one inside ``engine.begin()``.
"""

from typing import List, Protocol

from sqlalchemy import Connection, CursorResult
from sqlalchemy.exc import DBAPIError

from sql_access.infrastructure.sql.exceptions import StatementExecutionError
from sql_access.infrastructure.sql.results.models import RawRow
from sql_access.utils.logging import get_logger

logger = get_logger(__name__)


class SqlExecutor(Protocol):
    """Protocol for anything that can run SQL text."""

    def execute_statement(self, sql: str) -> int: ...
    def execute_query(self, sql: str, scalar: bool = False) -> List[RawRow]: ...


class ConnectionExecutor:
    """
    SqlExecutor bound to one SQLAlchemy connection.

    Statements are sent as raw driver SQL with no parameter collection, so
    literal ``%`` and ``:`` characters in the text are left alone.

    Attributes:
        connection: SQLAlchemy Connection. Caller owns transaction lifecycle.
    """

    def __init__(self, connection: Connection) -> None:
        self.connection = connection

    def _execute(self, sql: str) -> CursorResult:
        logger.debug("sql_access.statement.executing", sql=sql)
        try:
            return self.connection.exec_driver_sql(
                sql, execution_options={"no_parameters": True}
            )
        except DBAPIError as e:
            error = StatementExecutionError(sql, e.orig or e)
            logger.error("sql_access.statement.failed", **error.to_dict())
            raise error from e

    def execute_statement(self, sql: str) -> int:
        """
        Run INSERT/UPDATE/DELETE text.

        Returns:
            The id generated by the statement, or 0 when there is none
        """
        result = self._execute(sql)
        last_id = result.lastrowid
        logger.debug(
            "sql_access.statement.executed",
            rowcount=result.rowcount,
            last_insert_id=last_id,
        )
        return int(last_id) if last_id else 0

    def execute_query(self, sql: str, scalar: bool = False) -> List[RawRow]:
        """
        Run SELECT text.

        Args:
            sql: Query text
            scalar: Return the first column of each row instead of a tuple

        Returns:
            One tuple (or scalar) per result row
        """
        result = self._execute(sql)
        if scalar:
            rows: List[RawRow] = list(result.scalars().all())
        else:
            rows = [tuple(row) for row in result]
        logger.debug("sql_access.query.fetched", row_count=len(rows))
        return rows
