"""
MySQL-specific SQL dialect implementation.

Provides MySQL syntax for the single-table statements built by
StatementBuilder: literal rendering, optional backtick quoting and the
INSERT/UPDATE/DELETE/SELECT templates.
"""

from typing import List, Optional, Sequence, Tuple

from ..core.identifier import qualify_table, render_identifier
from ..core.literals import LiteralInput, format_value


class MySQLDialect:
    """MySQL SQL dialect implementation."""

    name = "mysql"

    def __init__(self, quote_identifiers: bool = False):
        """
        Initialize the dialect.

        Args:
            quote_identifiers: Backtick-quote table and column names. When
                False (default) caller-supplied names are emitted verbatim.
        """
        self.quote_identifiers = quote_identifiers

    def quote(self, identifier: str) -> str:
        """Render a column name, quoted when the dialect is configured to."""
        return render_identifier(identifier, self.quote_identifiers)

    def qualify(self, table: str, schema: Optional[str] = None) -> str:
        """Create a table reference with optional database prefix."""
        return qualify_table(table, schema, quote=self.quote_identifiers)

    def literal(self, value: LiteralInput) -> str:
        """Render a value as literal SQL text."""
        return format_value(value)

    def build_where(self, conditions: Sequence[Tuple[str, LiteralInput]]) -> str:
        """
        Build an equality WHERE clause joined with AND.

        Returns an empty string when there are no conditions.
        """
        if not conditions:
            return ""
        clause = " AND ".join(
            f"{self.quote(column)}={self.literal(value)}" for column, value in conditions
        )
        return f" WHERE {clause}"

    def build_insert(
        self,
        table: str,
        columns: List[str],
        rows: List[List[LiteralInput]],
        schema: Optional[str] = None,
    ) -> str:
        """
        Build an INSERT statement with one VALUES tuple per row.

        Args:
            table: Table name
            columns: Column names in statement order
            rows: Values per row, in column order
            schema: Optional database name

        Returns:
            INSERT SQL statement
        """
        qualified_table = self.qualify(table, schema)
        quoted_cols = ",".join(self.quote(c) for c in columns)
        values = ",".join(
            "(" + ",".join(self.literal(v) for v in row) + ")" for row in rows
        )
        return f"INSERT INTO {qualified_table} ({quoted_cols}) VALUES {values}"

    def build_update(
        self,
        table: str,
        assignments: Sequence[Tuple[str, LiteralInput]],
        conditions: Sequence[Tuple[str, LiteralInput]],
        schema: Optional[str] = None,
    ) -> str:
        """Build an UPDATE ... SET ... WHERE statement."""
        qualified_table = self.qualify(table, schema)
        update_set = ",".join(
            f"{self.quote(column)}={self.literal(value)}" for column, value in assignments
        )
        return f"UPDATE {qualified_table} SET {update_set}{self.build_where(conditions)}"

    def build_delete(
        self,
        table: str,
        conditions: Sequence[Tuple[str, LiteralInput]],
        schema: Optional[str] = None,
    ) -> str:
        """Build a DELETE FROM ... WHERE statement."""
        qualified_table = self.qualify(table, schema)
        return f"DELETE FROM {qualified_table}{self.build_where(conditions)}"

    def build_select(
        self,
        table: str,
        columns: str,
        conditions: Sequence[Tuple[str, LiteralInput]],
        schema: Optional[str] = None,
    ) -> str:
        """
        Build a SELECT statement.

        ``columns`` is passed through as written so aliases such as
        ``feedback.content as cc`` reach the server and the alias extractor
        unchanged.
        """
        qualified_table = self.qualify(table, schema)
        return f"SELECT {columns} FROM {qualified_table}{self.build_where(conditions)}"
