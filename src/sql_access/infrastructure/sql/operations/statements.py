"""
Single-table statement builders.

Turns declarative field maps into INSERT, UPDATE, DELETE and SELECT text.
All builders are pure string composition; nothing here touches a
connection.
"""

from typing import (
    Iterable,
    List,
    Mapping,
    Optional,
    Protocol,
    Sequence,
    Tuple,
    Union,
)

from sql_access.config.settings import Settings, get_settings

from ..core.literals import LiteralInput, SqlLiteral
from ..dialects.mysql import MySQLDialect
from ..exceptions import StatementBuildError

FieldSpec = Union[Mapping[str, LiteralInput], Sequence[Tuple[str, LiteralInput]]]


class Dialect(Protocol):
    """Protocol for SQL dialects."""

    name: str

    def quote(self, identifier: str) -> str: ...
    def build_insert(
        self, table: str, columns: List[str], rows: List[List[LiteralInput]], schema: Optional[str] = None
    ) -> str: ...
    def build_update(
        self, table: str, assignments: Sequence[Tuple[str, LiteralInput]], conditions: Sequence[Tuple[str, LiteralInput]], schema: Optional[str] = None
    ) -> str: ...
    def build_delete(
        self, table: str, conditions: Sequence[Tuple[str, LiteralInput]], schema: Optional[str] = None
    ) -> str: ...
    def build_select(
        self, table: str, columns: str, conditions: Sequence[Tuple[str, LiteralInput]], schema: Optional[str] = None
    ) -> str: ...


def normalize_fields(fields: FieldSpec) -> List[Tuple[str, SqlLiteral]]:
    """
    Validate a field spec and tag every value.

    Args:
        fields: Ordered mapping or sequence of (name, value) pairs

    Returns:
        List of (name, SqlLiteral) in the original order

    Raises:
        StatementBuildError: If the field map is empty, a name is blank, a name
            repeats, or a value has an unsupported type
    """
    pairs: Iterable[Tuple[str, LiteralInput]]
    if isinstance(fields, Mapping):
        pairs = fields.items()
    else:
        pairs = fields

    normalized: List[Tuple[str, SqlLiteral]] = []
    seen = set()
    for name, value in pairs:
        if not isinstance(name, str) or not name.strip():
            raise StatementBuildError("Field names must be non-empty strings")
        if name in seen:
            raise StatementBuildError(f"Duplicate field name {name!r}")
        seen.add(name)
        normalized.append((name, SqlLiteral.of(value)))

    if not normalized:
        raise StatementBuildError("Field map must contain at least one field")
    return normalized


class StatementBuilder:
    """
    High-level builder for single-table statements.

    Example:
        >>> builder = StatementBuilder(MySQLDialect())
        >>> builder.insert("feedback", {"content": "ok", "uid": 9})
        'INSERT INTO feedback (content,uid) VALUES ("ok",9)'
        >>> builder.delete_by_id("feedback", 2)
        'DELETE FROM feedback WHERE id=2'
    """

    def __init__(self, dialect: Optional[Dialect] = None, schema: Optional[str] = None):
        """
        Initialize the StatementBuilder.

        Args:
            dialect: SQL dialect to use for statement generation
            schema: Optional database name prefixed to every table
        """
        self.dialect = dialect or MySQLDialect()
        self.schema = schema

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "StatementBuilder":
        """Build a MySQL builder honouring ``quote_identifiers`` from settings."""
        settings = settings or get_settings()
        return cls(MySQLDialect(quote_identifiers=settings.quote_identifiers))

    def insert(self, table: str, fields: FieldSpec) -> str:
        """
        Build an INSERT for a single row.

        Returns:
            ``INSERT INTO <table> (<names>) VALUES (<values>)`` in field order
        """
        pairs = normalize_fields(fields)
        columns = [name for name, _ in pairs]
        values = [value for _, value in pairs]
        return self.dialect.build_insert(table, columns, [values], self.schema)

    def insert_many(self, table: str, rows: Sequence[FieldSpec]) -> str:
        """
        Build one INSERT carrying several rows.

        Every row must name the same fields in the same order as the first.

        Raises:
            StatementBuildError: If ``rows`` is empty or rows disagree on fields
        """
        if not rows:
            raise StatementBuildError("insert_many requires at least one row")

        columns: List[str] = []
        values: List[List[LiteralInput]] = []
        for index, row in enumerate(rows):
            pairs = normalize_fields(row)
            names = [name for name, _ in pairs]
            if index == 0:
                columns = names
            elif names != columns:
                raise StatementBuildError(
                    f"Row {index} fields {names} do not match first row fields {columns}"
                )
            values.append([value for _, value in pairs])

        return self.dialect.build_insert(table, columns, values, self.schema)

    def update(self, table: str, id: LiteralInput, fields: FieldSpec) -> str:
        """Build ``UPDATE <table> SET <name>=<value>,... WHERE id=<id>``."""
        pairs = normalize_fields(fields)
        return self.dialect.build_update(
            table, pairs, [("id", SqlLiteral.of(id))], self.schema
        )

    def delete_by_id(self, table: str, id: LiteralInput) -> str:
        """Build ``DELETE FROM <table> WHERE id=<id>``."""
        return self.dialect.build_delete(
            table, [("id", SqlLiteral.of(id))], self.schema
        )

    def delete_by_field(self, table: str, field: str, value: LiteralInput) -> str:
        """Build ``DELETE FROM <table> WHERE <field>=<value>``."""
        pairs = normalize_fields([(field, value)])
        return self.dialect.build_delete(table, pairs, self.schema)

    def select_by_id(self, table: str, id: LiteralInput, columns: str = "*") -> str:
        """
        Build ``SELECT <columns> FROM <table> WHERE id=<id>``.

        Example:
            >>> StatementBuilder().select_by_id("feedback", 33, "id as id, feedback.content as cc")
            'SELECT id as id, feedback.content as cc FROM feedback WHERE id=33'
        """
        if not columns or not columns.strip():
            raise StatementBuildError("Column list must not be empty")
        return self.dialect.build_select(
            table, columns.strip(), [("id", SqlLiteral.of(id))], self.schema
        )

    def count(self, table: str, where: Optional[FieldSpec] = None) -> str:
        """
        Build a row count query aliased to ``total``.

        Args:
            table: Table name
            where: Optional equality conditions, joined with AND
        """
        conditions = normalize_fields(where) if where else []
        return self.dialect.build_select(
            table, "count(*) AS total", conditions, self.schema
        )


_default_builder = StatementBuilder()


def build_insert(table: str, fields: FieldSpec) -> str:
    """Build a single-row INSERT with the default MySQL dialect."""
    return _default_builder.insert(table, fields)


def build_insert_many(table: str, rows: Sequence[FieldSpec]) -> str:
    """Build a multi-row INSERT with the default MySQL dialect."""
    return _default_builder.insert_many(table, rows)


def build_update(table: str, id: LiteralInput, fields: FieldSpec) -> str:
    """Build an UPDATE by id with the default MySQL dialect."""
    return _default_builder.update(table, id, fields)


def build_delete_by_id(table: str, id: LiteralInput) -> str:
    """Build a DELETE by id with the default MySQL dialect."""
    return _default_builder.delete_by_id(table, id)


def build_delete_by_field(table: str, field: str, value: LiteralInput) -> str:
    """Build a DELETE by field value with the default MySQL dialect."""
    return _default_builder.delete_by_field(table, field, value)


def build_select_by_id(table: str, id: LiteralInput, columns: str = "*") -> str:
    """Build a SELECT by id with the default MySQL dialect."""
    return _default_builder.select_by_id(table, id, columns)


def build_count(table: str, where: Optional[FieldSpec] = None) -> str:
    """Build a count query with the default MySQL dialect."""
    return _default_builder.count(table, where)
