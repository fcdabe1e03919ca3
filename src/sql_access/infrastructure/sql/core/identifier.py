"""
SQL identifier handling utilities.

Table and column names are emitted verbatim unless quoting is requested.
Quoting wraps names in backticks so reserved words and non-ASCII names
survive, and escapes embedded backticks.
"""

from typing import Optional

from ..exceptions import StatementBuildError


def quote_identifier(name: str) -> str:
    """
    Quote a MySQL identifier (table or column name).

    Examples:
        >>> quote_identifier("feedback")
        '`feedback`'
        >>> quote_identifier("odd`name")
        '`odd``name`'
    """
    escaped = name.replace("`", "``")
    return f"`{escaped}`"


def render_identifier(name: str, quote: bool = False) -> str:
    """
    Validate and render an identifier.

    Args:
        name: Identifier supplied by the caller
        quote: Wrap in backticks when True, otherwise emit verbatim

    Raises:
        StatementBuildError: If the name is empty or blank
    """
    if not isinstance(name, str) or not name.strip():
        raise StatementBuildError("Identifier must be a non-empty string")
    return quote_identifier(name) if quote else name


def qualify_table(
    table: str, schema: Optional[str] = None, quote: bool = False
) -> str:
    """
    Create a table reference with optional database (schema) prefix.

    Examples:
        >>> qualify_table("feedback", schema="dev_db")
        'dev_db.feedback'
        >>> qualify_table("feedback", schema="dev_db", quote=True)
        '`dev_db`.`feedback`'
    """
    rendered = render_identifier(table, quote)
    if schema:
        return f"{render_identifier(schema, quote)}.{rendered}"
    return rendered
