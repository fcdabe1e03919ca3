"""
SQL literal formatting.

Values are tagged with an explicit kind once, at the call boundary, and the
kind alone decides how the value is rendered into SQL text.

Note: string escaping only covers backslashes and double quotes. It is not
a substitute for parameter binding; untrusted input must be sanitized by
the caller.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from ..exceptions import StatementBuildError


class ValueKind(str, Enum):
    """Closed set of literal kinds understood by the formatter."""

    STRING = "string"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    NULL = "null"


@dataclass(frozen=True)
class SqlLiteral:
    """
    A value tagged with the kind used to render it.

    Example:
        >>> format_value(SqlLiteral.string("ab"))
        '"ab"'
        >>> format_value(SqlLiteral.integer(7))
        '7'
    """

    kind: ValueKind
    value: Any = None

    @classmethod
    def string(cls, value: str) -> "SqlLiteral":
        return cls(ValueKind.STRING, str(value))

    @classmethod
    def integer(cls, value: int) -> "SqlLiteral":
        return cls(ValueKind.INT, int(value))

    @classmethod
    def floating(cls, value: float) -> "SqlLiteral":
        return cls(ValueKind.FLOAT, float(value))

    @classmethod
    def boolean(cls, value: bool) -> "SqlLiteral":
        return cls(ValueKind.BOOL, bool(value))

    @classmethod
    def null(cls) -> "SqlLiteral":
        return cls(ValueKind.NULL)

    @classmethod
    def of(cls, value: "LiteralInput") -> "SqlLiteral":
        """
        Tag a plain Python value.

        ``bool`` is checked before ``int`` because it is an ``int`` subclass.

        Raises:
            StatementBuildError: If the value is none of str, int, float,
                bool or None
        """
        if isinstance(value, SqlLiteral):
            return value
        if value is None:
            return cls.null()
        if isinstance(value, bool):
            return cls.boolean(value)
        if isinstance(value, int):
            return cls.integer(value)
        if isinstance(value, float):
            return cls.floating(value)
        if isinstance(value, str):
            return cls.string(value)
        raise StatementBuildError(
            f"Unsupported literal type {type(value).__name__!r}; "
            "expected str, int, float, bool or None"
        )


LiteralInput = Union[SqlLiteral, str, int, float, bool, None]


def escape_string(text: str) -> str:
    """
    Escape a string for use inside a double-quoted MySQL literal.

    Backslashes are escaped first so the escapes added for quotes are not
    doubled.

    Examples:
        >>> escape_string('say "hi"')
        'say \\\\"hi\\\\"'
    """
    return text.replace("\\", "\\\\").replace('"', '\\"')


def format_value(value: LiteralInput) -> str:
    """
    Render a value as SQL literal text.

    Args:
        value: A SqlLiteral, or a plain value tagged through SqlLiteral.of

    Returns:
        Literal text: strings double-quoted and escaped, numbers unquoted,
        booleans as TRUE/FALSE and None as NULL

    Raises:
        StatementBuildError: For unsupported types or non-finite floats

    Examples:
        >>> format_value("O'Brien")
        '"O\\'Brien"'
        >>> format_value(12)
        '12'
        >>> format_value(None)
        'NULL'
    """
    literal = SqlLiteral.of(value)

    if literal.kind is ValueKind.STRING:
        return f'"{escape_string(literal.value)}"'
    if literal.kind is ValueKind.INT:
        return str(literal.value)
    if literal.kind is ValueKind.FLOAT:
        if not math.isfinite(literal.value):
            raise StatementBuildError(
                f"Float literal {literal.value!r} has no SQL representation"
            )
        return repr(literal.value)
    if literal.kind is ValueKind.BOOL:
        return "TRUE" if literal.value else "FALSE"
    return "NULL"
