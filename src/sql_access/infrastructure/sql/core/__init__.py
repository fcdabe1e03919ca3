"""Core SQL utilities package."""

from .identifier import qualify_table, quote_identifier, render_identifier
from .literals import LiteralInput, SqlLiteral, ValueKind, escape_string, format_value

__all__ = [
    "quote_identifier",
    "qualify_table",
    "render_identifier",
    "LiteralInput",
    "SqlLiteral",
    "ValueKind",
    "escape_string",
    "format_value",
]
