"""SELECT clause parsing."""

from .aliases import extract_aliases, parse_field_list, resolve_alias, select_clause

__all__ = ["extract_aliases", "parse_field_list", "resolve_alias", "select_clause"]
