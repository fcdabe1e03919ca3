"""Statement builder operations."""

from .statements import (
    Dialect,
    FieldSpec,
    StatementBuilder,
    build_count,
    build_delete_by_field,
    build_delete_by_id,
    build_insert,
    build_insert_many,
    build_select_by_id,
    build_update,
    normalize_fields,
)

__all__ = [
    "Dialect",
    "FieldSpec",
    "StatementBuilder",
    "build_count",
    "build_delete_by_field",
    "build_delete_by_id",
    "build_insert",
    "build_insert_many",
    "build_select_by_id",
    "build_update",
    "normalize_fields",
]
