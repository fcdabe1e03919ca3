"""Result remapping."""

from .models import NamedRecord, QueryResult, RawRow
from .remapper import (
    check_arity,
    decode_first,
    decode_records,
    encode_records,
    remap,
    remap_row,
    remap_rows,
)

__all__ = [
    "NamedRecord",
    "QueryResult",
    "RawRow",
    "check_arity",
    "decode_first",
    "decode_records",
    "encode_records",
    "remap",
    "remap_row",
    "remap_rows",
]
