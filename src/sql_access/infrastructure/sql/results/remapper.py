"""
Positional row to named record remapping.

Rows come back from the driver as tuples. ``remap_rows`` keys each value by
the alias at the same position, and ``decode_records`` hands the resulting
dicts to pydantic so callers receive models, dataclasses, TypedDicts or any
other shape pydantic can validate.

Rows are never partially remapped: an arity problem anywhere fails the
whole call before any record is returned.
"""

from functools import lru_cache
from typing import Any, List, Mapping, Optional, Sequence

from pydantic import TypeAdapter, ValidationError

from ..exceptions import AliasParseError, ArityMismatchError, RecordDecodeError
from ..parsing.aliases import find_duplicate
from .models import NamedRecord, QueryResult, RawRow


def _is_positional(row: RawRow) -> bool:
    return isinstance(row, (tuple, list))


@lru_cache(maxsize=256)
def _cached_adapter(shape: Any) -> TypeAdapter:
    return TypeAdapter(shape)


def _adapter(shape: Any) -> TypeAdapter:
    try:
        hash(shape)
    except TypeError:
        # e.g. Annotated[...] carrying unhashable metadata
        return TypeAdapter(shape)
    return _cached_adapter(shape)


def _list_adapter(shape: Any) -> TypeAdapter:
    return _adapter(List[shape])  # type: ignore[valid-type]


def _check_unique(aliases: Sequence[str]) -> None:
    duplicate = find_duplicate(aliases)
    if duplicate is not None:
        raise AliasParseError(
            ",".join(aliases), f"Field name {duplicate!r} appears more than once"
        )


def check_arity(rows: Sequence[RawRow], aliases: Sequence[str]) -> None:
    """
    Verify the aliases are distinct and every positional row carries one
    value per alias.

    Raises:
        AliasParseError: If an alias is repeated
        ArityMismatchError: On the first row whose length differs
    """
    _check_unique(aliases)
    expected = len(aliases)
    for index, row in enumerate(rows):
        if _is_positional(row) and len(row) != expected:
            raise ArityMismatchError(expected=expected, actual=len(row), row_index=index)


def remap_row(row: RawRow, aliases: Sequence[str]) -> Any:
    """
    Remap one raw row.

    - positional tuple/list: ``{aliases[i]: row[i]}``
    - mapping: copied to a plain dict, keys untouched
    - scalar: returned unchanged

    Examples:
        >>> remap_row((33, "hello"), ["id", "cc"])
        {'id': 33, 'cc': 'hello'}
        >>> remap_row(5, ["total"])
        5
    """
    if _is_positional(row):
        _check_unique(aliases)
        if len(row) != len(aliases):
            raise ArityMismatchError(expected=len(aliases), actual=len(row), row_index=0)
        return dict(zip(aliases, row))
    if isinstance(row, Mapping):
        return dict(row)
    return row


def remap_rows(rows: Sequence[RawRow], aliases: Sequence[str]) -> List[Any]:
    """
    Remap every row, validating arity for all rows up front.

    Args:
        rows: Raw rows from the driver
        aliases: Field names in column order

    Returns:
        Named records (or pass-through scalars) in row order

    Raises:
        ArityMismatchError: If any positional row length differs from
            ``len(aliases)``
    """
    check_arity(rows, aliases)
    return [remap_row(row, aliases) for row in rows]


def decode_records(
    records: List[Any], shape: Optional[Any] = None, strict: bool = False
) -> List[Any]:
    """
    Decode remapped records into the caller's shape.

    Validation is lax by default, so values pydantic can convert (``"33"``
    for an ``int`` field) are accepted. ``strict=True`` turns any type mismatch into an error.

    Args:
        records: Output of ``remap_rows``
        shape: Any type pydantic can validate (BaseModel, dataclass,
            TypedDict, ``int``...). None returns the records unchanged.
        strict: Reject values that only fit ``shape`` after coercion

    Raises:
        RecordDecodeError: If the records do not fit ``shape``
    """
    if shape is None:
        return records
    try:
        return _list_adapter(shape).validate_python(records, strict=strict)
    except ValidationError as e:
        raise RecordDecodeError(shape, e) from e


def decode_first(row: RawRow, shape: Optional[Any] = None, strict: bool = False) -> Any:
    """
    Decode the raw first row into its own shape, e.g. ``Tuple[int, str]``.

    Raises:
        RecordDecodeError: If the row does not fit ``shape``
    """
    if shape is None:
        return row
    try:
        return _adapter(shape).validate_python(row, strict=strict)
    except ValidationError as e:
        raise RecordDecodeError(shape, e) from e


def encode_records(records: List[Any], shape: Optional[Any] = None) -> List[NamedRecord]:
    """
    Encode decoded records back to generic key/value form.

    Inverse of ``decode_records``: decoding the output with the same shape
    yields records equal to the input.
    """
    if shape is None:
        return _adapter(List[Any]).dump_python(records, mode="json")
    return _list_adapter(shape).dump_python(records, mode="json")


def remap(
    rows: Sequence[RawRow],
    aliases: Sequence[str],
    shape: Optional[Any] = None,
    first_shape: Optional[Any] = None,
    strict: bool = False,
) -> QueryResult:
    """
    Remap and decode a full result set.

    Args:
        rows: Raw rows from the driver
        aliases: Field names in column order
        shape: Shape every record is decoded into (None keeps dicts)
        first_shape: Independent shape for the first raw row (None keeps
            the raw row)
        strict: Decode without type coercion

    Returns:
        QueryResult(records, first); ``first`` is None for an empty result

    Examples:
        >>> remap([(1, "a"), (2, "b")], ["id", "cc"])
        QueryResult(records=[{'id': 1, 'cc': 'a'}, {'id': 2, 'cc': 'b'}], first=(1, 'a'))
    """
    _check_unique(aliases)
    if not rows:
        return QueryResult.empty()

    records = decode_records(remap_rows(rows, aliases), shape, strict=strict)
    first = decode_first(rows[0], first_shape, strict=strict)
    return QueryResult(records, first)
