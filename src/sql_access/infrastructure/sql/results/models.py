"""
Result types returned by query operations.
"""

from typing import Any, Dict, List, Mapping, NamedTuple, Optional, Sequence, Union

NamedRecord = Dict[str, Any]

# A row as handed over by the driver: a positional tuple, an already named
# mapping, or a bare scalar for single-column scalar queries.
RawRow = Union[Sequence[Any], Mapping[str, Any], Any]


class QueryResult(NamedTuple):
    """
    Decoded records plus the first raw row.

    Unpacks like a pair:

        >>> records, first = QueryResult([{"id": 1}], (1,))
        >>> first
        (1,)

    Attributes:
        records: Every row, remapped and decoded into the requested shape.
        first: The first row decoded into its own shape, or None when the
            query returned nothing.
    """

    records: List[Any]
    first: Optional[Any] = None

    @classmethod
    def empty(cls) -> "QueryResult":
        return cls([], None)
