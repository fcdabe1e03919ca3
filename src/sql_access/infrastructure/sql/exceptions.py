"""SQL access exceptions.

Every failure carries the context needed to diagnose it (the offending SQL
text, the expected/actual arity, the requested record shape) and exposes it
through ``to_dict()`` for structured logging.
"""

from typing import Any, Dict, Optional


class SqlAccessError(Exception):
    """Base class for all sql_access errors.

    ``sql`` holds the statement that triggered the error once it is known.
    Query operations attach it to remapping errors before re-raising.
    """

    sql: Optional[str] = None

    def __str__(self) -> str:
        message = super().__str__()
        if self.sql is not None:
            return f"{message} (sql: {self.sql!r})"
        return message

    def to_dict(self) -> Dict[str, Any]:
        """Convert to structured dict for logging."""
        data: Dict[str, Any] = {
            "error_type": type(self).__name__,
            "message": self.args[0] if self.args else "",
        }
        if self.sql is not None:
            data["sql"] = self.sql
        return data


class StatementBuildError(SqlAccessError):
    """Raised when a statement cannot be composed from the given fields."""


class AliasParseError(SqlAccessError):
    """Raised when column aliases cannot be extracted from SQL text.

    Callers that hit this should pass an explicit field list instead.
    """

    def __init__(self, sql: str, message: str):
        self.sql = sql
        super().__init__(message)


class ArityMismatchError(SqlAccessError):
    """Raised when a positional row does not have one value per alias."""

    def __init__(self, expected: int, actual: int, row_index: int):
        self.expected = expected
        self.actual = actual
        self.row_index = row_index
        super().__init__(
            f"Row {row_index} has {actual} values but {expected} field names were given"
        )

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update(
            expected=self.expected,
            actual=self.actual,
            row_index=self.row_index,
        )
        return data


class RecordDecodeError(SqlAccessError):
    """Raised when remapped records do not fit the requested shape."""

    def __init__(self, shape: Any, original_error: Exception):
        self.shape = shape
        self.original_error = original_error
        super().__init__(
            f"Cannot decode records into {_shape_name(shape)}: {original_error}"
        )

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update(
            shape=_shape_name(self.shape),
            original_error_type=type(self.original_error).__name__,
        )
        return data


class StatementExecutionError(SqlAccessError):
    """Raised when the database rejects or fails to run a statement."""

    def __init__(self, sql: str, original_error: Optional[Exception] = None):
        self.sql = sql
        self.original_error = original_error
        detail = f": {original_error}" if original_error is not None else ""
        super().__init__(f"Statement failed{detail}")

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        if self.original_error is not None:
            data["original_error_type"] = type(self.original_error).__name__
            data["original_error_message"] = str(self.original_error)
        return data


def _shape_name(shape: Any) -> str:
    return getattr(shape, "__name__", None) or repr(shape)
