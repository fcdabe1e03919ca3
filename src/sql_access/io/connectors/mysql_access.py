"""
MySQL access facade.

Owns one SQLAlchemy engine (and so one connection pool) for its whole
lifetime and exposes the query operations on pooled connections or inside
a transaction.

Example:
    >>> access = MySQLAccess("mysql+pymysql://root:pw@localhost:3306/dev_db", 10, 100)
    >>> new_id = access.run_id(build_insert("feedback", {"content": "hi", "uid": 9}))
    >>> records, first = access.run(build_select_by_id("feedback", new_id, "id, content"))
    >>> with access.transaction() as tx:
    ...     tx.run_id(build_delete_by_id("feedback", new_id))
    >>> access.close()
"""

from contextlib import contextmanager
from functools import lru_cache
from typing import Any, Generator, Optional, Sequence, Union

from sqlalchemy import Connection, Engine, create_engine

from sql_access.config import get_settings
from sql_access.infrastructure.sql.results.models import QueryResult
from sql_access.utils.logging import get_logger, mask_url_password

from . import query
from .executor import ConnectionExecutor

logger = get_logger(__name__)


class TransactionAccess:
    """
    Query operations bound to one open transaction.

    Obtained from ``MySQLAccess.transaction()``; commit and rollback are
    handled by that context manager.
    """

    def __init__(self, connection: Connection) -> None:
        self.connection = connection
        self.executor = ConnectionExecutor(connection)

    def run_id(self, sql: str) -> int:
        """Run a statement inside the transaction; returns the last insert id or 0."""
        return query.run_id(self.executor, sql)

    def run(
        self,
        sql: str,
        shape: Optional[Any] = None,
        first_shape: Optional[Any] = None,
        scalar: bool = False,
        strict: bool = False,
        case_sensitive: bool = True,
    ) -> QueryResult:
        """Run a SELECT inside the transaction, keyed by extracted aliases."""
        return query.run(
            self.executor,
            sql,
            shape=shape,
            first_shape=first_shape,
            scalar=scalar,
            strict=strict,
            case_sensitive=case_sensitive,
        )

    def run_select(
        self,
        sql: str,
        fields: Union[str, Sequence[str]],
        shape: Optional[Any] = None,
        first_shape: Optional[Any] = None,
        scalar: bool = False,
        strict: bool = False,
    ) -> QueryResult:
        """Run a SELECT inside the transaction with explicit field names."""
        return query.run_select(
            self.executor,
            sql,
            fields,
            shape=shape,
            first_shape=first_shape,
            scalar=scalar,
            strict=strict,
        )


class MySQLAccess:
    """
    Pooled MySQL access with statement and query helpers.

    The engine is created once in ``__init__`` and disposed by ``close()``.
    Share one instance per process (see ``get_access``) rather than creating
    one per call.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        pool_min: Optional[int] = None,
        pool_max: Optional[int] = None,
        engine: Optional[Engine] = None,
    ):
        """
        Initialize the access facade.

        Args:
            url: SQLAlchemy URL; defaults to the configured database URL
            pool_min: Connections kept in the pool
            pool_max: Maximum simultaneous connections
            engine: Pre-built engine to use instead of creating one
        """
        if engine is not None:
            self._engine: Optional[Engine] = engine
            logger.info("sql_access.pool.attached", url=str(engine.url))
            return

        settings = get_settings()
        url = url or settings.get_database_connection_string()
        pool_min = settings.pool_min if pool_min is None else pool_min
        pool_max = settings.pool_max if pool_max is None else pool_max
        if pool_min < 1:
            raise ValueError(f"pool_min ({pool_min}) must be >= 1")
        if pool_max < pool_min:
            raise ValueError(f"pool_max ({pool_max}) must be >= pool_min ({pool_min})")

        self._engine = create_engine(
            url,
            pool_size=pool_min,
            max_overflow=pool_max - pool_min,
            pool_recycle=settings.pool_recycle,
            pool_pre_ping=True,
            echo=settings.echo_sql,
            connect_args={"connect_timeout": settings.connect_timeout},
        )
        logger.info(
            "sql_access.pool.created",
            url=mask_url_password(url),
            pool_min=pool_min,
            pool_max=pool_max,
        )

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise RuntimeError("MySQLAccess is closed")
        return self._engine

    @property
    def closed(self) -> bool:
        return self._engine is None

    def close(self) -> None:
        """Dispose the connection pool."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            logger.info("sql_access.pool.closed")

    def __enter__(self) -> "MySQLAccess":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    @contextmanager
    def transaction(self) -> Generator[TransactionAccess, None, None]:
        """
        Open a transaction on one pooled connection.

        Commits when the block exits normally and rolls back when it raises.
        """
        with self.engine.begin() as connection:
            logger.debug("sql_access.transaction.begin")
            yield TransactionAccess(connection)
        logger.debug("sql_access.transaction.committed")

    def run_id(self, sql: str) -> int:
        """
        Run INSERT/UPDATE/DELETE on a pooled connection and commit.

        Returns:
            The last inserted id, or 0 if the statement generated none
        """
        with self.engine.connect() as connection:
            last_id = query.run_id(ConnectionExecutor(connection), sql)
            connection.commit()
        return last_id

    def run(
        self,
        sql: str,
        shape: Optional[Any] = None,
        first_shape: Optional[Any] = None,
        scalar: bool = False,
        strict: bool = False,
        case_sensitive: bool = True,
    ) -> QueryResult:
        """
        Run a SELECT and key rows by the aliases in its column list.

        Example:
            >>> class Feedback(BaseModel):
            ...     id: int
            ...     cc: str
            >>> records, first = access.run(
            ...     "SELECT id as id, feedback.content as cc FROM feedback WHERE id=33",
            ...     shape=Feedback,
            ...     first_shape=Tuple[int, str],
            ... )
        """
        with self.engine.connect() as connection:
            return query.run(
                ConnectionExecutor(connection),
                sql,
                shape=shape,
                first_shape=first_shape,
                scalar=scalar,
                strict=strict,
                case_sensitive=case_sensitive,
            )

    def run_select(
        self,
        sql: str,
        fields: Union[str, Sequence[str]],
        shape: Optional[Any] = None,
        first_shape: Optional[Any] = None,
        scalar: bool = False,
        strict: bool = False,
    ) -> QueryResult:
        """
        Run a SELECT with explicit field names.

        Needed when the SQL uses ``SELECT *``, several SELECTs or computed
        columns the alias extractor cannot name.
        """
        with self.engine.connect() as connection:
            return query.run_select(
                ConnectionExecutor(connection),
                sql,
                fields,
                shape=shape,
                first_shape=first_shape,
                scalar=scalar,
                strict=strict,
            )


@lru_cache()
def get_access() -> MySQLAccess:
    """Get the process-wide MySQLAccess built from settings."""
    return MySQLAccess()


def shutdown_access() -> None:
    """Close the process-wide MySQLAccess, if one was created."""
    if get_access.cache_info().currsize:
        get_access().close()
    get_access.cache_clear()
