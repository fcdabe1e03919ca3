"""Database connectors and query operations."""

from .executor import ConnectionExecutor, SqlExecutor
from .mysql_access import MySQLAccess, TransactionAccess, get_access, shutdown_access
from .query import run, run_id, run_select

__all__ = [
    "ConnectionExecutor",
    "SqlExecutor",
    "MySQLAccess",
    "TransactionAccess",
    "get_access",
    "shutdown_access",
    "run",
    "run_id",
    "run_select",
]
