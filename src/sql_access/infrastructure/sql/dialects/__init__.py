"""SQL dialect implementations."""

from .mysql import MySQLDialect

__all__ = ["MySQLDialect"]
