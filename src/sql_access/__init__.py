"""
sql-access - SQL statement building and result remapping for MySQL.

Builds INSERT/UPDATE/DELETE/SELECT text from declarative field maps and
turns positional result rows into named records keyed by column alias.
"""

__version__ = "0.1.0"
