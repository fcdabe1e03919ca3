"""
Unit tests for the MySQL dialect.
"""

import pytest

from sql_access.infrastructure.sql.core.literals import SqlLiteral
from sql_access.infrastructure.sql.dialects.mysql import MySQLDialect


class TestMySQLDialect:
    """Tests for MySQL dialect."""

    @pytest.fixture
    def dialect(self):
        return MySQLDialect()

    @pytest.fixture
    def quoting_dialect(self):
        return MySQLDialect(quote_identifiers=True)

    def test_dialect_name(self, dialect):
        """Dialect should have correct name."""
        assert dialect.name == "mysql"

    def test_quote_is_verbatim_by_default(self, dialect):
        assert dialect.quote("content") == "content"

    def test_quote_uses_backticks_when_enabled(self, quoting_dialect):
        assert quoting_dialect.quote("content") == "`content`"

    def test_qualify_table(self, dialect):
        assert dialect.qualify("feedback", schema="dev_db") == "dev_db.feedback"

    def test_build_where_empty(self, dialect):
        assert dialect.build_where([]) == ""

    def test_build_where_joins_with_and(self, dialect):
        clause = dialect.build_where([("uid", 9), ("content", "x")])
        assert clause == ' WHERE uid=9 AND content="x"'

    def test_build_insert_single_row(self, dialect):
        sql = dialect.build_insert("feedback", ["content", "uid"], [["hi", 9]])
        assert sql == 'INSERT INTO feedback (content,uid) VALUES ("hi",9)'

    def test_build_insert_multiple_rows(self, dialect):
        sql = dialect.build_insert("feedback", ["uid"], [[1], [2]])
        assert sql == "INSERT INTO feedback (uid) VALUES (1),(2)"

    def test_build_insert_quoted(self, quoting_dialect):
        sql = quoting_dialect.build_insert(
            "feedback", ["content"], [[SqlLiteral.string("x")]], schema="dev_db"
        )
        assert sql == 'INSERT INTO `dev_db`.`feedback` (`content`) VALUES ("x")'

    def test_build_update(self, dialect):
        sql = dialect.build_update("feedback", [("uid", 3), ("score", 1.5)], [("id", 56)])
        assert sql == "UPDATE feedback SET uid=3,score=1.5 WHERE id=56"

    def test_build_delete(self, dialect):
        assert dialect.build_delete("feedback", [("id", 2)]) == "DELETE FROM feedback WHERE id=2"

    def test_build_select_keeps_columns_verbatim(self, dialect):
        sql = dialect.build_select("feedback", "id as id, feedback.content as cc", [("id", 33)])
        assert sql == "SELECT id as id, feedback.content as cc FROM feedback WHERE id=33"
