"""
Unit tests for ConnectionExecutor with a mocked SQLAlchemy connection.
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from sql_access.infrastructure.sql.exceptions import StatementExecutionError
from sql_access.io.connectors.executor import ConnectionExecutor


@pytest.fixture
def connection():
    return MagicMock()


class TestConnectionExecutor:
    """Tests for ConnectionExecutor."""

    def test_statement_sent_without_parameters(self, connection):
        connection.exec_driver_sql.return_value.lastrowid = 5

        ConnectionExecutor(connection).execute_statement('INSERT INTO t (a) VALUES ("50%:x")')

        connection.exec_driver_sql.assert_called_once_with(
            'INSERT INTO t (a) VALUES ("50%:x")',
            execution_options={"no_parameters": True},
        )

    def test_statement_returns_last_insert_id(self, connection):
        connection.exec_driver_sql.return_value.lastrowid = 57
        assert ConnectionExecutor(connection).execute_statement("INSERT ...") == 57

    @pytest.mark.parametrize("last_id", [None, 0])
    def test_statement_without_id_returns_zero(self, connection, last_id):
        connection.exec_driver_sql.return_value.lastrowid = last_id
        assert ConnectionExecutor(connection).execute_statement("DELETE FROM t WHERE id=1") == 0

    def test_query_rows_become_tuples(self, connection):
        connection.exec_driver_sql.return_value.__iter__.return_value = iter([[1, "a"], [2, "b"]])

        rows = ConnectionExecutor(connection).execute_query("SELECT id, cc FROM t")

        assert rows == [(1, "a"), (2, "b")]

    def test_scalar_query(self, connection):
        connection.exec_driver_sql.return_value.scalars.return_value.all.return_value = [3]

        rows = ConnectionExecutor(connection).execute_query("SELECT count(*) AS total FROM t", scalar=True)

        assert rows == [3]

    def test_driver_error_wrapped_with_sql(self, connection):
        driver_error = Exception("(1064, 'You have an error in your SQL syntax')")
        connection.exec_driver_sql.side_effect = OperationalError("SELEC 1", None, driver_error)

        with pytest.raises(StatementExecutionError) as exc_info:
            ConnectionExecutor(connection).execute_query("SELEC 1")

        error = exc_info.value
        assert error.sql == "SELEC 1"
        assert error.original_error is driver_error
        assert isinstance(error.__cause__, OperationalError)
        assert error.to_dict()["original_error_message"] == str(driver_error)
