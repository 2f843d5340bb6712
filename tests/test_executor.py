"""
Unit tests for the SQL executor.
"""

import logging
import sqlite3

import pytest
from sqlresult.config import Settings
from sqlresult.driver.rowset import CursorRowSet
from sqlresult.executor.sql_executor import SqlExecutor
from sqlresult.utils.exceptions import (
    EmptyStatementError,
    ErrorKind,
    StatementExecutionError
)


class TestExecutor:
    """Test statement execution against sqlite3."""

    def setup_method(self):
        """Set up connection and executor for each test."""
        self.connection = sqlite3.connect(":memory:")
        self.executor = SqlExecutor(self.connection)
        self.run("CREATE TABLE users (id INTEGER PRIMARY KEY, name VARCHAR(50))")

    def teardown_method(self):
        self.connection.close()

    def run(self, sql):
        """Helper to execute, render and close."""
        with self.executor.execute(sql) as result:
            return result.render()

    def test_execute_create_table(self):
        """Test DDL reports zero affected rows."""
        result = self.executor.execute("CREATE TABLE posts (id INTEGER)")

        assert result.is_query is False
        assert result.rows_affected == 0
        assert result.render() == "0 row(s) affected."
        result.close()

    def test_execute_insert(self):
        """Test INSERT reports affected rows."""
        result = self.executor.execute(
            "INSERT INTO users (id, name) VALUES (1, 'Ann'), (2, 'Bo')"
        )

        assert result.is_query is False
        assert result.rows_affected == 2
        assert result.render() == "2 row(s) affected."
        result.close()

    def test_execute_select(self):
        """Test SELECT yields a row set."""
        self.run("INSERT INTO users (id, name) VALUES (1, 'Ann'), (2, 'Bo')")

        result = self.executor.execute("SELECT id, name FROM users ORDER BY id")
        assert result.is_query is True
        assert isinstance(result.row_set, CursorRowSet)
        assert result.render() == "[id][name]\n[1][Ann]\n[2][Bo]"
        assert result.close() == []

    def test_execute_select_empty(self):
        """Test empty SELECT still has a header."""
        assert self.run("SELECT id, name FROM users;") == "[id][name]"

    def test_execute_update_and_delete(self):
        """Test UPDATE and DELETE counts."""
        self.run("INSERT INTO users (id, name) VALUES (1, 'Ann'), (2, 'Bo'), (3, 'Cy')")

        assert self.run("UPDATE users SET name = 'X' WHERE id > 1") == "2 row(s) affected."
        assert self.run("DELETE FROM users WHERE id = 3") == "1 row(s) affected."
        assert self.run("DELETE FROM users WHERE id = 99") == "0 row(s) affected."

    def test_changes_are_committed(self, tmp_path):
        """Test non-query statements are committed."""
        path = str(tmp_path / "app.db")
        with SqlExecutor(sqlite3.connect(path)) as executor:
            executor.execute("CREATE TABLE t (v INTEGER)").close()
            executor.execute("INSERT INTO t VALUES (5)").close()

        other = sqlite3.connect(path)
        try:
            assert other.execute("SELECT v FROM t").fetchall() == [(5,)]
        finally:
            other.close()

    @pytest.mark.skipif(sqlite3.sqlite_version_info < (3, 35, 0),
                        reason="RETURNING needs SQLite 3.35")
    def test_returning_write_is_committed(self, tmp_path):
        """Test a write that returns rows is committed once its result is closed."""
        path = str(tmp_path / "app.db")
        with SqlExecutor(sqlite3.connect(path)) as executor:
            executor.execute("CREATE TABLE t (v INTEGER)").close()
            with executor.execute("INSERT INTO t VALUES (5) RETURNING v") as result:
                assert result.is_query is True
                assert result.render() == "[v]\n[5]"

        other = sqlite3.connect(path)
        try:
            assert other.execute("SELECT v FROM t").fetchall() == [(5,)]
        finally:
            other.close()

    def test_query_without_autocommit_leaves_transaction(self):
        """Test the commit on close only happens when autocommit is on."""
        self.run("INSERT INTO users (id, name) VALUES (1, 'Ann')")
        executor = SqlExecutor(self.connection, autocommit=False)
        executor.execute("UPDATE users SET name = 'Bo'").close()

        assert self.connection.in_transaction is True
        executor.execute("SELECT name FROM users").close()
        assert self.connection.in_transaction is True
        self.connection.rollback()

    def test_execute_unencodable_sql(self):
        """Test text the driver cannot encode is reported as a failed statement."""
        with pytest.raises(StatementExecutionError) as excinfo:
            self.executor.execute("SELECT '\ud800'")
        assert isinstance(excinfo.value.cause, ValueError)

    def test_execute_nul_in_sql(self):
        """Test a NUL character is reported as a failed statement."""
        with pytest.raises(StatementExecutionError):
            self.executor.execute("SELECT 'a\x00b'")

    def test_cursor_closed_on_unexpected_error(self):
        """Test the cursor is released when execute fails for any reason."""
        class ExplodingCursor:
            description = None
            closed = False

            def execute(self, sql):
                raise RuntimeError("driver bug")

            def close(self):
                self.closed = True

        cursor = ExplodingCursor()

        class Connection:
            def cursor(self):
                return cursor

        with pytest.raises(RuntimeError, match="driver bug"):
            SqlExecutor(Connection()).execute("SELECT 1")
        assert cursor.closed is True

    def test_execute_empty_statement(self):
        """Test blank SQL raises before touching the driver."""
        with pytest.raises(EmptyStatementError):
            self.executor.execute("   ")

    def test_execute_invalid_sql(self):
        """Test the driver's rejection is wrapped."""
        with pytest.raises(StatementExecutionError) as excinfo:
            self.executor.execute("SELEC * FROM users")

        error = excinfo.value
        assert error.kind is ErrorKind.EXECUTE
        assert error.sql == "SELEC * FROM users"
        assert isinstance(error.cause, sqlite3.Error)

    def test_execute_constraint_violation(self):
        """Test constraint errors are wrapped."""
        self.run("INSERT INTO users (id, name) VALUES (1, 'Ann')")

        with pytest.raises(StatementExecutionError):
            self.executor.execute("INSERT INTO users (id, name) VALUES (1, 'Dup')")

    def test_execute_missing_table(self):
        """Test unknown tables are wrapped."""
        with pytest.raises(StatementExecutionError, match="no such table"):
            self.executor.execute("SELECT * FROM nope")

    def test_logger_passed_to_results(self, caplog):
        """Test results log through the executor's logger."""
        logger = logging.getLogger("tests.executor")
        executor = SqlExecutor(self.connection, logger=logger)

        with caplog.at_level(logging.INFO, logger="tests.executor"):
            executor.execute("SELECT 1 AS one").close()

        assert [r.name for r in caplog.records] == ["tests.executor", "tests.executor"]
        assert caplog.messages == ["ResultSet closed.", "Statement closed."]

    def test_null_column(self):
        """Test NULL values render as null."""
        self.run("INSERT INTO users (id, name) VALUES (1, NULL)")

        assert self.run("SELECT id, name FROM users") == "[id][name]\n[1][null]"


class TestExecutorLifecycle:
    """Test executor construction and connection handling."""

    def test_from_settings(self):
        """Test executor built from settings uses the driver's error type."""
        executor = SqlExecutor.from_settings(Settings())
        try:
            assert executor.driver_errors is sqlite3.Error
            assert executor.execute("SELECT 2 AS two").render() == "[two]\n[2]"
        finally:
            executor.close()

    def test_context_manager_closes_connection(self):
        """Test the connection is closed on exit."""
        connection = sqlite3.connect(":memory:")
        with SqlExecutor(connection):
            pass

        with pytest.raises(sqlite3.ProgrammingError):
            connection.execute("SELECT 1")
