"""
Shared test doubles for statement outcomes.

FakeRowSet and FakeStatement record every release in a shared event list
and can be told to fail a given operation with a driver error.
"""

import logging
import sqlite3

import pytest

from sqlresult.result.statement_result import StatementResult


class FakeRowSet:
    """In-memory forward-only row set."""

    def __init__(self, columns, rows, events=None, fail_on=None):
        self.columns = list(columns)
        self.rows = [list(r) for r in rows]
        self.events = events if events is not None else []
        self.fail_on = fail_on or set()
        self.position = -1

    def _maybe_fail(self, operation):
        if operation in self.fail_on:
            raise sqlite3.OperationalError(f"{operation} failed")

    def column_count(self):
        self._maybe_fail('column_count')
        return len(self.columns)

    def column_label(self, index):
        self._maybe_fail('column_label')
        return self.columns[index]

    def next(self):
        self._maybe_fail('next')
        if self.position + 1 >= len(self.rows):
            self.position = len(self.rows)
            return False
        self.position += 1
        return True

    def get_string(self, index):
        self._maybe_fail('get_string')
        value = self.rows[self.position][index]
        return None if value is None else str(value)

    def close(self):
        self._maybe_fail('close')
        self.events.append('rowset.close')


class FakeStatement:
    """Statement handle that only knows how to close."""

    def __init__(self, events=None, fail_close=False):
        self.events = events if events is not None else []
        self.fail_close = fail_close

    def close(self):
        if self.fail_close:
            raise sqlite3.OperationalError("statement close failed")
        self.events.append('statement.close')


@pytest.fixture
def events():
    return []


@pytest.fixture
def test_logger():
    return logging.getLogger("tests.statement_result")


@pytest.fixture
def make_query_result(events, test_logger):
    """Factory: query outcome over the given columns and rows."""

    def factory(columns, rows, fail_on=None, fail_statement_close=False, on_close=None):
        row_set = FakeRowSet(columns, rows, events=events, fail_on=fail_on)
        statement = FakeStatement(events=events, fail_close=fail_statement_close)
        return StatementResult(statement, True, row_set, 0, logger=test_logger,
                               on_close=on_close)

    return factory


@pytest.fixture
def make_update_result(events, test_logger):
    """Factory: non-query outcome with the given affected-row count."""

    def factory(rows_affected, fail_statement_close=False, on_close=None):
        statement = FakeStatement(events=events, fail_close=fail_statement_close)
        return StatementResult(statement, False, None, rows_affected, logger=test_logger,
                               on_close=on_close)

    return factory


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Undo configure_logging() calls made by a test."""
    logger = logging.getLogger("sqlresult")
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers = handlers
    logger.setLevel(level)
