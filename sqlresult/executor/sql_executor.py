"""
SQL executor - runs free-form statements through a DB-API connection.

Separates execution from:
- Rendering and releasing the outcome (StatementResult)
- User interaction (REPL, web app)
"""

import logging
import sqlite3

from ..driver.connection import connect, driver_error_type
from ..driver.rowset import CursorRowSet
from ..result.statement_result import StatementResult
from ..utils.exceptions import StatementExecutionError
from ..utils.validators import validate_sql


class SqlExecutor:
    """
    Executes one SQL statement at a time on a single connection.

    The driver decides whether a statement is a query: it is one when the
    cursor carries result metadata after execution.
    """

    def __init__(self, connection, logger: logging.Logger = None,
                 driver_errors=sqlite3.Error, autocommit: bool = True):
        """
        Initialize executor for a connection.

        Args:
            connection: Open DB-API connection, owned by this executor
            logger: Passed on to every StatementResult
            driver_errors: Exception class or tuple the driver raises
            autocommit: Commit after each non-query statement
        """
        self.connection = connection
        self.logger = logger or logging.getLogger(__name__)
        self.driver_errors = driver_errors
        self.autocommit = autocommit

    @classmethod
    def from_settings(cls, settings, logger: logging.Logger = None) -> "SqlExecutor":
        """Open a connection as described by settings and wrap it."""
        connection, module = connect(settings)
        return cls(connection, logger=logger,
                   driver_errors=driver_error_type(module))

    def execute(self, sql: str) -> StatementResult:
        """
        Execute a statement.

        Args:
            sql: A single SQL statement

        Returns:
            StatementResult owning the cursor; the caller must close it

        Raises:
            EmptyStatementError: If sql is blank
            StatementExecutionError: If the driver rejects the statement
        """
        sql = validate_sql(sql)
        self.logger.debug("Executing: %s", sql)

        cursor = self.connection.cursor()
        try:
            cursor.execute(sql)
            is_query = cursor.description is not None
            if is_query:
                # a write with RETURNING is committed once its cursor is closed
                on_close = self._commit_pending if self.autocommit else None
                return StatementResult(cursor, True, CursorRowSet(cursor), 0,
                                       logger=self.logger,
                                       driver_errors=self.driver_errors,
                                       on_close=on_close)

            # DB-API reports -1 when the count is unknown (DDL)
            rows_affected = max(cursor.rowcount, 0)
            if self.autocommit:
                self.connection.commit()
        except self.driver_errors as e:
            cursor.close()
            raise StatementExecutionError(sql, e)
        except ValueError as e:
            # text the driver cannot encode, e.g. lone surrogates
            cursor.close()
            raise StatementExecutionError(sql, e)
        except BaseException:
            cursor.close()
            raise

        return StatementResult(cursor, False, None, rows_affected,
                               logger=self.logger,
                               driver_errors=self.driver_errors)

    def _commit_pending(self):
        """Commit if the connection has an open transaction."""
        if getattr(self.connection, "in_transaction", True):
            self.connection.commit()
            self.logger.debug("Transaction committed.")

    def close(self):
        """Close the connection."""
        self.connection.close()
        self.logger.info("Connection closed.")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
        return False
