"""
Outcome of one executed SQL statement.

A StatementResult owns the statement handle and, for queries, the row set
the driver produced. It renders the outcome as text and releases both
handles when closed.

Rendering reads the row set forward-only, exactly once. Rendering a query a
second time without re-executing shows the header line only, because the
rows have already been consumed.

Driver failures never escape render() or close(). They are logged at
WARNING and reported back as tagged DriverOperationError values:
render() returns None and sets last_error; close() returns the list of
release failures.
"""

import logging
import sqlite3
from typing import Callable, List, Optional, Tuple

from ..formatter import format_bracketed_lines, format_rows_affected, format_table
from ..utils.exceptions import DriverOperationError, ErrorKind
from ..utils.row_utils import display_text


class StatementResult:
    """
    Statement outcome produced by SqlExecutor.

    Exactly one of (row_set, rows_affected) is meaningful, selected by
    is_query. The constructor trusts the caller on that.
    """

    def __init__(self, statement, is_query: bool, row_set, rows_affected: int,
                 logger: logging.Logger = None, driver_errors=sqlite3.Error,
                 on_close: Callable[[], None] = None):
        """
        Args:
            statement: Executed statement handle (anything with close())
            is_query: True if the statement produced a row set
            row_set: Forward-only row set, present only for queries
            rows_affected: Affected-row count, meaningful only for non-queries
            logger: Where failures and releases are reported
            driver_errors: Exception class or tuple the driver raises
            on_close: Called after the statement is released, e.g. to commit
        """
        self._statement = statement
        self._is_query = is_query
        self._row_set = row_set
        self._rows_affected = rows_affected
        self._on_close = on_close
        self._logger = logger or logging.getLogger(__name__)

        if not isinstance(driver_errors, tuple):
            driver_errors = (driver_errors,)
        self._driver_errors = driver_errors + (DriverOperationError,)

        self.last_error: Optional[DriverOperationError] = None

    @property
    def is_query(self) -> bool:
        return self._is_query

    @property
    def row_set(self):
        """Row set; only valid when is_query is True."""
        return self._row_set

    @property
    def rows_affected(self) -> int:
        """Affected-row count; only valid when is_query is False."""
        return self._rows_affected

    def _tag(self, kind: ErrorKind, error: Exception) -> DriverOperationError:
        if isinstance(error, DriverOperationError) and error.kind is kind:
            return error
        return DriverOperationError(kind, str(error), cause=error)

    def _read_rows(self) -> Optional[Tuple[List[str], List[List[str]]]]:
        """
        Consume the row set.

        Returns:
            (labels, rows) with every value as display text, or None if the
            driver failed
        """
        self.last_error = None
        try:
            column_count = self._row_set.column_count()
            labels = [self._row_set.column_label(i) for i in range(column_count)]

            rows = []
            while self._row_set.next():
                rows.append([display_text(self._row_set.get_string(i))
                             for i in range(column_count)])
            return labels, rows

        except self._driver_errors as e:
            self.last_error = self._tag(ErrorKind.READ, e)
            self._logger.warning(str(e))
            return None

    def render(self) -> Optional[str]:
        """
        Text form of the outcome.

        Returns:
            For a query, a header line of bracketed column labels followed by
            one line of bracketed values per row. Otherwise
            "<n> row(s) affected.". None if the driver failed while reading.
        """
        if not self._is_query:
            self.last_error = None
            return format_rows_affected(self._rows_affected)

        data = self._read_rows()
        if data is None:
            return None
        labels, rows = data
        return format_bracketed_lines(labels, rows)

    def render_table(self) -> Optional[str]:
        """Like render(), but a query is laid out as a grid."""
        if not self._is_query:
            self.last_error = None
            return format_rows_affected(self._rows_affected)

        data = self._read_rows()
        if data is None:
            return None
        labels, rows = data
        return format_table(labels, rows)

    def __str__(self) -> str:
        text = self.render()
        return "" if text is None else text

    def _release_row_set(self) -> Optional[DriverOperationError]:
        if not self._is_query:
            return None
        try:
            self._row_set.close()
            self._logger.info("ResultSet closed.")
        except self._driver_errors as e:
            self._logger.warning(str(e))
            return self._tag(ErrorKind.RELEASE, e)
        return None

    def close(self) -> List[DriverOperationError]:
        """
        Release the row set (queries only), then the statement, then run
        the on_close hook.

        A failure in the first step does not stop the second. Not guarded
        against being called twice.

        Returns:
            Release failures, empty if everything closed
        """
        failures = []

        failure = self._release_row_set()
        if failure is not None:
            failures.append(failure)

        try:
            self._statement.close()
            self._logger.info("Statement closed.")
        except self._driver_errors as e:
            self._logger.warning(str(e))
            failures.append(self._tag(ErrorKind.RELEASE, e))

        if self._on_close is not None:
            try:
                self._on_close()
            except self._driver_errors as e:
                self._logger.warning(str(e))
                failures.append(self._tag(ErrorKind.RELEASE, e))

        return failures

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
        return False

    def __repr__(self):
        if self._is_query:
            return "StatementResult(query)"
        return f"StatementResult(rows_affected={self._rows_affected})"
