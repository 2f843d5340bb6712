"""
Forward-only row set over a DB-API cursor.

A DB-API cursor mixes statement state and result rows. CursorRowSet exposes
only the row-reading side, one row at a time, with column access by
0-based index. Once every row has been read the row set is exhausted and
stays that way.
"""

from typing import Any, List, Optional

from ..utils.exceptions import DriverOperationError, ErrorKind
from ..utils.row_utils import value_to_text


class CursorRowSet:
    """
    Row-reading view of an executed cursor.

    Operations:
        column_count() -> int
        column_label(index) -> str
        next() -> bool          advance to the next row
        get_string(index) -> Optional[str]   current row, as text
        close()
    """

    def __init__(self, cursor):
        self._cursor = cursor
        self._current: Optional[tuple] = None
        self._exhausted = False
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def _check_open(self):
        if self._closed:
            raise DriverOperationError(ErrorKind.READ, "Row set is closed")

    def _description(self) -> List[Any]:
        self._check_open()
        description = self._cursor.description
        if description is None:
            raise DriverOperationError(ErrorKind.READ, "Cursor has no result metadata")
        return list(description)

    def column_count(self) -> int:
        return len(self._description())

    def column_label(self, index: int) -> str:
        description = self._description()
        if not 0 <= index < len(description):
            raise DriverOperationError(
                ErrorKind.READ, f"Column index {index} out of range"
            )
        return description[index][0]

    def next(self) -> bool:
        """
        Move to the next row.

        Returns:
            True if a row is now current, False once the rows are exhausted
        """
        self._check_open()
        if self._exhausted:
            return False

        row = self._cursor.fetchone()
        if row is None:
            self._current = None
            self._exhausted = True
            return False

        self._current = tuple(row)
        return True

    def get_string(self, index: int) -> Optional[str]:
        """Current row's value at index as text; None for SQL NULL."""
        self._check_open()
        if self._current is None:
            raise DriverOperationError(ErrorKind.READ, "No current row")
        if not 0 <= index < len(self._current):
            raise DriverOperationError(
                ErrorKind.READ, f"Column index {index} out of range"
            )
        return value_to_text(self._current[index])

    def close(self):
        """Drop the current row. The cursor itself belongs to the statement."""
        self._current = None
        self._closed = True
