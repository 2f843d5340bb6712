"""
Result formatter for displaying statement outcomes.

Separates presentation logic from reading the driver's row set.
"""

from typing import List, Sequence
from tabulate import tabulate


def format_bracketed(values: Sequence[str]) -> str:
    """
    Enclose each value in brackets, with no separator.

    Args:
        values: Column labels or column values, already as text

    Returns:
        e.g. "[id][name]"
    """
    return "".join(f"[{value}]" for value in values)


def format_bracketed_lines(columns: Sequence[str], rows: List[Sequence[str]]) -> str:
    """
    Header line of bracketed labels followed by one bracketed line per row.

    Returns:
        Lines joined by newline, no trailing newline
    """
    lines = [format_bracketed(columns)]
    for row in rows:
        lines.append(format_bracketed(row))
    return "\n".join(lines)


def format_rows_affected(count: int) -> str:
    """
    Format the outcome of a statement that returned no row set.

    Args:
        count: Number of affected rows

    Returns:
        Formatted string
    """
    return f"{count} row(s) affected."


def format_table(columns: Sequence[str], rows: List[Sequence[str]]) -> str:
    """
    Format query results as an ASCII grid.

    Args:
        columns: Column labels
        rows: Row values as text, aligned with columns

    Returns:
        Formatted string with table and a row-count footer
    """
    table = tabulate(rows, headers=list(columns), tablefmt='grid',
                     disable_numparse=True)
    row_count = f"\n({len(rows)} row{'s' if len(rows) != 1 else ''})"

    return table + row_count
