"""
Reusable checks on raw SQL text.

No SQL parsing happens here: the driver decides what a statement means.
These helpers only deal with blank input and statement terminators.
"""

from .exceptions import EmptyStatementError


TERMINATOR = ";"


def validate_sql(sql: str) -> str:
    """
    Validates that there is something to execute.

    Args:
        sql: Raw statement text

    Returns:
        The text with surrounding whitespace removed

    Raises:
        EmptyStatementError: If the text is None, blank, or only a terminator
    """
    if sql is None:
        raise EmptyStatementError()

    text = sql.strip()
    if not strip_terminator(text):
        raise EmptyStatementError()

    return text


def strip_terminator(sql: str) -> str:
    """
    Remove one trailing semicolon, if present.

    Example:
        strip_terminator("SELECT 1;") -> 'SELECT 1'
    """
    text = sql.rstrip()
    if text.endswith(TERMINATOR):
        text = text[:-1].rstrip()
    return text


def is_statement_complete(text: str) -> bool:
    """True when the accumulated input ends with a terminator."""
    return text.rstrip().endswith(TERMINATOR)
