"""
Column value conversion shared by every rendering path.

All columns are read as text; these functions are the single source of
truth for how a driver value becomes that text.
"""

from typing import Any, Optional


NULL_TEXT = "null"


def value_to_text(value: Any) -> Optional[str]:
    """
    Convert a driver value to its string form.

    SQL NULL stays None here; callers that print it use NULL_TEXT.

    Example:
        value_to_text(3) -> '3'
        value_to_text(True) -> 'true'
        value_to_text(b'abc') -> 'abc'
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (bytes, bytearray, memoryview)):
        raw = bytes(value)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError:
            return raw.hex()
    return str(value)


def display_text(value: Optional[str]) -> str:
    """Text shown for a column value, with NULL spelled out."""
    return NULL_TEXT if value is None else value

