"""Helpers for turning raw property strings into values."""

from __future__ import annotations

from typing import List, Optional

from .settings import DEFAULT_LIST_DELIMITER

LIST_ESCAPE = "\\"


def split(
    value: Optional[str], delimiter: str = DEFAULT_LIST_DELIMITER, trim: bool = True
) -> List[str]:
    """Split a property value at ``delimiter``.

    A backslash escapes the delimiter and itself. Before any other character
    the backslash is kept literally.

    Args:
        value: Raw property value; ``None`` yields an empty list.
        delimiter: Single separator character.
        trim: Strip whitespace around every element.

    Returns:
        The elements in order. A value without delimiters yields a one
        element list.

    Example:
        >>> split("a, b\\\\,c")
        ['a', 'b,c']
    """
    if value is None:
        return []

    parts: List[str] = []
    token: List[str] = []
    in_escape = False
    for char in value:
        if in_escape:
            if char != delimiter and char != LIST_ESCAPE:
                token.append(LIST_ESCAPE)
            token.append(char)
            in_escape = False
        elif char == delimiter:
            parts.append(_finish(token, trim))
            token = []
        elif char == LIST_ESCAPE:
            in_escape = True
        else:
            token.append(char)

    if in_escape:
        token.append(LIST_ESCAPE)
    parts.append(_finish(token, trim))
    return parts


def _finish(token: List[str], trim: bool) -> str:
    text = "".join(token)
    return text.strip() if trim else text
