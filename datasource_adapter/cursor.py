"""Offset cursor codec.

A cursor is the base-10 offset of the next page. ``""`` means start of
stream. Offsets only stay meaningful while the datasource returns rows in a
stable order between calls; nothing here can detect a reordering.
"""

from __future__ import annotations

from datasource_adapter.errors import InvalidCursorError

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def decode_cursor(cursor: str) -> int:
    """Decode *cursor* into a non-negative offset.

    Raises ``InvalidCursorError`` for anything that is not a base-10 int64
    or that decodes to a negative offset.
    """
    if cursor == "":
        return 0

    # int() also accepts surrounding whitespace and "_" separators; a cursor
    # we issued never contains either.
    if cursor != cursor.strip() or "_" in cursor:
        raise InvalidCursorError(f"invalid cursor: {cursor!r}")
    try:
        offset = int(cursor, 10)
    except ValueError as exc:
        raise InvalidCursorError(f"invalid cursor: {cursor!r}") from exc

    if not _INT64_MIN <= offset <= _INT64_MAX:
        raise InvalidCursorError(f"cursor out of int64 range: {cursor!r}")
    if offset < 0:
        raise InvalidCursorError(f"negative cursor offset: {cursor!r}")
    return offset


def encode_cursor(offset: int, limit: int, has_more: bool) -> str:
    """Return the cursor for the page after ``[offset, offset + limit)``."""
    if not has_more:
        return ""
    return str(offset + limit)
