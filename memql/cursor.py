""" Opaque cursors: offsets encoded as strings

A cursor is the URL-safe base64 encoding of an offset's decimal text: 0 => "MA==", 47 => "NDc=".
Cursors point at the last seen element: paging "after" a cursor starts at the next one.
"""

from __future__ import annotations

import base64
import binascii
import sys
from typing import Optional


def encode_cursor(offset: int) -> str:
    """ Encode an offset as an opaque cursor """
    if offset < 0:
        raise ValueError(f'Cursor offset must be non-negative, {offset} given')
    return base64.urlsafe_b64encode(str(offset).encode()).decode()


def decode_cursor(cursor: Optional[str]) -> tuple[int, bool]:
    """ Decode an opaque cursor into an offset

    Bad cursors are never an error: they just point to the start of the sequence.

    Returns:
        (offset, success) tuple. (0, False) when the cursor is empty or malformed
    """
    if not cursor or not isinstance(cursor, str):
        return 0, False

    try:
        text = base64.urlsafe_b64decode(cursor.encode()).decode()
    except (binascii.Error, ValueError):  # UnicodeError is a ValueError
        return 0, False

    # Only plain non-negative decimals: no signs, no spaces, no unicode digits
    if not (text.isascii() and text.isdigit()):
        return 0, False

    # Offsets must fit into a native index
    if len(text) > _MAX_OFFSET_DIGITS:
        return 0, False
    offset = int(text)
    if offset > MAX_OFFSET:
        return 0, False

    return offset, True


# The largest offset a cursor can point at. Paging resumes at the next one, which must be a valid index
MAX_OFFSET = sys.maxsize - 1
_MAX_OFFSET_DIGITS = len(str(MAX_OFFSET))
