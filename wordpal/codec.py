"""Line codec for the flat-file word database.

One entry per line, fields joined by DELIMITER:

    word;; translation                           (new, never reviewed)
    word;; translation;; iteration;; due_at      (tracked)

Lines of any other shape decode to None and are dropped by the store.
"""

import re
import time
from typing import Optional

from wordpal.models import Entry

DELIMITER = ';; '

_UINT_RE = re.compile(r'[0-9]+')


def _parse_uint(field: str) -> Optional[int]:
    if not _UINT_RE.fullmatch(field):
        return None
    return int(field)


def parse_line(line: str, now: Optional[int] = None) -> Optional[Entry]:
    """
    Decode one database line.

    Args:
        line: A single line without its terminator.
        now:  Epoch seconds used to decide is_due (default: wall clock).

    Returns:
        The decoded Entry, or None if the line has the wrong number of
        fields or a non-numeric iteration/due_at.
    """
    fields = line.split(DELIMITER)

    if len(fields) == 2:
        return Entry(word=fields[0], translation=fields[1])

    if len(fields) != 4:
        return None

    iteration = _parse_uint(fields[2])
    due_at = _parse_uint(fields[3])
    if iteration is None or due_at is None:
        return None

    if now is None:
        now = int(time.time())

    return Entry(
        word=fields[0],
        translation=fields[1],
        iteration=iteration,
        due_at=due_at,
        is_due=due_at > now,
    )


def encode_line(entry: Entry) -> str:
    """Encode an entry as a database line (no trailing newline)."""
    return DELIMITER.join([
        entry.word,
        entry.translation,
        str(entry.iteration),
        str(entry.due_at),
    ])
