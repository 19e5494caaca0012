"""Flat-file word storage partitioned into available and pending entries."""

import logging
import time
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from wordpal.codec import encode_line, parse_line
from wordpal.models import Direction, Entry
from wordpal.rng import XorShiftRng
from wordpal.scheduler import DelaySchedule, advance_entry

logger = logging.getLogger("wordpal.storage")


class DatabaseDecodeError(OSError):
    """The database file is not valid UTF-8."""


def _split_lines(contents: str) -> List[str]:
    """Split on "\n", dropping one trailing "\r" per line and the empty tail."""
    lines = contents.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


class WordStore:
    """
    Word database backed by one text file.

    The file is opened read+write once and must already exist. The whole
    file is loaded into memory and rewritten in full by persist().

    Entries live in exactly one of two lists:
        available -- not due, eligible for pick_due()
        pending   -- due (timed out), skipped until the next load
    """

    def __init__(
        self,
        db_path,
        schedule: Optional[DelaySchedule] = None,
        rng: Optional[XorShiftRng] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.db_path = Path(db_path)
        self.schedule = schedule or DelaySchedule()
        self.rng = rng or XorShiftRng()
        self._clock = clock
        self.available: List[Entry] = []
        self.pending: List[Entry] = []
        self.skipped_lines = 0
        # newline='' keeps line endings untranslated in both directions
        self._file = open(self.db_path, 'r+', encoding='utf-8', newline='')
        try:
            self._load()
        except UnicodeDecodeError as e:
            self._file.close()
            raise DatabaseDecodeError(f"{self.db_path} is not valid UTF-8: {e}") from e
        except BaseException:
            self._file.close()
            raise

    @classmethod
    def open(cls, db_path, **kwargs) -> 'WordStore':
        return cls(db_path, **kwargs)

    def _now(self) -> int:
        return int(self._clock())

    def _load(self) -> None:
        now = self._now()
        contents = self._file.read()
        for line in _split_lines(contents):
            entry = parse_line(line, now=now)
            if entry is None:
                self.skipped_lines += 1
                continue
            entry.iteration = self.schedule.clamp(entry.iteration)
            if entry.is_due:
                self.pending.append(entry)
            else:
                self.available.append(entry)
        logger.debug(
            "Loaded %s: %d available, %d pending",
            self.db_path, len(self.available), len(self.pending),
        )

    def persist(self) -> None:
        """
        Rewrite the whole file from the in-memory entries.

        The payload is encoded before the file is touched and written in a
        single call, so an encoding failure leaves the file as it was.
        """
        payload = ''.join(encode_line(entry) + '\n' for entry in self.entries())
        self._file.seek(0)
        self._file.write(payload)
        self._file.truncate()
        self._file.flush()
        logger.debug("Wrote %d entries to %s", self.count(), self.db_path)

    def pick_due(self) -> Optional[Tuple[Entry, int]]:
        """
        Pick a random available entry.

        Returns (copy of the entry, handle) or None if nothing is available.
        The handle is its index in `available` and goes stale on the next
        change to that list.
        """
        if not self.available:
            return None
        index = self.rng.range(0, len(self.available) - 1)
        return self.available[index].copy(), index

    def advance(self, handle: int, direction: Direction) -> None:
        """Apply a review outcome to the entry at `handle` and move it to pending.

        Out-of-range handles are ignored.
        """
        if handle < 0 or handle >= len(self.available):
            return
        entry = self.available[handle]
        advance_entry(entry, direction, self.schedule, self._now())
        # swap-remove: the last available entry takes the vacated slot
        last = self.available.pop()
        if handle < len(self.available):
            self.available[handle] = last
        self.pending.append(entry)

    def entries(self) -> List[Entry]:
        return self.available + self.pending

    def count(self) -> int:
        return len(self.available) + len(self.pending)

    @property
    def closed(self) -> bool:
        return self._file.closed

    def close(self) -> None:
        self._file.close()

    def __enter__(self) -> 'WordStore':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
