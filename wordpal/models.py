"""Data models for the word drill: the Entry dataclass and review directions."""

from dataclasses import dataclass, replace
from enum import Enum


class Direction(str, Enum):
    """Which way a review moves an entry through the delay table."""
    FORWARD = "forward"    # recalled correctly
    BACKWARD = "backward"  # recalled incorrectly

    @classmethod
    def from_outcome(cls, correct: bool) -> 'Direction':
        return cls.FORWARD if correct else cls.BACKWARD


@dataclass
class Entry:
    """
    One word/translation pair plus its scheduling state.

    is_due caches `due_at > now` for the moment it was computed (load time or
    the last advance). It is never refreshed mid-session; use is_due_at() for
    the live value.
    """
    word: str
    translation: str
    iteration: int = 0
    due_at: int = 0
    is_due: bool = False

    def is_due_at(self, now: int) -> bool:
        return self.due_at > now

    def copy(self) -> 'Entry':
        return replace(self)
