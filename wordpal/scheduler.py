"""Fixed-table spaced repetition: each correct answer moves a word one bucket
further out, each wrong answer one bucket back."""

from dataclasses import dataclass
from typing import Tuple

from wordpal.models import Direction, Entry

DAY = 86400

DEFAULT_DELAYS: Tuple[int, ...] = (0, 1, 7, 14, 30)


@dataclass(frozen=True)
class DelaySchedule:
    """
    Ordered wait durations (days), indexed by an entry's iteration.

    delays[0] is the least mature bucket. Values are injected into the
    store at construction so tests can run with alternate schedules.
    """
    delays: Tuple[int, ...] = DEFAULT_DELAYS
    seconds_per_day: int = DAY

    def __post_init__(self):
        if not self.delays:
            raise ValueError("Delay table must not be empty")
        if any(d < 0 for d in self.delays):
            raise ValueError(f"Delays must be non-negative, got {self.delays}")
        if self.seconds_per_day <= 0:
            raise ValueError(f"seconds_per_day must be positive, got {self.seconds_per_day}")
        object.__setattr__(self, 'delays', tuple(int(d) for d in self.delays))

    @classmethod
    def parse(cls, text: str) -> 'DelaySchedule':
        """Build a schedule from a comma-separated list of days, e.g. "0,1,7"."""
        parts = [p.strip() for p in text.split(',') if p.strip()]
        try:
            delays = tuple(int(p) for p in parts)
        except ValueError:
            raise ValueError(f"Invalid delay table: {text!r}")
        return cls(delays=delays)

    @property
    def last_index(self) -> int:
        return len(self.delays) - 1

    def clamp(self, index: int) -> int:
        return max(0, min(index, self.last_index))

    def step(self, index: int, direction: Direction) -> int:
        """Move one bucket in `direction`, never leaving the table."""
        if direction == Direction.FORWARD:
            return self.clamp(index + 1)
        return self.clamp(index - 1)

    def due_at(self, index: int, now: int) -> int:
        return now + self.delays[self.clamp(index)] * self.seconds_per_day


def advance_entry(
    entry: Entry,
    direction: Direction,
    schedule: DelaySchedule,
    now: int,
) -> None:
    """
    Apply one review outcome to an entry, in place.

    An entry that is already due is left untouched. Otherwise the
    iteration steps one bucket, due_at is recomputed from `now` and the
    entry is marked due, even when the new delay is zero days.
    """
    if entry.is_due:
        return
    entry.iteration = schedule.step(entry.iteration, direction)
    entry.due_at = schedule.due_at(entry.iteration, now)
    entry.is_due = True
