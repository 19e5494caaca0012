"""Review session: the open/pick/record loop on top of WordStore, with injectable IO."""

import logging
import time
from pathlib import Path
from typing import Callable, Dict, Optional, Tuple

from wordpal.messages import FAILED_DB_WRITE_MESSAGE, NO_WORDS_MESSAGE
from wordpal.models import Direction, Entry
from wordpal.rng import XorShiftRng
from wordpal.scheduler import DelaySchedule
from wordpal.storage import WordStore

logger = logging.getLogger("wordpal.session")


class ReviewSession:
    """
    Holds the open store and the word currently on display.

    Every outcome is applied to the handle from the latest pick, so a
    stale handle never reaches the store through this class.
    """

    def __init__(self, store: WordStore):
        self.store = store
        self._current: Optional[Tuple[Entry, int]] = None

    @classmethod
    def open_database(
        cls,
        db_path,
        schedule: Optional[DelaySchedule] = None,
        rng: Optional[XorShiftRng] = None,
        clock: Callable[[], float] = time.time,
    ) -> 'ReviewSession':
        """Open the word file. OSError propagates to the caller."""
        store = WordStore.open(db_path, schedule=schedule, rng=rng, clock=clock)
        logger.info(
            "Opened %s: %d available, %d pending, %d skipped line(s)",
            Path(db_path), len(store.available), len(store.pending),
            store.skipped_lines,
        )
        return cls(store)

    @property
    def current(self) -> Optional[Entry]:
        if self._current is None:
            return None
        return self._current[0]

    def pick_due(self) -> Optional[Tuple[str, str]]:
        """Draw the next word. Returns (word, translation) or None when exhausted."""
        self._current = self.store.pick_due()
        if self._current is None:
            return None
        entry = self._current[0]
        return entry.word, entry.translation

    def record_outcome(self, correct: bool) -> None:
        """
        Advance the current word, rewrite the file and draw the next word.

        The next word is drawn even if the write fails; the OSError is then
        re-raised so the caller can report it and keep going.
        """
        if self._current is None:
            return
        _, handle = self._current
        self.store.advance(handle, Direction.from_outcome(correct))
        try:
            self.store.persist()
        except OSError:
            logger.exception("Failed to write %s", self.store.db_path)
            raise
        finally:
            self.pick_due()

    def stats(self) -> Dict:
        by_iteration: Dict[str, int] = {}
        for entry in self.store.entries():
            key = str(entry.iteration)
            by_iteration[key] = by_iteration.get(key, 0) + 1
        return {
            'total': self.store.count(),
            'available': len(self.store.available),
            'pending': len(self.store.pending),
            'skipped_lines': self.store.skipped_lines,
            'by_iteration': by_iteration,
        }

    def close(self) -> None:
        self.store.close()


def run_review_session(
    session: ReviewSession,
    input_fn: Callable[[str], str] = input,
    output_fn: Callable[[str], None] = print,
) -> Dict:
    """
    Run an interactive review until the words run out or the user quits.

    Flow per word:
        1. Show the word
        2. Wait for Enter, then show the translation
        3. Read y (correct), n (incorrect), s (skip) or q (quit)
        4. Record the outcome, which rewrites the file

    Returns:
        Summary dict: {reviewed, correct, incorrect, skipped, write_errors}
    """
    reviewed = 0
    correct = 0
    incorrect = 0
    skipped = 0
    write_errors = 0

    output_fn(f"\n{'='*60}")
    output_fn(f"REVIEW SESSION -- {len(session.store.available)} word(s) available")
    output_fn(f"{'='*60}")
    output_fn("Press Enter to reveal, then answer y/n. 's' skips, 'q' quits.\n")

    if session.current is None:
        session.pick_due()

    while session.current is not None:
        entry = session.current
        output_fn(f"\n  {entry.word}")

        try:
            input_fn("  (Enter to reveal) ")
            output_fn(f"  -> {entry.translation}")
            answer = input_fn("Correct? [y/n/s/q]: ").strip().lower()
        except (EOFError, KeyboardInterrupt):
            output_fn("\nSession ended.")
            break

        if answer == 'q':
            output_fn("Ending session early.")
            break

        if answer == 's':
            skipped += 1
            output_fn("  (skipped)")
            session.pick_due()
            continue

        if answer not in ('y', 'n'):
            output_fn("  Please answer y, n, s or q.")
            continue

        was_correct = answer == 'y'
        try:
            session.record_outcome(was_correct)
        except OSError as e:
            write_errors += 1
            output_fn(f"{FAILED_DB_WRITE_MESSAGE}\n\n({e})")

        reviewed += 1
        if was_correct:
            correct += 1
        else:
            incorrect += 1
    else:
        output_fn(f"\n{NO_WORDS_MESSAGE}")

    summary = {
        'reviewed': reviewed,
        'correct': correct,
        'incorrect': incorrect,
        'skipped': skipped,
        'write_errors': write_errors,
    }

    output_fn(f"\n{'='*60}")
    output_fn("SESSION COMPLETE")
    output_fn(f"  Reviewed: {reviewed}  Correct: {correct}  "
              f"Incorrect: {incorrect}  Skipped: {skipped}")
    if write_errors:
        output_fn(f"  Write errors: {write_errors}")
    output_fn(f"{'='*60}")

    return summary
