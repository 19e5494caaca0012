"""Review service wrappers -- all return JSON-serializable dicts.

Callers hold the runtime lock around every call.
"""

import sys
from pathlib import Path
from typing import Dict

_project_root = str(Path(__file__).resolve().parent.parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from wordpal.session import ReviewSession


class NoWordOnDisplayError(Exception):
    """Raised when an outcome is posted before any word was drawn."""


def _word_summary(session: ReviewSession) -> Dict:
    entry = session.current
    if entry is None:
        return {'exhausted': True, 'word': None, 'translation': None}
    return {
        'exhausted': False,
        'word': entry.word,
        'translation': entry.translation,
    }


def get_current_word(session: ReviewSession) -> Dict:
    """Return the word on display, drawing one if none is shown yet."""
    if session.current is None:
        session.pick_due()
    return _word_summary(session)


def record_outcome(session: ReviewSession, correct: bool) -> Dict:
    """
    Record the outcome for the word on display and return the next one.

    Raises:
        NoWordOnDisplayError if no word is being reviewed.
        OSError if the database could not be rewritten. The in-memory
        change and the next pick are kept.
    """
    if session.current is None:
        raise NoWordOnDisplayError("No word is being reviewed")
    session.record_outcome(correct)
    return _word_summary(session)


def get_stats(session: ReviewSession) -> Dict:
    return session.stats()
