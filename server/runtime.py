from __future__ import annotations

import threading
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from wordpal.rng import XorShiftRng
from wordpal.scheduler import DelaySchedule
from wordpal.session import ReviewSession


@dataclass
class RuntimePaths:
   db_path: Path


class Runtime:
   """
   Process-wide runtime cache for the review session.

   - Session: opened lazily on first use, then reused
   - Lock: FastAPI runs sync endpoints on a threadpool, while the
     session itself has no synchronization, so every caller holds
     `lock` around the whole pick/record/persist sequence
   """

   def __init__(self, paths: RuntimePaths, schedule: DelaySchedule, rng_seed: int):
      self.paths = paths
      self.schedule = schedule
      self.rng_seed = rng_seed

      self.lock = threading.RLock()
      self._session: Optional[ReviewSession] = None

   def get_session(self) -> ReviewSession:
      """
      Returns the cached session, opening the database if needed.
      OSError from opening propagates and nothing is cached.
      """
      with self.lock:
         if self._session is None:
               self._session = ReviewSession.open_database(
                  self.paths.db_path,
                  schedule=self.schedule,
                  rng=XorShiftRng(self.rng_seed),
               )
      return self._session

   def close(self) -> None:
      with self.lock:
         if self._session is not None:
               self._session.close()
               self._session = None


# -------------------------------------------------------------------
# Runtime factory (for FastAPI dependency injection)
# -------------------------------------------------------------------
if TYPE_CHECKING:
    from server.config import Settings


def runtime_from_settings(settings: "Settings") -> Runtime:
    """Build Runtime from Settings. Used by get_runtime dependency."""
    paths = RuntimePaths(db_path=Path(settings.db_path))
    return Runtime(paths, schedule=settings.schedule, rng_seed=settings.rng_seed)
