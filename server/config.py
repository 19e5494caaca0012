"""Configuration for the Wordpal API server."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from wordpal.rng import DEFAULT_SEED
from wordpal.scheduler import DelaySchedule


@dataclass
class Settings:
    """
    Paths and review parameters the server needs.

    Defaults resolve relative to the project root.
    Every field is overridable at construction for testing.
    """
    db_path: Optional[Path] = None
    rng_seed: Optional[int] = None
    schedule: Optional[DelaySchedule] = None

    def __post_init__(self):
        project_root = Path(__file__).resolve().parent.parent

        if self.db_path is None:
            env_db = os.environ.get("WORDPAL_DB_PATH")
            self.db_path = Path(env_db) if env_db else project_root / "words.txt"
        self.db_path = Path(self.db_path)

        if self.rng_seed is None:
            self.rng_seed = DEFAULT_SEED
            env_seed = os.environ.get("WORDPAL_RNG_SEED")
            if env_seed:
                try:
                    seed = int(env_seed, 0)
                    if seed != 0:
                        self.rng_seed = seed
                except ValueError:
                    pass
        elif self.rng_seed == 0:
            raise ValueError("rng_seed must be non-zero")

        if self.schedule is None:
            env_delays = os.environ.get("WORDPAL_DELAYS")
            self.schedule = DelaySchedule()
            if env_delays:
                try:
                    self.schedule = DelaySchedule.parse(env_delays)
                except ValueError:
                    pass
