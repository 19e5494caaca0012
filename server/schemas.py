"""Pydantic request/response schemas for the Wordpal API."""

from typing import Dict, Optional
from pydantic import BaseModel


# ---- Review ----

class WordResponse(BaseModel):
    exhausted: bool
    word: Optional[str] = None
    translation: Optional[str] = None


class OutcomeRequest(BaseModel):
    correct: bool


# ---- Stats ----

class StatsResponse(BaseModel):
    total: int
    available: int
    pending: int
    skipped_lines: int
    by_iteration: Dict[str, int]
