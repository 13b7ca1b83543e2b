from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class QuizConfig:
    results_limit: int = 3
    session_key: str = "quiz_state"


DEFAULT_QUIZ_CONFIG = QuizConfig()
