from __future__ import annotations

import time
from typing import Any, Sequence

from ..quiz.models import QuizAnswers, ScoredResult

_completions: list[dict[str, Any]] = []


def record_completion(answers: QuizAnswers, ranked: Sequence[ScoredResult]) -> None:
    """Log a finished quiz: the answers given and the ranking served."""
    _completions.append({
        "answers": answers.model_dump(mode="json", by_alias=True),
        "ranked_slugs": [r.slug for r in ranked],
        "top_match_percentage": ranked[0].match_percentage if ranked else None,
        "timestamp": time.time(),
    })


def get_completions() -> list[dict[str, Any]]:
    return _completions


def clear_completions() -> None:
    _completions.clear()
