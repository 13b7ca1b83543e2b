from __future__ import annotations

from collections import Counter
from typing import Any

from ..quiz.wizard import QUESTION_IDS


def compute_quiz_analytics(completions: list[dict[str, Any]]) -> dict[str, Any]:
    total = len(completions)

    # Answer distribution per question; location is tracked even though it is not scored
    answer_counts: dict[str, Counter[str]] = {qid: Counter() for qid in QUESTION_IDS}
    for c in completions:
        for qid in QUESTION_IDS:
            value = c["answers"].get(qid)
            if value:
                answer_counts[qid][value] += 1
    answer_distribution = {qid: dict(counter) for qid, counter in answer_counts.items()}

    # Providers ranked first
    top_counter: Counter[str] = Counter()
    for c in completions:
        if c["ranked_slugs"]:
            top_counter[c["ranked_slugs"][0]] += 1
    top_providers = [{"slug": s, "count": n} for s, n in top_counter.most_common(10)]

    percentages = [
        c["top_match_percentage"] for c in completions
        if c.get("top_match_percentage") is not None
    ]
    avg_top = round(sum(percentages) / len(percentages), 1) if percentages else 0.0

    return {
        "total_completions": total,
        "answer_distribution": answer_distribution,
        "top_providers": top_providers,
        "avg_top_match_percentage": avg_top,
    }
