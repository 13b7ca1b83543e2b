from __future__ import annotations

from typing import Sequence

from .config import DEFAULT_QUIZ_CONFIG
from .models import ResultCard, ScoredResult
from .scoring import round_half_up

_FEATURE_FLAGS: list[tuple[str, str]] = [
    ("netflix_support", "netflix"),
    ("torrent_support", "torrenting"),
    ("kill_switch", "killSwitch"),
    ("no_logs", "noLogs"),
]


def top_matches(
    results: Sequence[ScoredResult], limit: int = DEFAULT_QUIZ_CONFIG.results_limit,
) -> list[ScoredResult]:
    """Return the first ``min(limit, len(results))`` ranked results."""
    if limit < 0:
        raise ValueError("limit must be non-negative")
    return list(results[:limit])


def savings_percent(result: ScoredResult) -> int:
    """Discount of the long-term plan against paying month to month."""
    if result.price_monthly <= 0:
        return 0
    return round_half_up(
        (result.price_monthly - result.price_per_month) / result.price_monthly * 100
    )


def feature_badges(result: ScoredResult) -> list[str]:
    return [badge for attr, badge in _FEATURE_FLAGS if getattr(result, attr)]


def build_result_card(result: ScoredResult, rank: int) -> ResultCard:
    return ResultCard(
        rank=rank,
        top_match=rank == 0,
        id=result.id,
        name=result.name,
        slug=result.slug,
        match_percentage=result.match_percentage,
        overall_rating=result.overall_rating,
        price_per_month=result.price_per_month,
        savings_percent=savings_percent(result),
        features=feature_badges(result),
        affiliate_url=result.affiliate_url,
        review_path=f"/reviews/{result.slug}",
        short_description=result.short_description,
    )
