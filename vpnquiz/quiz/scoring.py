"""
Quiz scoring engine.

Each provider is scored against five weighted criteria:

==============  ======  =====================================================
Criterion       Weight  Full marks when
==============  ======  =====================================================
primary_use     30      the provider excels at the chosen use case
budget          25      the effective monthly price fits the chosen tier
devices         20      ``max_devices`` covers the chosen device bracket
speed           15      ``speed_score`` meets the chosen speed priority
coverage        10      servers in 100+ countries
==============  ======  =====================================================

Points are summed in the order above and reported as a percentage of the
summed weights. Scoring is a pure function of its arguments, so the same
catalog and answers always produce the same ranking.
"""
from __future__ import annotations

import logging
import math
from operator import attrgetter
from typing import Any, Callable, Iterable, Mapping, NamedTuple

from ..catalog.models import ProviderRecord, coerce_provider
from ..errors import IncompleteAnswersError
from .models import (
    Budget,
    DeviceCount,
    PrimaryUse,
    QuizAnswers,
    ScoredResult,
    SpeedPriority,
)

logger = logging.getLogger(__name__)

UNLIMITED_DEVICES = 100

_DEVICE_MINIMUMS: dict[DeviceCount, int] = {
    DeviceCount.few: 2,
    DeviceCount.several: 5,
    DeviceCount.many: 10,
    DeviceCount.unlimited: UNLIMITED_DEVICES,
}


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _primary_use_points(provider: ProviderRecord, answers: QuizAnswers) -> float:
    use = answers.primary_use
    if use is PrimaryUse.streaming and provider.streaming_score > 85:
        return 30 * (provider.streaming_score / 100)
    if use is PrimaryUse.privacy and provider.security_score > 90:
        return 30 * (provider.security_score / 100)
    if use is PrimaryUse.gaming and provider.speed_score > 85:
        return 30 * (provider.speed_score / 100)
    if use is PrimaryUse.torrenting and provider.torrent_support:
        return 25 + (provider.speed_score / 100) * 5
    if use is PrimaryUse.work and provider.security_score > 88:
        return 30 * (provider.security_score / 100)
    return 20


def _budget_points(provider: ProviderRecord, answers: QuizAnswers) -> float:
    budget = answers.budget
    price = provider.price_per_month

    if budget is Budget.free and provider.free_tier:
        return 25
    if budget is Budget.budget and price <= 4:
        return 25
    if budget is Budget.midrange and price <= 8:
        return 25
    # Premium tier tops out at 20
    if budget is Budget.premium and price >= 8:
        return 20

    # Partial credit for near misses
    if budget is Budget.free:
        return 0
    if budget is Budget.budget and price <= 6:
        return 15
    if budget is Budget.midrange and price <= 10:
        return 15
    return 10


def _device_points(provider: ProviderRecord, answers: QuizAnswers) -> float:
    if provider.max_devices >= _DEVICE_MINIMUMS[answers.devices]:
        return 20
    return 10


def _speed_points(provider: ProviderRecord, answers: QuizAnswers) -> float:
    priority = answers.speed_priority
    if priority is SpeedPriority.critical and provider.speed_score >= 90:
        return 15
    if priority is SpeedPriority.important and provider.speed_score >= 80:
        return 15
    if priority is SpeedPriority.not_priority:
        return 10
    return (provider.speed_score / 100) * 15 * 0.5


def _coverage_points(provider: ProviderRecord, answers: QuizAnswers) -> float:
    # TODO: weight by answers.location once the catalog carries per-region server counts
    if provider.countries >= 100:
        return 10
    if provider.countries >= 60:
        return 8
    return 5


class Criterion(NamedTuple):
    name: str
    weight: int
    points: Callable[[ProviderRecord, QuizAnswers], float]


CRITERIA: tuple[Criterion, ...] = (
    Criterion("primary_use", 30, _primary_use_points),
    Criterion("budget", 25, _budget_points),
    Criterion("devices", 20, _device_points),
    Criterion("speed", 15, _speed_points),
    Criterion("coverage", 10, _coverage_points),
)


def _require_complete(answers: QuizAnswers) -> None:
    missing = answers.missing_fields()
    if missing:
        raise IncompleteAnswersError(missing)


def criterion_breakdown(
    provider: ProviderRecord | Mapping[str, Any], answers: QuizAnswers,
) -> dict[str, float]:
    """Return the points each criterion awards, in evaluation order."""
    _require_complete(answers)
    record = coerce_provider(provider)
    return {criterion.name: criterion.points(record, answers) for criterion in CRITERIA}


def score(
    providers: Iterable[ProviderRecord | Mapping[str, Any]], answers: QuizAnswers,
) -> list[ScoredResult]:
    """
    Score and rank every provider for a complete answer set.

    Returns one result per provider, highest ``match_score`` first. Providers
    with equal scores keep their catalog order. Truncating to the top matches
    is left to the caller.

    Raises ``IncompleteAnswersError`` when any question is unanswered and
    ``MalformedProviderError`` when a raw provider row fails validation.
    """
    _require_complete(answers)

    results: list[ScoredResult] = []
    for raw in providers:
        provider = coerce_provider(raw)
        breakdown = criterion_breakdown(provider, answers)

        match_score = 0.0
        max_score = 0
        for criterion in CRITERIA:
            max_score += criterion.weight
            match_score += breakdown[criterion.name]

        results.append(ScoredResult(
            **provider.model_dump(),
            match_score=match_score,
            match_percentage=round_half_up(match_score / max_score * 100),
        ))

    # list.sort is stable, including with reverse=True
    results.sort(key=attrgetter("match_score"), reverse=True)
    logger.debug("Scored %d providers", len(results))
    return results
