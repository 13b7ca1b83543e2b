from __future__ import annotations

from enum import Enum

from pydantic import ConfigDict, Field

from ..catalog.models import ProviderRecord
from ..schema import CamelModel


class PrimaryUse(str, Enum):
    streaming = "streaming"
    privacy = "privacy"
    gaming = "gaming"
    torrenting = "torrenting"
    work = "work"
    other = "other"


class Budget(str, Enum):
    free = "free"
    budget = "budget"
    midrange = "midrange"
    premium = "premium"


class DeviceCount(str, Enum):
    few = "1-2"
    several = "3-5"
    many = "6-10"
    unlimited = "unlimited"


class SpeedPriority(str, Enum):
    critical = "critical"
    important = "important"
    not_priority = "notPriority"


class Region(str, Enum):
    europe = "europe"
    north_america = "northAmerica"
    asia = "asia"
    middle_east = "middleEast"
    other = "other"


class QuizAnswers(CamelModel):
    primary_use: PrimaryUse | None = None
    budget: Budget | None = None
    devices: DeviceCount | None = None
    speed_priority: SpeedPriority | None = None
    location: Region | None = None

    def missing_fields(self) -> list[str]:
        """Question ids (camelCase) that have no answer yet, in quiz order."""
        return [
            info.alias or name
            for name, info in type(self).model_fields.items()
            if getattr(self, name) is None
        ]

    def is_complete(self) -> bool:
        return not self.missing_fields()


class ScoredResult(ProviderRecord):
    match_score: float
    match_percentage: int = Field(..., ge=0, le=100)


class QuestionOut(CamelModel):
    id: str
    options: list[str]


class AnswerRequest(CamelModel):
    question_id: str = Field(..., min_length=1)
    value: str = Field(..., min_length=1)


class QuizStateOut(CamelModel):
    current_step: int
    total_steps: int
    progress: int
    answers: QuizAnswers
    show_results: bool
    can_proceed: bool
    question: QuestionOut | None = None


class ResultCard(CamelModel):
    model_config = ConfigDict(frozen=True)

    rank: int
    top_match: bool
    id: str
    name: str
    slug: str
    match_percentage: int
    overall_rating: float
    price_per_month: float
    savings_percent: int
    features: list[str]
    affiliate_url: str
    review_path: str
    short_description: str | None = None


class QuizResultsResponse(CamelModel):
    results: list[ResultCard]
    total_candidates: int


class ScoreResponse(CamelModel):
    results: list[ScoredResult]
    total_candidates: int
