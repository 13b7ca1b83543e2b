from __future__ import annotations

from typing import Iterable


class QuizError(Exception):
    """Base class for quiz, scoring and catalog failures."""


class IncompleteAnswersError(QuizError):
    """Scoring was requested before every question had an answer."""

    def __init__(self, missing: Iterable[str]) -> None:
        self.missing = list(missing)
        super().__init__(f"Quiz is incomplete, unanswered: {', '.join(self.missing)}")


class MalformedProviderError(QuizError):
    """A provider record is missing a required field or has an invalid value."""

    def __init__(self, provider_id: str, fields: Iterable[str]) -> None:
        self.provider_id = provider_id
        self.fields = list(fields)
        super().__init__(
            f"Provider {provider_id!r} is malformed: {', '.join(self.fields) or 'invalid record'}"
        )


class CatalogError(QuizError):
    pass


class InvalidAnswerError(QuizError, ValueError):
    pass


class StepNotAnsweredError(QuizError):
    pass
