"""
Quiz wizard session state.

The wizard walks the user through five fixed questions. State lives in the
user's session and is only ever touched by that user, so the model is
mutated in place and written back after each request.
"""
from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from ..errors import InvalidAnswerError, StepNotAnsweredError
from .models import (
    Budget,
    DeviceCount,
    PrimaryUse,
    QuestionOut,
    QuizAnswers,
    QuizStateOut,
    Region,
    SpeedPriority,
)
from .scoring import round_half_up

# question id -> (QuizAnswers attribute, allowed values), in quiz order
QUESTIONS: dict[str, tuple[str, type[Enum]]] = {
    "primaryUse": ("primary_use", PrimaryUse),
    "budget": ("budget", Budget),
    "devices": ("devices", DeviceCount),
    "speedPriority": ("speed_priority", SpeedPriority),
    "location": ("location", Region),
}
QUESTION_IDS: list[str] = list(QUESTIONS)
TOTAL_STEPS = len(QUESTION_IDS)


def list_questions() -> list[QuestionOut]:
    return [
        QuestionOut(id=qid, options=[option.value for option in choices])
        for qid, (_, choices) in QUESTIONS.items()
    ]


class QuizSession(BaseModel):
    current_step: int = Field(default=0, ge=0, lt=TOTAL_STEPS)
    answers: QuizAnswers = Field(default_factory=QuizAnswers)
    show_results: bool = False

    @property
    def current_question(self) -> str:
        return QUESTION_IDS[self.current_step]

    @property
    def can_proceed(self) -> bool:
        attr, _ = QUESTIONS[self.current_question]
        return getattr(self.answers, attr) is not None

    @property
    def progress(self) -> int:
        return round_half_up((self.current_step + 1) / TOTAL_STEPS * 100)

    def answer(self, question_id: str, value: str) -> None:
        """Record *value* for any question, not only the current one."""
        if question_id not in QUESTIONS:
            raise InvalidAnswerError(f"Unknown question {question_id!r}")
        attr, choices = QUESTIONS[question_id]
        try:
            option = choices(value)
        except ValueError:
            raise InvalidAnswerError(
                f"{value!r} is not an option for {question_id!r}"
            ) from None
        setattr(self.answers, attr, option)

    def advance(self) -> None:
        if not self.can_proceed:
            raise StepNotAnsweredError(f"Question {self.current_question!r} has no answer")
        if self.current_step < TOTAL_STEPS - 1:
            self.current_step += 1
        else:
            self.show_results = True

    def go_back(self) -> None:
        if self.show_results:
            self.show_results = False
            self.current_step = TOTAL_STEPS - 1
        elif self.current_step > 0:
            self.current_step -= 1

    def reset(self) -> None:
        self.current_step = 0
        self.answers = QuizAnswers()
        self.show_results = False


def describe(session: QuizSession) -> QuizStateOut:
    question = None
    if not session.show_results:
        _, choices = QUESTIONS[session.current_question]
        question = QuestionOut(
            id=session.current_question,
            options=[option.value for option in choices],
        )
    return QuizStateOut(
        current_step=session.current_step,
        total_steps=TOTAL_STEPS,
        progress=session.progress,
        answers=session.answers.model_copy(),
        show_results=session.show_results,
        can_proceed=session.can_proceed,
        question=question,
    )
