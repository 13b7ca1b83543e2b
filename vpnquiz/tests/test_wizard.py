import pytest

from vpnquiz.errors import InvalidAnswerError, StepNotAnsweredError
from vpnquiz.quiz.models import PrimaryUse, Region
from vpnquiz.quiz.wizard import QUESTION_IDS, QuizSession, describe, list_questions

FULL_RUN = [
    ("primaryUse", "streaming"),
    ("budget", "midrange"),
    ("devices", "3-5"),
    ("speedPriority", "important"),
    ("location", "europe"),
]


def _complete(session: QuizSession) -> None:
    for question_id, value in FULL_RUN:
        session.answer(question_id, value)
        session.advance()


def test_questions_in_fixed_order():
    questions = list_questions()
    assert [q.id for q in questions] == QUESTION_IDS
    assert questions[0].options == ["streaming", "privacy", "gaming", "torrenting", "work", "other"]
    assert questions[2].options == ["1-2", "3-5", "6-10", "unlimited"]


def test_new_session_starts_empty():
    session = QuizSession()
    assert session.current_step == 0
    assert session.progress == 20
    assert not session.can_proceed
    assert not session.answers.is_complete()


def test_cannot_advance_without_answer():
    session = QuizSession()
    with pytest.raises(StepNotAnsweredError):
        session.advance()
    assert session.current_step == 0


def test_answer_then_advance():
    session = QuizSession()
    session.answer("primaryUse", "gaming")
    assert session.can_proceed
    session.advance()
    assert session.current_step == 1
    assert session.progress == 40
    assert session.answers.primary_use is PrimaryUse.gaming


def test_last_step_shows_results():
    session = QuizSession()
    _complete(session)
    assert session.show_results
    assert session.current_step == 4
    assert session.answers.location is Region.europe
    assert session.answers.is_complete()


def test_back_from_results_returns_to_last_step():
    session = QuizSession()
    _complete(session)
    session.go_back()
    assert not session.show_results
    assert session.current_step == 4
    session.go_back()
    assert session.current_step == 3


def test_back_never_goes_below_first_step():
    session = QuizSession()
    session.go_back()
    assert session.current_step == 0


def test_reset_clears_everything():
    session = QuizSession()
    _complete(session)
    session.reset()
    assert session.current_step == 0
    assert not session.show_results
    assert session.answers.missing_fields() == QUESTION_IDS


def test_invalid_option_rejected():
    session = QuizSession()
    with pytest.raises(InvalidAnswerError):
        session.answer("budget", "lavish")
    assert session.answers.budget is None


def test_unknown_question_rejected():
    with pytest.raises(InvalidAnswerError):
        QuizSession().answer("favouriteColour", "blue")


def test_describe_hides_question_on_results():
    session = QuizSession()
    assert describe(session).question.id == "primaryUse"
    _complete(session)
    state = describe(session)
    assert state.question is None
    assert state.show_results


def test_session_round_trips_through_json():
    session = QuizSession()
    session.answer("devices", "6-10")
    restored = QuizSession.model_validate(session.model_dump(mode="json"))
    assert restored == session
