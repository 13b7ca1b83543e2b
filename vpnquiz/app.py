from __future__ import annotations

import logging
import os

from fastapi import FastAPI, HTTPException, Request
from pydantic import ValidationError
from starlette.middleware.sessions import SessionMiddleware

from .analytics.aggregator import compute_quiz_analytics
from .analytics.completions import get_completions, record_completion
from .catalog.data_store import get_provider_by_slug, get_providers
from .catalog.models import ProviderRecord
from .errors import (
    IncompleteAnswersError,
    InvalidAnswerError,
    MalformedProviderError,
    StepNotAnsweredError,
)
from .quiz.config import DEFAULT_QUIZ_CONFIG
from .quiz.models import (
    AnswerRequest,
    QuestionOut,
    QuizAnswers,
    QuizResultsResponse,
    QuizStateOut,
    ScoredResult,
    ScoreResponse,
)
from .quiz.results import build_result_card, top_matches
from .quiz.scoring import score
from .quiz.wizard import QuizSession, describe, list_questions

logger = logging.getLogger(__name__)

app = FastAPI(title="VPN Recommendation Quiz API", version="1.0.0")
app.add_middleware(
    SessionMiddleware,
    secret_key=os.environ.get("VPNQUIZ_SESSION_SECRET", "vpnquiz-secret-change-in-production"),
)


def _load_session(request: Request) -> QuizSession:
    raw_state = request.session.get(DEFAULT_QUIZ_CONFIG.session_key)
    if not raw_state:
        return QuizSession()
    try:
        return QuizSession.model_validate(raw_state)
    except ValidationError:
        logger.warning("Discarding unreadable quiz session state", exc_info=True)
        return QuizSession()


def _save_session(request: Request, session: QuizSession) -> QuizStateOut:
    request.session[DEFAULT_QUIZ_CONFIG.session_key] = session.model_dump(mode="json")
    return describe(session)


def _incomplete(exc: IncompleteAnswersError, status_code: int) -> HTTPException:
    return HTTPException(
        status_code=status_code,
        detail={"message": str(exc), "missing": exc.missing},
    )


def _rank(answers: QuizAnswers) -> list[ScoredResult]:
    try:
        return score(get_providers(), answers)
    except MalformedProviderError as exc:
        logger.error("Provider catalog is malformed: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc


# ── Catalog endpoints ────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/providers", response_model=list[ProviderRecord])
def providers() -> list[ProviderRecord]:
    return get_providers()


@app.get("/providers/{slug}", response_model=ProviderRecord)
def provider_detail(slug: str) -> ProviderRecord:
    provider = get_provider_by_slug(slug)
    if provider is None:
        raise HTTPException(status_code=404, detail=f"Unknown provider {slug!r}")
    return provider


# ── Quiz wizard endpoints ────────────────────────────────────────────────


@app.get("/quiz/questions", response_model=list[QuestionOut])
def quiz_questions() -> list[QuestionOut]:
    return list_questions()


@app.get("/quiz", response_model=QuizStateOut)
def quiz_state(request: Request) -> QuizStateOut:
    return describe(_load_session(request))


@app.post("/quiz/answer", response_model=QuizStateOut)
def quiz_answer(body: AnswerRequest, request: Request) -> QuizStateOut:
    session = _load_session(request)
    try:
        session.answer(body.question_id, body.value)
    except InvalidAnswerError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return _save_session(request, session)


@app.post("/quiz/next", response_model=QuizStateOut)
def quiz_next(request: Request) -> QuizStateOut:
    session = _load_session(request)
    try:
        session.advance()
    except StepNotAnsweredError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return _save_session(request, session)


@app.post("/quiz/back", response_model=QuizStateOut)
def quiz_back(request: Request) -> QuizStateOut:
    session = _load_session(request)
    session.go_back()
    return _save_session(request, session)


@app.post("/quiz/reset", response_model=QuizStateOut)
def quiz_reset(request: Request) -> QuizStateOut:
    session = _load_session(request)
    session.reset()
    return _save_session(request, session)


@app.get("/quiz/results", response_model=QuizResultsResponse)
def quiz_results(request: Request) -> QuizResultsResponse:
    session = _load_session(request)
    try:
        ranked = _rank(session.answers)
    except IncompleteAnswersError as exc:
        raise _incomplete(exc, status_code=409) from exc

    record_completion(session.answers, ranked)

    top = top_matches(ranked, DEFAULT_QUIZ_CONFIG.results_limit)
    return QuizResultsResponse(
        results=[build_result_card(result, rank) for rank, result in enumerate(top)],
        total_candidates=len(ranked),
    )


# ── Stateless scoring ────────────────────────────────────────────────────


@app.post("/quiz/score", response_model=ScoreResponse)
def quiz_score(body: QuizAnswers) -> ScoreResponse:
    try:
        ranked = _rank(body)
    except IncompleteAnswersError as exc:
        raise _incomplete(exc, status_code=422) from exc
    return ScoreResponse(results=ranked, total_candidates=len(ranked))


@app.get("/quiz/stats")
def quiz_stats() -> dict:
    return compute_quiz_analytics(get_completions())
