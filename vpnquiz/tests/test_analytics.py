from __future__ import annotations

from fastapi.testclient import TestClient

from vpnquiz.analytics.aggregator import compute_quiz_analytics
from vpnquiz.analytics.completions import clear_completions, get_completions
from vpnquiz.app import app

client = TestClient(app)


def _finish_quiz(c, answers: dict[str, str]) -> None:
    c.post("/quiz/reset")
    for question_id, value in answers.items():
        c.post("/quiz/answer", json={"questionId": question_id, "value": value})
        c.post("/quiz/next")
    c.get("/quiz/results")


STREAMING = {
    "primaryUse": "streaming",
    "budget": "midrange",
    "devices": "3-5",
    "speedPriority": "important",
    "location": "europe",
}


def test_stats_empty_initially():
    clear_completions()
    body = client.get("/quiz/stats").json()
    assert body["total_completions"] == 0
    assert body["avg_top_match_percentage"] == 0.0
    assert body["top_providers"] == []


def test_results_page_records_completion():
    clear_completions()
    _finish_quiz(client, STREAMING)
    completions = get_completions()
    assert len(completions) == 1
    assert completions[0]["answers"]["location"] == "europe"
    assert completions[0]["ranked_slugs"][0] == "nordvpn"


def test_incomplete_quiz_not_recorded():
    clear_completions()
    client.post("/quiz/reset")
    client.get("/quiz/results")
    assert get_completions() == []


def test_stats_aggregate_answers_and_winners():
    clear_completions()
    _finish_quiz(client, STREAMING)
    _finish_quiz(client, dict(STREAMING, location="asia"))
    body = client.get("/quiz/stats").json()
    assert body["total_completions"] == 2
    assert body["answer_distribution"]["location"] == {"europe": 1, "asia": 1}
    assert body["answer_distribution"]["primaryUse"] == {"streaming": 2}
    assert body["top_providers"] == [{"slug": "nordvpn", "count": 2}]
    assert body["avg_top_match_percentage"] == 99.0


def test_aggregator_skips_empty_rankings():
    result = compute_quiz_analytics([
        {"answers": {}, "ranked_slugs": [], "top_match_percentage": None},
    ])
    assert result["total_completions"] == 1
    assert result["top_providers"] == []
    assert result["avg_top_match_percentage"] == 0.0
