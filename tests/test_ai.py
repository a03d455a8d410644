import random
from datetime import datetime
from types import SimpleNamespace

from growth_diary.ai.prompts import GOAL_TIPS, MOTIVATION_TIPS, TODO_TIPS, build_prompt
from growth_diary.ai.quotes import QUOTES, get_motivational_quote, quotes_for_hour
from growth_diary.ai.service import CuratedTipService, OpenAITipService
from growth_diary.core.dependency import get_tip_service
from main import app


class FakeCompletions:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _fake_client(completions):
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))


def test_tips_require_session(client):
    assert client.post("/api/ai/tips", json={"context": "todos"}).status_code == 401
    assert client.get("/api/ai/quote").status_code == 401


def test_curated_tips_without_api_key(auth_client):
    alice = auth_client()
    resp = alice.post("/api/ai/tips", json={"context": "todos", "items": [{"title": "x", "priority": "high"}]})
    assert resp.status_code == 200
    body = resp.json()
    assert body["source"] == "curated"
    tips = body["tips"].split("\n\n")
    assert len(tips) == 3
    assert set(tips) <= set(TODO_TIPS)


def test_missing_context_means_motivation(auth_client):
    alice = auth_client()
    tips = alice.post("/api/ai/tips", json={}).json()["tips"].split("\n\n")
    assert set(tips) <= set(MOTIVATION_TIPS)


def test_tips_use_completion_api(auth_client):
    completions = FakeCompletions(content="1. Start small")
    service = OpenAITipService(client=_fake_client(completions), model="test-model")
    app.dependency_overrides[get_tip_service] = lambda: service

    alice = auth_client()
    resp = alice.post("/api/ai/tips", json={"context": "goals", "items": [{"title": "Run", "progress": 20}]})
    assert resp.json() == {"tips": "1. Start small", "source": "ai"}

    call = completions.calls[0]
    assert call["model"] == "test-model"
    assert call["max_tokens"] == 300
    assert "Run (Progress: 20%" in call["messages"][1]["content"]


def test_completion_failure_falls_back_to_curated():
    completions = FakeCompletions(error=RuntimeError("quota exceeded"))
    service = OpenAITipService(
        client=_fake_client(completions),
        fallback=CuratedTipService(random.Random(1)),
    )
    result = service.get_tips("goals", [])
    assert result["source"] == "curated"
    assert set(result["tips"].split("\n\n")) <= set(GOAL_TIPS)


def test_motivation_prompt_reads_counters():
    prompt = build_prompt("motivation", {"pendingCount": 4, "goalCount": 2})
    assert "4 tasks pending" in prompt
    assert "2 active goals" in prompt


def test_todo_prompt_ignores_non_list_items():
    assert build_prompt("todos", {"pendingCount": 1}).startswith("I have these tasks")


def test_quotes_endpoints(auth_client):
    alice = auth_client()
    quote = alice.get("/api/ai/quote").json()
    assert {"text", "author"} == set(quote)
    assert alice.get("/api/ai/quote/random").json() in QUOTES


def test_quotes_follow_time_of_day():
    morning = quotes_for_hour(8)
    assert morning
    assert all(any(k in q["text"].lower() for k in ("start", "begin", "today")) for q in morning)
    assert get_motivational_quote(datetime(2026, 1, 1, 20, 0)) in quotes_for_hour(20)
