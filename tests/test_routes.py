"""Tests for the HTTP API: every endpoint takes the game state from the body
and returns the updated document."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from backend.app import create_app
from backend.config import get_config
from backend.llm import EchoLLM, HttpLLM, LLMError

QUESTION = "What is the meaning of discipline and consistency in daily life?"


class FailingLLM:
    async def __call__(self, prompt, system=""):
        raise LLMError("Cannot connect to LLM backend at http://nowhere")


class RecordingLLM:
    def __init__(self):
        self.calls = []

    async def __call__(self, prompt, system=""):
        self.calls.append((prompt, system))
        return "Discipline is choosing what you want most."


@pytest.fixture
def config():
    return get_config({})


@pytest.fixture
def client(config):
    return TestClient(create_app(config=config, llm=EchoLLM()))


def _client(config, llm):
    return TestClient(create_app(config=config, llm=llm))


def test_health(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


# ── chat ────────────────────────────────────────────────────


def test_chat_without_state_starts_a_new_game(client):
    resp = client.post("/api/chat", json={"message": QUESTION, "gameState": None})
    assert resp.status_code == 200
    data = resp.json()
    assert data["error"] is None
    assert data["reply"] == QUESTION
    assert data["award"]["xp"] == 25
    assert data["award"]["streak"] == 1
    player = data["gameState"]["player"]
    assert player["xp"] == 25
    assert player["statistics"]["totalMessages"] == 1
    assert len(data["gameState"]["dailyQuests"]) == 3


def test_chat_accumulates_on_returned_state(client):
    first = client.post("/api/chat", json={"message": QUESTION}).json()
    second = client.post("/api/chat", json={"message": QUESTION, "gameState": first["gameState"]}).json()
    assert second["gameState"]["player"]["xp"] == 50
    assert second["gameState"]["player"]["statistics"]["totalMessages"] == 2


def test_chat_short_message_awards_nothing(client):
    data = client.post("/api/chat", json={"message": "hello"}).json()
    assert data["award"]["xp"] == 0
    assert data["reply"] == "hello"
    assert data["gameState"]["player"]["statistics"]["totalMessages"] == 0


def test_chat_empty_message(client):
    data = client.post("/api/chat", json={"message": "   "}).json()
    assert data["reply"] is None
    assert data["error"] == "Message is empty"
    assert data["award"]["xp"] == 0


def test_chat_llm_failure_keeps_progress(config):
    data = _client(config, FailingLLM()).post("/api/chat", json={"message": QUESTION}).json()
    assert data["reply"] is None
    assert "Cannot connect" in data["error"]
    assert data["award"]["xp"] == 25
    assert data["gameState"]["player"]["xp"] == 25


@pytest.mark.parametrize("provider_body", [[], {"choices": ["x"]}, {"choices": [None]}])
def test_chat_malformed_provider_reply_keeps_progress(config, provider_body):
    resp = MagicMock()
    resp.json.return_value = provider_body
    llm = HttpLLM(provider_url="http://localhost:8080")
    with patch("httpx.AsyncClient.post", AsyncMock(return_value=resp)):
        http_resp = _client(config, llm).post("/api/chat", json={"message": QUESTION})
    assert http_resp.status_code == 200
    data = http_resp.json()
    assert data["reply"] is None
    assert "Unexpected response format" in data["error"]
    assert data["award"]["xp"] == 25
    assert data["gameState"]["player"]["xp"] == 25


def test_chat_sends_rendered_system_prompt(config):
    llm = RecordingLLM()
    state = _client(config, EchoLLM()).get("/api/game-status").json()
    state["player"]["name"] = "Robin"
    data = _client(config, llm).post("/api/chat", json={"message": QUESTION, "gameState": state}).json()
    assert data["reply"] == "Discipline is choosing what you want most."
    prompt, system = llm.calls[0]
    assert prompt == QUESTION
    assert "talking to Robin" in system
    assert "1-day streak" in system


def test_chat_broken_system_prompt_is_sent_raw():
    config = get_config({"SYSTEM_PROMPT": "Be nice {{> nope}}"})
    llm = RecordingLLM()
    _client(config, llm).post("/api/chat", json={"message": QUESTION})
    assert llm.calls[0][1] == "Be nice {{> nope}}"


def test_chat_repairs_partial_state(client):
    data = client.post("/api/chat", json={"message": QUESTION, "gameState": {"player": {"name": "Robin"}}}).json()
    player = data["gameState"]["player"]
    assert player["name"] == "Robin"
    assert player["xp"] == 25
    assert player["stats"]["health"] == 100


# ── game panels ─────────────────────────────────────────────


def test_stats(client):
    data = client.post("/api/stats", json={"gameState": None}).json()
    assert data["player"]["level"] == 1
    assert data["title"]["name"] == "Curious Beginner"
    assert data["title"]["nextTitle"] == "Thoughtful Learner"
    assert data["streaks"] == {"current": 0, "longest": 0}
    assert data["badges"]["totalEarned"] == 0
    assert data["badges"]["totalAvailable"] == 15


def test_badges(client):
    state = client.get("/api/game-status").json()
    state["player"]["badges"] = ["flame-on"]
    data = client.post("/api/badges", json={"gameState": state}).json()
    assert [b["key"] for b in data["earned"]] == ["flame-on"]
    assert len(data["locked"]) == 14


def test_daily_quests(client):
    data = client.post("/api/daily-quests", json={}).json()
    assert data["totalQuests"] == 3
    assert data["completedCount"] == 0
    assert data["gameState"]["dailyQuests"] == data["quests"]

    again = client.post("/api/daily-quests", json={"gameState": data["gameState"]}).json()
    assert again["quests"] == data["quests"]


def test_weekly_quests(client):
    data = client.post("/api/weekly-quests", json={}).json()
    assert data["totalQuests"] == 3
    assert data["gameState"]["weeklyQuests"] == data["quests"]
    assert data["gameState"]["weekStartDate"]


def test_game_status_and_reset(client):
    status = client.get("/api/game-status").json()
    reset = client.post("/api/game-reset").json()
    for state in (status, reset):
        assert state["player"]["name"] == "Adventurer"
        assert state["player"]["personalityType"] == "Unknown"
        assert state["dailyQuests"] == []


# ── profile ─────────────────────────────────────────────────


def test_quiz_questions(client):
    data = client.get("/api/quiz").json()
    assert len(data) == 10
    assert data[0] == {"id": 1, "text": "I make friends easily.", "stat": "energy", "weight": 10}


def test_quiz_submit_merges_once(client):
    data = client.post("/api/quiz", json={"answers": [5] * 10}).json()
    assert data["code"] == "ESFJ"
    assert data["merged"] is True
    assert data["gameState"]["player"]["personalityType"] == "ESFJ"
    assert data["gameState"]["player"]["stats"]["energy"] == 90

    again = client.post("/api/quiz", json={"answers": [1] * 10, "gameState": data["gameState"]}).json()
    assert again["code"] == "INTP"
    assert again["merged"] is False
    assert again["gameState"]["player"]["personalityType"] == "ESFJ"


@pytest.mark.parametrize("answers", [[3] * 9, [3] * 9 + [6], [0] * 10])
def test_quiz_rejects_bad_answers(client, answers):
    resp = client.post("/api/quiz", json={"answers": answers})
    assert resp.status_code == 422


def test_init_profile(client):
    body = {"stats": {"energy": 72.4, "focus": 10}, "personalityType": "ENFP"}
    data = client.post("/api/init-profile", json=body).json()
    assert data["success"] is True
    assert data["merged"] is True
    assert data["player"]["personalityType"] == "ENFP"
    assert data["player"]["stats"]["energy"] == 72
    assert data["player"]["stats"]["focus"] == 50


def test_init_profile_without_code_leaves_profile_open(client):
    data = client.post("/api/init-profile", json={"stats": {"energy": 10}}).json()
    assert data["merged"] is False
    assert data["player"]["personalityType"] == "Unknown"
    assert data["player"]["stats"]["energy"] == 100

    body = {"stats": {"energy": 80}, "personalityType": "ENTJ", "gameState": data["gameState"]}
    again = client.post("/api/init-profile", json=body).json()
    assert again["merged"] is True
    assert again["player"]["stats"]["energy"] == 80
