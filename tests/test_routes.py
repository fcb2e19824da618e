from __future__ import annotations

import pytest
from conftest import SAMPLE_STORY, FakeModelClient, scripted_responder
from fastapi.testclient import TestClient

from app.main import app
from app.routes.story_analysis import get_story_analyzer
from app.services.story_analysis import StoryAnalyzer
from app.utils.model_settings import ModelSettings

ANALYSIS_URL = "/story-perspectives/api/v1/story-analysis"


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


def _use_responder(responder) -> None:
    analyzer = StoryAnalyzer(client=FakeModelClient(responder), model_settings=ModelSettings(environ={}))
    app.dependency_overrides[get_story_analyzer] = lambda: analyzer


def test_root_and_health(client) -> None:
    assert client.get("/").json()["message"] == "Welcome to Story Perspectives API"
    health = client.get("/story-perspectives/utils/health")
    assert health.status_code == 200
    assert health.json()["status"] == "healthy"


def test_analyze_returns_camel_case_result(client) -> None:
    _use_responder(scripted_responder())

    response = client.post(ANALYSIS_URL, json={"story_text": SAMPLE_STORY})

    assert response.status_code == 200
    body = response.json()
    assert [c["name"] for c in body["characters"]] == ["Rowan", "Leira"]
    assert body["characters"][0]["confidenceScore"] == 90
    assert body["characters"][0]["profile"]["emotionalBaseline"]["primary"] == "fear"
    event = body["events"][0]
    assert event["timePosition"] == 10
    assert event["characterPerspectives"]["Rowan"]["perceptionAccuracy"] == 88
    assert body["relationshipGraph"]["edges"] == []


def test_failed_analysis_returns_single_error(client) -> None:
    _use_responder(scripted_responder(characters_text="No characters here."))

    response = client.post(ANALYSIS_URL, json={"story_text": SAMPLE_STORY})

    assert response.status_code == 502
    detail = response.json()["detail"]
    assert detail["type"] == "STORY_ANALYSIS_FAILED"
    assert detail["stage"] == "character_identification"
    assert detail["troubleshooting"]
    assert "characters" not in response.json()


def test_missing_api_key_is_a_configuration_error(client, monkeypatch) -> None:
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

    response = client.post(ANALYSIS_URL, json={"story_text": SAMPLE_STORY})

    assert response.status_code == 500
    assert response.json()["detail"]["type"] == "CONFIGURATION_ERROR"


def test_blank_story_is_rejected(client) -> None:
    _use_responder(scripted_responder())
    assert client.post(ANALYSIS_URL, json={"story_text": "  "}).status_code == 422


def test_timeline_view_round_trip(client) -> None:
    _use_responder(scripted_responder())
    analysis = client.post(ANALYSIS_URL, json={"story_text": SAMPLE_STORY}).json()

    response = client.post(
        f"{ANALYSIS_URL}/timeline", json={"result": analysis, "selected_character": "Leira"}
    )

    assert response.status_code == 200
    view = response.json()
    assert view["selectedCharacter"] == "Leira"
    assert [t["event"]["title"] for t in view["events"]] == ["Arrival", "Discovery"]
    assert all(list(t["event"]["characterPerspectives"]) == ["Leira"] for t in view["events"])
    assert view["emotionColors"]["anger"] == "bg-red-500"


def test_timeline_unknown_character(client) -> None:
    _use_responder(scripted_responder())
    analysis = client.post(ANALYSIS_URL, json={"story_text": SAMPLE_STORY}).json()

    response = client.post(
        f"{ANALYSIS_URL}/timeline", json={"result": analysis, "selected_character": "Nobody"}
    )
    assert response.status_code == 404
    assert response.json()["detail"]["type"] == "CHARACTER_NOT_FOUND"


def test_model_check_without_key(client, monkeypatch) -> None:
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    response = client.get("/story-perspectives/utils/model-check")
    assert response.status_code == 500
    assert response.json()["detail"]["type"] == "CONFIGURATION_ERROR"
