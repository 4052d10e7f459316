import asyncio
import json

import httpx
import pytest

from core.config import settings
from core.exceptions import AIServiceError
from services import ai_service

GPX = "<gpx><trk><trkseg><trkpt lat=\"34.0522\" lon=\"-118.2437\"></trkpt></trkseg></trk></gpx>"


def _chat_response(content):
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


@pytest.fixture(autouse=True)
def api_key(monkeypatch):
    monkeypatch.setattr(settings, "TOGETHER_API_KEY", "test-key")


def test_suggests_named_waypoints():
    seen = {}

    def handler(request):
        seen["body"] = json.loads(request.content)
        seen["auth"] = request.headers["Authorization"]
        content = 'Here you go:\n[{"latitude": 34.05, "longitude": -118.24, "reason": "Campsite near the beach at Malibu"}]'
        return httpx.Response(200, json=_chat_response(content))

    waypoints = asyncio.run(ai_service.suggest_weather_waypoints(GPX, None, transport=httpx.MockTransport(handler)))

    assert seen["auth"] == "Bearer test-key"
    prompt = seen["body"]["messages"][0]["content"]
    assert GPX in prompt
    assert "A bicycle trip." in prompt
    assert len(waypoints) == 1
    assert waypoints[0].latitude == 34.05
    assert waypoints[0].name == "AI Point: Campsite near the be..."


def test_missing_gpx():
    with pytest.raises(ValueError):
        asyncio.run(ai_service.suggest_weather_waypoints(None))


def test_missing_api_key(monkeypatch):
    monkeypatch.setattr(settings, "TOGETHER_API_KEY", None)
    with pytest.raises(AIServiceError):
        asyncio.run(ai_service.suggest_weather_waypoints(GPX))


def test_http_error():
    transport = httpx.MockTransport(lambda request: httpx.Response(503, text="overloaded"))
    with pytest.raises(AIServiceError, match="503"):
        asyncio.run(ai_service.suggest_weather_waypoints(GPX, transport=transport))


@pytest.mark.parametrize("content", [
    "I can't help with that.",
    '[{"latitude": "north", "longitude": 1, "reason": "x"}]',
    "[1, 2, 3]",
])
def test_unusable_answers(content):
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json=_chat_response(content)))
    with pytest.raises(AIServiceError):
        asyncio.run(ai_service.suggest_weather_waypoints(GPX, transport=transport))
