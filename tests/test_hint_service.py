import json

import pytest
import requests

from anniverswordlary.config.game_settings import (
    FALLBACK_DEFINITION, FALLBACK_EXAMPLE, FALLBACK_HINT, PRESET_HINTS
)
from anniverswordlary.services import hint_service as hint_module
from anniverswordlary.services.hint_service import HintService


class FakeResponse:
    def __init__(self, body, status_code=200):
        self.body = body
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if isinstance(self.body, Exception):
            raise self.body
        return self.body


def gemini_body(text):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


@pytest.fixture
def calls(monkeypatch):
    """Records requests.post calls and replays queued responses."""
    recorded = {'requests': [], 'responses': []}

    def fake_post(url, json=None, headers=None, timeout=None):
        recorded['requests'].append({'url': url, 'json': json, 'headers': headers, 'timeout': timeout})
        response = recorded['responses'].pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    monkeypatch.setattr(hint_module.requests, "post", fake_post)
    return recorded


def test_preset_hint_skips_network(calls):
    service = HintService(api_key="key")
    assert service.get_hint("gossip", ["PLAYER"]) == PRESET_HINTS["GOSSIP"]
    assert calls['requests'] == []


def test_without_api_key_uses_fallback(calls):
    service = HintService(api_key=None)
    assert not service.enabled
    assert service.get_hint("BRIDGE", []) == FALLBACK_HINT
    assert calls['requests'] == []


def test_hint_from_language_model(calls):
    calls['responses'].append(FakeResponse(gemini_body("  It spans a river.  ")))
    service = HintService(api_key="key", model="test-model", timeout=3)

    hint = service.get_hint("BRIDGE", ["PLAYER", "GARDEN"])

    assert hint == "It spans a river."
    sent = calls['requests'][0]
    assert "test-model" in sent['url']
    assert sent['headers']["x-goog-api-key"] == "key"
    assert sent['timeout'] == 3
    prompt = sent['json']["contents"][0]["parts"][0]["text"]
    assert "BRIDGE" in prompt
    assert "PLAYER, GARDEN" in prompt


@pytest.mark.parametrize("response", [
    requests.ConnectionError("unreachable"),
    FakeResponse({}, status_code=503),
    FakeResponse({"candidates": []}),
    FakeResponse(gemini_body("   ")),
    FakeResponse(ValueError("not json")),
])
def test_hint_failures_fall_back(calls, response):
    calls['responses'].append(response)
    service = HintService(api_key="key")

    assert service.get_hint("BRIDGE", []) == FALLBACK_HINT


def test_initial_hint():
    service = HintService()
    assert service.initial_hint("GOSSIP") == PRESET_HINTS["GOSSIP"]
    assert service.initial_hint("BRIDGE") is None


def test_word_details_parsed_from_json(calls):
    details = {"word": "GOSSIP", "definition": "Idle talk", "example": "Pure gossip.", "etymology": "Old English godsibb"}
    calls['responses'].append(FakeResponse(gemini_body(json.dumps(details))))
    service = HintService(api_key="key")

    info = service.get_word_details("GOSSIP")

    assert info.definition == "Idle talk"
    assert info.etymology == "Old English godsibb"
    assert calls['requests'][0]['json']["generationConfig"]["responseMimeType"] == "application/json"


@pytest.mark.parametrize("text", ["not json", "[1, 2]", json.dumps({"word": "GOSSIP"})])
def test_word_details_fall_back_on_bad_payload(calls, text):
    calls['responses'].append(FakeResponse(gemini_body(text)))
    service = HintService(api_key="key")

    info = service.get_word_details("GOSSIP")

    assert info.word == "GOSSIP"
    assert info.definition == FALLBACK_DEFINITION
    assert info.example == FALLBACK_EXAMPLE
    assert info.etymology is None


def test_word_details_without_api_key():
    info = HintService().get_word_details("GOSSIP")
    assert info.definition == FALLBACK_DEFINITION
