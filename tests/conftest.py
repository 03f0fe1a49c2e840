import random

import pytest
from fastapi.testclient import TestClient

from fourth_facts.config import Settings
from fourth_facts.main import app
from fourth_facts.responses.builder import DATA_CONTEXT
from fourth_facts.webhook.parser import SCREEN_OUTPUT

TEST_SETTINGS = Settings(
    log_level="DEBUG",
    log_json=False,
    log_file="",
    log_requests=True,
)


@pytest.fixture
def settings() -> Settings:
    return TEST_SETTINGS


@pytest.fixture
def rng() -> random.Random:
    return random.Random(4)


# --- Sync fixture for TestClient-based integration tests ---


@pytest.fixture
def client(settings: Settings) -> TestClient:
    app.state.settings = settings
    app.state.rng = random.Random(4)

    yield TestClient(app, raise_server_exceptions=False)

    app.state.rng = None


def make_turn_payload(
    action: str = "say_fourth_fact",
    category: str | None = "history",
    data: dict | str | None = None,
    raw_input: str = "tell me about Fourth",
    screen: bool = False,
    extra_contexts: list[dict] | None = None,
) -> dict:
    parameters: dict = {}
    if category is not None:
        parameters["category"] = category

    contexts: list[dict] = list(extra_contexts or [])
    if data is not None:
        contexts.append({"name": DATA_CONTEXT, "lifespan": 99, "parameters": {"data": data}})

    capabilities = [{"name": "actions.capability.AUDIO_OUTPUT"}]
    if screen:
        capabilities.append({"name": SCREEN_OUTPUT})

    return {
        "id": "c5f5a1b8-0a4e-4a8c-9d4c-1a2b3c4d5e6f",
        "timestamp": "2017-03-01T12:00:00.000Z",
        "lang": "en",
        "result": {
            "source": "agent",
            "resolvedQuery": raw_input,
            "action": action,
            "parameters": parameters,
            "contexts": contexts,
            "metadata": {"intentName": action},
        },
        "originalRequest": {
            "source": "google",
            "version": "2",
            "data": {
                "surface": {"capabilities": capabilities},
                "inputs": [{"intent": "actions.intent.TEXT", "rawInputs": [{"query": raw_input}]}],
            },
        },
        "sessionId": "1488379200000",
    }


def output_context(body: dict, name: str) -> dict | None:
    for context in body.get("contextOut", []):
        if context["name"] == name:
            return context
    return None


def remembered_data(body: dict) -> dict:
    context = output_context(body, DATA_CONTEXT)
    assert context is not None
    return context["parameters"]["data"]
