import json

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient, Response

from love_odds.core.config import Settings
from love_odds.core.deps import build_analysis_engine, build_city_client
from love_odds.core.models.input import AudioStory
from love_odds.interfaces.recorder import AudioSource
from love_odds.main import app

OPENAI_URL = "https://llm.test/v1"
CITY_URL = "https://cities.test/v1/city"

SAMPLE_STORY = "We met at a coffee shop in a city of 500,000 people"

SAMPLE_ANALYSIS = {
    "events": [
        {
            "circumstance": "Meeting at the coffee shop",
            "conditions": [
                {"description": "Picking the same coffee shop", "oneInX": 50},
                {"description": "Being there the same morning", "oneInX": 30},
            ],
        },
        {
            "circumstance": "Living in the same city",
            "conditions": [
                {"description": "Both living in a city of 500,000", "oneInX": 400},
            ],
        },
    ],
    "finalOneInX": 600000,
    "summary": "A routine coffee run became a once-in-a-lifetime meeting.",
}

SAMPLE_CITIES = [
    {
        "name": "Paris",
        "latitude": 48.8566,
        "longitude": 2.3522,
        "country": "FR",
        "population": 2148000,
        "is_capital": True,
    },
    {"name": "Parma", "country": "IT"},
]


def create_chat_completion_response(content: str) -> dict:
    return {
        "id": "chatcmpl-mock",
        "object": "chat.completion",
        "created": 1234567890,
        "model": "gpt-4o",
        "choices": [
            {
                "index": 0,
                "message": {
                    "role": "assistant",
                    "content": content,
                },
                "finish_reason": "stop",
            }
        ],
    }


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        _env_file=None,
        OPENAI_API_KEY="test-openai-key",
        OPENAI_BASE_URL=OPENAI_URL,
        CITY_API_KEY="test-city-key",
        CITY_API_URL=CITY_URL,
    )


@pytest.fixture
def http_client():
    # Upstream traffic never leaves respx, so the client holds no connections.
    return httpx.AsyncClient()


@pytest.fixture
def analysis_engine(test_settings, http_client):
    return build_analysis_engine(test_settings, http_client)


@pytest.fixture
def city_client(test_settings, http_client):
    return build_city_client(test_settings, http_client)


@pytest.fixture(autouse=True)
def override_dependencies(analysis_engine, city_client):
    """
    The lifespan is skipped under ASGITransport, so wire the state by hand.
    """
    app.state.engine = analysis_engine
    app.state.city_client = city_client
    yield
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def mock_external_services(respx_mock):
    """
    Intercepts every upstream call made by the adapters.
    """
    respx_mock.post(f"{OPENAI_URL}/audio/transcriptions", name="transcription").mock(
        return_value=Response(200, json={"text": SAMPLE_STORY})
    )

    respx_mock.post(f"{OPENAI_URL}/chat/completions", name="chat").mock(
        return_value=Response(
            200, json=create_chat_completion_response(json.dumps(SAMPLE_ANALYSIS))
        )
    )

    respx_mock.get(f"{OPENAI_URL}/models").mock(
        return_value=Response(200, json={"object": "list", "data": []})
    )
    respx_mock.get(f"{OPENAI_URL}/models/whisper-1").mock(
        return_value=Response(200, json={"id": "whisper-1", "object": "model"})
    )

    respx_mock.get(CITY_URL, name="cities").mock(
        return_value=Response(200, json=SAMPLE_CITIES)
    )

    return respx_mock


@pytest_asyncio.fixture(scope="function")
async def client():
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as c:
        yield c


class FakeAudioSource(AudioSource):
    def __init__(self, data: bytes = b"fake-webm-bytes"):
        self.data = data
        self.started = 0
        self.aborted = 0

    async def start(self) -> None:
        self.started += 1

    async def stop(self) -> AudioStory:
        return AudioStory(data=self.data)

    async def abort(self) -> None:
        self.aborted += 1
