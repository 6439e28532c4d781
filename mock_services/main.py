import json
from typing import Any, Dict, List

from fastapi import FastAPI, Query, Request

app = FastAPI(title="Love Odds Mock Services")

# Point the app at this server with:
#   OPENAI_BASE_URL=http://localhost:8090/v1
#   CITY_API_URL=http://localhost:8090/v1/city

MOCK_ANALYSIS: Dict[str, Any] = {
    "events": [
        {
            "circumstance": "Both ordering coffee at the same shop",
            "conditions": [
                {"description": "Choosing the same coffee shop", "oneInX": 120},
                {"description": "Arriving within the same ten minutes", "oneInX": 72},
            ],
        },
        {
            "circumstance": "Striking up a conversation",
            "conditions": [
                {"description": "Being single at the same time", "oneInX": 3},
            ],
        },
    ],
    "finalOneInX": 25920,
    "summary": "A quiet morning routine turned into a remarkable coincidence.",
}

MOCK_CITIES: List[Dict[str, Any]] = [
    {
        "name": "London",
        "latitude": 51.5072,
        "longitude": -0.1275,
        "country": "GB",
        "population": 8961989,
        "is_capital": True,
    },
    {
        "name": "Paris",
        "latitude": 48.8566,
        "longitude": 2.3522,
        "country": "FR",
        "population": 2148000,
        "is_capital": True,
    },
    {
        "name": "Parma",
        "latitude": 44.8015,
        "longitude": 10.3279,
        "country": "IT",
        "is_capital": False,
    },
]


@app.post("/v1/audio/transcriptions")
async def transcribe(request: Request):
    body = await request.body()
    print(f"[STT] Received {len(body)} bytes")
    return {"text": "We met at a coffee shop in a city of 500,000 people."}


@app.post("/v1/chat/completions")
async def chat_completions(request: Dict[str, Any]):
    print(f"[LLM] Analysing story: {request.get('messages', [])[-1:]}")
    return {
        "id": "chatcmpl-mock-123",
        "object": "chat.completion",
        "created": 1677652288,
        "model": request.get("model", "gpt-4o"),
        "choices": [
            {
                "index": 0,
                "message": {
                    "role": "assistant",
                    "content": json.dumps(MOCK_ANALYSIS),
                },
                "finish_reason": "stop",
            }
        ],
    }


@app.get("/v1/models")
async def list_models():
    return {"object": "list", "data": [{"id": "gpt-4o"}, {"id": "whisper-1"}]}


@app.get("/v1/models/{model_id}")
async def get_model(model_id: str):
    return {"id": model_id, "object": "model"}


@app.get("/v1/city")
async def search_city(name: str = Query(...)):
    print(f"[City] Searching for {name}")
    return [c for c in MOCK_CITIES if c["name"].lower().startswith(name.lower())]


@app.get("/health")
async def health():
    return {"status": "ok"}
