import httpx
from fastapi import Request

from love_odds.core.config import Settings
from love_odds.core.engine.analysis_engine import AnalysisEngine
from love_odds.interfaces.external import CityLookupPort
from love_odds.plugins.external.http_client import CityLookupHTTPClient
from love_odds.plugins.llm.adapter import StoryChatModel
from love_odds.plugins.llm.transcription import WhisperTranscriptionClient


def build_analysis_engine(
    config: Settings, http_client: httpx.AsyncClient
) -> AnalysisEngine:
    api_key = config.require_openai_api_key()
    return AnalysisEngine(
        transcriber=WhisperTranscriptionClient(
            client=http_client,
            base_url=config.OPENAI_BASE_URL,
            api_key=api_key,
            model=config.TRANSCRIPTION_MODEL,
            timeout=config.TRANSCRIPTION_TIMEOUT_SECONDS,
        ),
        llm=StoryChatModel(
            client=http_client,
            base_url=config.OPENAI_BASE_URL,
            api_key=api_key,
            model=config.ANALYSIS_MODEL,
            timeout=config.GENERATION_TIMEOUT_SECONDS,
        ),
    )


def build_city_client(
    config: Settings, http_client: httpx.AsyncClient
) -> CityLookupHTTPClient:
    return CityLookupHTTPClient(
        client=http_client,
        api_key=config.require_city_api_key(),
        base_url=config.CITY_API_URL,
        limit=config.CITY_SEARCH_LIMIT,
        timeout=config.CITY_SEARCH_TIMEOUT_SECONDS,
        default_population=config.CITY_DEFAULT_POPULATION,
    )


def get_analysis_engine(request: Request) -> AnalysisEngine:
    """Dependency to get the analysis engine built at startup."""
    return request.app.state.engine


def get_city_client(request: Request) -> CityLookupPort:
    return request.app.state.city_client
