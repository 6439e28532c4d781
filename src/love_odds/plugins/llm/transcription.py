"""Speech-to-text client for the model provider's audio transcription API."""

import logging

import httpx
from pydantic import ValidationError

from love_odds.core.errors import NetworkError, UpstreamTranscriptionError
from love_odds.core.models.input import AudioStory
from love_odds.interfaces.llm import TranscriptionPort
from love_odds.schemas.llm import TranscriptionResponse

logger = logging.getLogger(__name__)


class WhisperTranscriptionClient(TranscriptionPort):
    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str,
        api_key: str,
        model: str = "whisper-1",
        timeout: float = 60.0,
    ):
        self.client = client
        self.base_url = base_url
        self._api_key = api_key
        self.model = model
        self.timeout = timeout

    @property
    def _headers(self) -> dict:
        return {"Authorization": f"Bearer {self._api_key}"}

    async def transcribe(self, audio: AudioStory) -> str:
        if not audio.data:
            raise UpstreamTranscriptionError("The recorded audio is empty.")

        logger.info(
            f"Transcribing {len(audio.data)} bytes of {audio.mime_type} "
            f"with {self.model}"
        )
        try:
            response = await self.client.post(
                f"{self.base_url}/audio/transcriptions",
                files={"file": (audio.filename, audio.data, audio.mime_type)},
                data={"model": self.model},
                headers=self._headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise UpstreamTranscriptionError(
                f"Transcription returned HTTP {e.response.status_code}"
            ) from e
        except httpx.RequestError as e:
            raise NetworkError(f"Transcription request failed: {e!r}") from e

        try:
            result = TranscriptionResponse(**response.json())
        except (ValueError, ValidationError) as e:
            raise UpstreamTranscriptionError(
                "Transcription response could not be parsed"
            ) from e

        text = result.text.strip()
        if not text:
            raise UpstreamTranscriptionError("Transcription came back empty")

        logger.info(f"Transcription complete. Length: {len(text)}")
        return text

    async def check_health(self) -> bool:
        try:
            resp = await self.client.get(
                f"{self.base_url}/models/{self.model}",
                headers=self._headers,
                timeout=3.0,
            )
            return resp.status_code == 200
        except httpx.HTTPError as e:
            logger.warning(f"Transcription health check failed: {e!r}")
            return False
