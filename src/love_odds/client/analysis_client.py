"""Client side of the story analysis flow."""

import logging
from typing import Any, Dict, Optional, Union

import httpx
from pydantic import ValidationError

from love_odds.core.errors import (
    MalformedResponseError,
    NetworkError,
    RecorderStateError,
    ServerError,
)
from love_odds.core.models.analysis import AnalysisResult
from love_odds.core.models.input import AnalyzeResponse, AudioStory, TextStory
from love_odds.core.recorder import StoryDraft, StoryRecorder
from love_odds.core.render import ResultRenderer

logger = logging.getLogger(__name__)

ANALYZE_PATH = "/api/analyze"


class AnalysisClient:
    def __init__(
        self,
        client: httpx.AsyncClient,
        path: str = ANALYZE_PATH,
        timeout: float = 120.0,
    ):
        self.client = client
        self.path = path
        self.timeout = timeout

    @staticmethod
    def _payload(story: Union[TextStory, AudioStory]) -> Dict[str, Any]:
        if isinstance(story, AudioStory):
            return {"audioData": story.to_data_url()}
        return {"text": story.content}

    async def submit(self, story: Union[TextStory, AudioStory]) -> AnalyzeResponse:
        try:
            response = await self.client.post(
                self.path, json=self._payload(story), timeout=self.timeout
            )
        except httpx.RequestError as e:
            raise NetworkError(f"Could not reach the analysis service: {e!r}") from e

        if not response.is_success:
            raise ServerError(response.status_code, self._error_message(response))

        try:
            return AnalyzeResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise MalformedResponseError("Analysis response could not be read") from e

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and isinstance(body.get("error"), str):
            return body["error"]
        return f"Analysis failed with HTTP {response.status_code}"


class StorySession:
    """
    Holds one user's story, the outstanding request and the latest result.
    Only one submission may be in flight; extra calls are ignored.
    """

    def __init__(
        self,
        client: AnalysisClient,
        recorder: Optional[StoryRecorder] = None,
    ):
        self.client = client
        self.recorder = recorder
        self.draft = StoryDraft()
        self.is_analyzing = False
        self.transcription: Optional[str] = None
        self.analysis: Optional[AnalysisResult] = None
        self.error: Optional[str] = None

    @property
    def can_submit_text(self) -> bool:
        return not self.is_analyzing and not self.draft.is_empty

    def _clear_result(self) -> None:
        self.transcription = None
        self.analysis = None
        self.error = None

    def _require_recorder(self) -> StoryRecorder:
        if self.recorder is None:
            raise RecorderStateError("This session has no recorder")
        return self.recorder

    async def start_recording(self) -> None:
        self._clear_result()
        await self._require_recorder().start()

    async def stop_recording(self) -> AudioStory:
        return await self._require_recorder().stop()

    async def restart_recording(self) -> None:
        await self._require_recorder().restart()
        self._clear_result()

    def discard_recording(self) -> None:
        self._require_recorder().reset()
        self._clear_result()

    async def analyze_text(self) -> Optional[AnalysisResult]:
        if self.draft.is_empty:
            return None
        return await self.submit(self.draft.to_input())

    async def analyze_recording(self) -> Optional[AnalysisResult]:
        recording = self._require_recorder().recording
        if recording is None:
            return None
        return await self.submit(recording, "Failed to analyze audio")

    async def submit(
        self,
        story: Union[TextStory, AudioStory],
        failure_message: str = "Failed to analyze story",
    ) -> Optional[AnalysisResult]:
        if self.is_analyzing:
            logger.debug("Submission ignored: an analysis is already in flight")
            return None

        self.is_analyzing = True
        self.error = None
        try:
            result = await self.client.submit(story)
        except ServerError as e:
            logger.warning(f"Analysis failed with HTTP {e.status_code}: {e}")
            self.error = failure_message
            return None
        except NetworkError as e:
            logger.warning(f"Analysis request failed: {e}")
            self.error = "Could not reach the analysis service"
            return None
        except MalformedResponseError as e:
            logger.warning(f"Analysis response unreadable: {e}")
            self.error = "Received an unreadable analysis"
            return None
        finally:
            self.is_analyzing = False

        self.transcription = result.transcription
        self.analysis = result.analysis
        return result.analysis

    def renderer(self) -> Optional[ResultRenderer]:
        if self.analysis is None:
            return None
        return ResultRenderer(self.analysis)
