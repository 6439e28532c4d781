import asyncio
import contextlib
import logging
from enum import Enum
from typing import Optional

from love_odds.core.errors import RecorderStateError
from love_odds.core.models.input import AudioStory, TextStory
from love_odds.interfaces.recorder import AudioSource

logger = logging.getLogger(__name__)


class RecorderStatus(str, Enum):
    IDLE = "idle"
    RECORDING = "recording"
    STOPPED = "stopped"


class StoryRecorder:
    """
    Voice capture state machine: idle -> recording -> stopped.

    restart() aborts a recording back to idle, reset() discards a
    finished recording. The clip is only exposed, never uploaded.
    """

    def __init__(self, source: AudioSource, tick_interval: float = 1.0):
        self.source = source
        self.tick_interval = tick_interval
        self.status = RecorderStatus.IDLE
        self.duration_seconds = 0
        self.recording: Optional[AudioStory] = None
        self._ticker: Optional[asyncio.Task] = None

    def _require(self, expected: RecorderStatus, action: str) -> None:
        if self.status is not expected:
            raise RecorderStateError(
                f"Cannot {action} while {self.status.value} "
                f"(expected {expected.value})"
            )

    async def start(self) -> None:
        self._require(RecorderStatus.IDLE, "start recording")
        self.duration_seconds = 0
        self.recording = None
        await self.source.start()
        self.status = RecorderStatus.RECORDING
        self._ticker = asyncio.create_task(self._run_ticker())
        logger.info("Recording started")

    async def stop(self) -> AudioStory:
        self._require(RecorderStatus.RECORDING, "stop recording")
        await self._stop_ticker()
        self.recording = await self.source.stop()
        self.status = RecorderStatus.STOPPED
        logger.info(
            f"Recording stopped after {self.duration_seconds}s "
            f"({len(self.recording.data)} bytes)"
        )
        return self.recording

    async def restart(self) -> None:
        self._require(RecorderStatus.RECORDING, "restart recording")
        await self._stop_ticker()
        await self.source.abort()
        self._clear()
        logger.info("Recording aborted")

    def reset(self) -> None:
        self._require(RecorderStatus.STOPPED, "reset recording")
        self._clear()

    def _clear(self) -> None:
        self.status = RecorderStatus.IDLE
        self.duration_seconds = 0
        self.recording = None

    def tick(self) -> None:
        if self.status is RecorderStatus.RECORDING:
            self.duration_seconds += 1

    async def _run_ticker(self) -> None:
        while True:
            await asyncio.sleep(self.tick_interval)
            self.tick()

    async def _stop_ticker(self) -> None:
        if self._ticker is None:
            return
        self._ticker.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._ticker
        self._ticker = None


class StoryDraft:
    """Free-text story buffer; no state machine, submitted as-is."""

    def __init__(self, text: str = ""):
        self.text = text

    def write(self, text: str) -> None:
        self.text = text

    def clear(self) -> None:
        self.text = ""

    @property
    def is_empty(self) -> bool:
        return not self.text.strip()

    def to_input(self) -> TextStory:
        if self.is_empty:
            raise ValueError("Story text is empty")
        return TextStory(content=self.text)
