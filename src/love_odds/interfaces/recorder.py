from abc import ABC, abstractmethod

from love_odds.core.models.input import AudioStory


class AudioSource(ABC):
    """Microphone-like capture device driven by StoryRecorder."""

    @abstractmethod
    async def start(self) -> None:
        pass

    @abstractmethod
    async def stop(self) -> AudioStory:
        """Finish capturing and return the recorded clip."""
        pass

    @abstractmethod
    async def abort(self) -> None:
        """Discard whatever was captured so far."""
        pass
