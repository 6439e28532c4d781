from abc import ABC, abstractmethod

from langchain_core.language_models.chat_models import BaseChatModel

from love_odds.core.models.input import AudioStory


class LLMPort(BaseChatModel, ABC):
    """Abstract base class for LLM implementations, compatible with LangChain."""

    @abstractmethod
    async def check_health(self) -> bool:
        pass


class TranscriptionPort(ABC):
    @abstractmethod
    async def transcribe(self, audio: AudioStory) -> str:
        """Return the plain text spoken in the clip."""
        pass

    @abstractmethod
    async def check_health(self) -> bool:
        pass
