import logging
from typing import Any, Dict, List, Optional

import httpx
from langchain_core.callbacks import CallbackManagerForLLMRun
from langchain_core.messages import (
    AIMessage,
    BaseMessage,
    ChatMessage,
    SystemMessage,
)
from langchain_core.outputs import ChatGeneration, ChatResult
from pydantic import Field, SecretStr, ValidationError

from love_odds.core.config import settings
from love_odds.core.errors import NetworkError, UpstreamGenerationError
from love_odds.interfaces.llm import LLMPort
from love_odds.schemas.llm import (
    ChatCompletionRequest,
    ChatCompletionResponse,
)
from love_odds.schemas.llm import (
    ChatMessage as SchemaChatMessage,
)

logger = logging.getLogger(__name__)


class StoryChatModel(LLMPort):
    """
    LangChain ChatModel adapter for an OpenAI-compatible chat completions API.
    """

    base_url: str = Field(default_factory=lambda: settings.OPENAI_BASE_URL)
    api_key: SecretStr
    model: str = Field(default_factory=lambda: settings.ANALYSIS_MODEL)
    timeout: float = Field(default_factory=lambda: settings.GENERATION_TIMEOUT_SECONDS)
    client: httpx.AsyncClient = Field(default_factory=lambda: httpx.AsyncClient())

    @property
    def _llm_type(self) -> str:
        return "love_odds_chat_completions"

    @property
    def _headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key.get_secret_value()}"}

    def _convert_message_to_schema(self, message: BaseMessage) -> SchemaChatMessage:
        """Converts LangChain message to our Pydantic schema."""
        role = "user"
        if isinstance(message, SystemMessage):
            role = "system"
        elif isinstance(message, AIMessage):
            role = "assistant"
        elif isinstance(message, ChatMessage):
            role = message.role

        return SchemaChatMessage(role=role, content=str(message.content))

    def _generate(
        self,
        messages: List[BaseMessage],
        stop: Optional[List[str]] = None,
        run_manager: Optional[CallbackManagerForLLMRun] = None,
        **kwargs: Any,
    ) -> ChatResult:
        raise NotImplementedError(
            "Sync generation not implemented. Use ainvoke/agenerate."
        )

    async def _agenerate(
        self,
        messages: List[BaseMessage],
        stop: Optional[List[str]] = None,
        run_manager: Optional[CallbackManagerForLLMRun] = None,
        **kwargs: Any,
    ) -> ChatResult:
        schema_messages = [self._convert_message_to_schema(m) for m in messages]

        request_body = ChatCompletionRequest(
            model=self.model,
            messages=schema_messages,
            temperature=kwargs.get("temperature"),
            max_tokens=kwargs.get("max_tokens"),
            response_format=kwargs.get("response_format"),
        )

        try:
            response = await self.client.post(
                f"{self.base_url}/chat/completions",
                json=request_body.model_dump(exclude_none=True),
                headers=self._headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise UpstreamGenerationError(
                f"Chat completion returned HTTP {e.response.status_code}"
            ) from e
        except httpx.RequestError as e:
            raise NetworkError(f"Chat completion request failed: {e!r}") from e

        try:
            chat_response = ChatCompletionResponse(**response.json())
        except (ValueError, ValidationError) as e:
            raise UpstreamGenerationError(
                "Chat completion response could not be parsed"
            ) from e

        if not chat_response.choices:
            raise UpstreamGenerationError("Chat completion returned no choices")

        choice = chat_response.choices[0]
        content = choice.message.content or ""

        generation = ChatGeneration(
            message=AIMessage(content=content),
            generation_info={"finish_reason": choice.finish_reason},
        )

        return ChatResult(generations=[generation])

    async def check_health(self) -> bool:
        try:
            resp = await self.client.get(
                f"{self.base_url}/models", headers=self._headers, timeout=3.0
            )
            return resp.status_code == 200
        except httpx.HTTPError as e:
            logger.warning(f"Model provider health check failed: {e!r}")
            return False
