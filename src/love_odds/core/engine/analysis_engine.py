import functools
import json
import logging
from typing import Any, Callable, TypeVar, Union, cast

from langchain_core.prompts import ChatPromptTemplate
from langgraph.graph import END, StateGraph
from langgraph.graph.state import CompiledStateGraph
from pydantic import ValidationError

from love_odds.core.engine.prompts import ANALYSIS_PROMPT, STORY_MESSAGE
from love_odds.core.errors import (
    MalformedGenerationOutput,
    ProcessingError,
    UpstreamGenerationError,
)
from love_odds.core.models.analysis import AnalysisResult
from love_odds.core.models.context import AnalysisContext
from love_odds.core.models.input import (
    AnalyzeRequest,
    AnalyzeResponse,
    AudioStory,
    TextStory,
)
from love_odds.interfaces.llm import LLMPort, TranscriptionPort

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

JSON_RESPONSE_FORMAT = {"type": "json_object"}


def log_node_execution(func: F) -> F:
    """Decorator to log node execution."""

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        node_name = func.__name__
        logger.info(f"▶ START Node: [{node_name}]")
        try:
            result = await func(*args, **kwargs)
        except Exception as e:
            logger.error(f"ERROR in Node [{node_name}]: {e!r}")
            raise

        logger.info(f"✔ END Node: [{node_name}]")
        if result:
            logger.info(f"   -> Updates: {list(result.keys())}")
        return result

    return cast(F, wrapper)


class AnalysisEngine:
    """
    Story analysis pipeline: resolve story text, ask the model for a
    probability breakdown, validate what comes back.
    """

    def __init__(self, transcriber: TranscriptionPort, llm: LLMPort):
        self.transcriber = transcriber
        self.llm = llm
        self.prompt = ChatPromptTemplate.from_messages(
            [
                ("system", ANALYSIS_PROMPT),
                ("user", STORY_MESSAGE),
            ]
        )
        self.graph: CompiledStateGraph = self._build_graph()

    async def analyze(self, request: AnalyzeRequest) -> AnalyzeResponse:
        """Raises BadRequestError for a malformed request, ProcessingError otherwise."""
        story = request.to_story_input()
        return await self.analyze_story(story)

    async def analyze_story(
        self, story: Union[TextStory, AudioStory]
    ) -> AnalyzeResponse:
        latest: AnalysisContext = {"story": story}
        try:
            async for values in self.graph.astream(latest, stream_mode="values"):
                latest = values
        except Exception as e:
            raise ProcessingError(transcription=latest.get("story_text")) from e

        return AnalyzeResponse(
            transcription=latest["story_text"], analysis=latest["analysis"]
        )

    @log_node_execution
    async def resolve_story(self, state: AnalysisContext) -> AnalysisContext:
        """Turn the submitted story into plain text."""
        story = state["story"]
        if isinstance(story, TextStory):
            return {"story_text": story.content}

        text = await self.transcriber.transcribe(story)
        return {"story_text": text}

    @log_node_execution
    async def generate_analysis(self, state: AnalysisContext) -> AnalysisContext:
        """Ask the model for the JSON breakdown."""
        chain = self.prompt | self.llm.bind(response_format=JSON_RESPONSE_FORMAT)
        response_msg = await chain.ainvoke({"story": state["story_text"]})
        content = response_msg.content
        return {"raw_output": content if isinstance(content, str) else str(content)}

    @log_node_execution
    async def parse_analysis(self, state: AnalysisContext) -> AnalysisContext:
        """Validate the model output against the AnalysisResult schema."""
        content = state.get("raw_output")
        if not content or not content.strip():
            raise UpstreamGenerationError("No analysis content received")

        try:
            analysis = AnalysisResult.model_validate(json.loads(content))
        except (json.JSONDecodeError, ValidationError) as e:
            raise MalformedGenerationOutput(
                f"Model output is not a valid analysis: {e}"
            ) from e

        logger.info(
            f"   -> Parsed {len(analysis.events)} events, "
            f"finalOneInX={analysis.final_one_in_x}"
        )
        return {"analysis": analysis}

    def _build_graph(self) -> CompiledStateGraph:
        workflow = StateGraph(AnalysisContext)

        workflow.add_node("resolve_story", self.resolve_story)
        workflow.add_node("generate_analysis", self.generate_analysis)
        workflow.add_node("parse_analysis", self.parse_analysis)

        workflow.set_entry_point("resolve_story")

        workflow.add_edge("resolve_story", "generate_analysis")
        workflow.add_edge("generate_analysis", "parse_analysis")
        workflow.add_edge("parse_analysis", END)

        return workflow.compile()
