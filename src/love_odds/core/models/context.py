from typing import Optional, TypedDict, Union

from love_odds.core.models.analysis import AnalysisResult
from love_odds.core.models.input import AudioStory, TextStory


class AnalysisContext(TypedDict, total=False):
    """
    State passed between the LangGraph nodes of one analysis run.
    """

    # --- Input ---
    story: Union[TextStory, AudioStory]

    # --- Processing Data ---
    story_text: str
    raw_output: Optional[str]

    # --- Output ---
    analysis: AnalysisResult
