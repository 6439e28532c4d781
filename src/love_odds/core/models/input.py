import base64
import binascii
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from love_odds.core.errors import BadRequestError
from love_odds.core.models.analysis import AnalysisResult

DEFAULT_AUDIO_MIME_TYPE = "audio/webm"


class TextStory(BaseModel):
    kind: Literal["text"] = "text"
    content: str


class AudioStory(BaseModel):
    kind: Literal["audio"] = "audio"
    data: bytes
    mime_type: str = DEFAULT_AUDIO_MIME_TYPE

    @property
    def filename(self) -> str:
        # "audio/webm;codecs=opus" -> "audio.webm"
        subtype = self.mime_type.split("/", 1)[-1].split(";", 1)[0].strip()
        return f"audio.{subtype or 'webm'}"

    def to_data_url(self) -> str:
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"

    @classmethod
    def from_data_url(cls, value: str) -> "AudioStory":
        """Accept a ``data:<mime>;base64,...`` URL or a bare base64 string."""
        mime_type = DEFAULT_AUDIO_MIME_TYPE
        payload = value.strip()
        if payload.startswith("data:"):
            header, _, payload = payload.partition(",")
            declared = header[len("data:") :].split(";", 1)[0]
            if declared:
                mime_type = declared

        try:
            data = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as e:
            raise BadRequestError("audioData is not valid base64") from e

        if not data:
            raise BadRequestError("audioData is empty")
        return cls(data=data, mime_type=mime_type)


StoryInput = Annotated[Union[TextStory, AudioStory], Field(discriminator="kind")]


class AnalyzeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    audio_data: Optional[str] = Field(
        None, alias="audioData", description="Recorded story as data URL or base64"
    )
    text: Optional[str] = Field(None, description="Written story")

    def to_story_input(self) -> Union[TextStory, AudioStory]:
        has_audio = bool(self.audio_data and self.audio_data.strip())
        has_text = bool(self.text and self.text.strip())

        if has_audio and has_text:
            raise BadRequestError("Provide either audioData or text, not both")
        if has_audio:
            return AudioStory.from_data_url(self.audio_data)
        if has_text:
            return TextStory(content=self.text)
        raise BadRequestError("Provide either audioData or text")


class AnalyzeResponse(BaseModel):
    transcription: str
    analysis: AnalysisResult


class ErrorResponse(BaseModel):
    error: str
