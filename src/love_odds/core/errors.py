from typing import Optional


class LoveOddsError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(LoveOddsError):
    """Raised when a required credential or setting is missing."""


class BadRequestError(LoveOddsError):
    """The analysis request is missing its story or carries both inputs."""


class NetworkError(LoveOddsError):
    """Transport-level failure talking to the analysis API or an upstream."""


class UpstreamTranscriptionError(LoveOddsError):
    pass


class UpstreamGenerationError(LoveOddsError):
    pass


class MalformedGenerationOutput(LoveOddsError):
    """The model answered, but not with a usable analysis payload."""


class UpstreamCityLookupError(LoveOddsError):
    pass


class ProcessingError(LoveOddsError):
    """
    Single failure surfaced by the analysis pipeline.
    The classified cause is chained via ``__cause__``.
    """

    def __init__(
        self,
        message: str = "Failed to process story",
        *,
        transcription: Optional[str] = None,
    ):
        super().__init__(message)
        self.transcription = transcription


class ServerError(LoveOddsError):
    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(LoveOddsError):
    pass


class RecorderStateError(LoveOddsError):
    pass
