from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from love_odds.core.errors import ConfigurationError


class Settings(BaseSettings):
    PROJECT_NAME: str = "The Improbability of Love"
    VERSION: str = "0.1.0"
    API_PREFIX: str = "/api"

    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]

    OPENAI_API_KEY: Optional[str] = None
    OPENAI_BASE_URL: str = "https://api.openai.com/v1"
    TRANSCRIPTION_MODEL: str = "whisper-1"
    ANALYSIS_MODEL: str = "gpt-4o"
    TRANSCRIPTION_TIMEOUT_SECONDS: float = 60.0
    GENERATION_TIMEOUT_SECONDS: float = 90.0

    CITY_API_KEY: Optional[str] = None
    CITY_API_URL: str = "https://api.api-ninjas.com/v1/city"
    CITY_SEARCH_TIMEOUT_SECONDS: float = 10.0
    CITY_SEARCH_DEBOUNCE_SECONDS: float = 0.75
    CITY_SEARCH_LIMIT: int = 10
    CITY_DEFAULT_POPULATION: int = 1_000_000

    model_config = SettingsConfigDict(env_file=".env", env_ignore_empty=True)

    def require_openai_api_key(self) -> str:
        if not self.OPENAI_API_KEY:
            raise ConfigurationError("OPENAI_API_KEY is not set")
        return self.OPENAI_API_KEY

    def require_city_api_key(self) -> str:
        if not self.CITY_API_KEY:
            raise ConfigurationError("CITY_API_KEY is not set")
        return self.CITY_API_KEY

    def validate_credentials(self) -> None:
        """Fail at startup when any provider credential is missing."""
        missing = [
            name
            for name in ("OPENAI_API_KEY", "CITY_API_KEY")
            if not getattr(self, name)
        ]
        if missing:
            raise ConfigurationError(
                f"Missing required configuration: {', '.join(missing)}"
            )


settings = Settings()
