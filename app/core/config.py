from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

# Stored on a recommendation when Spotify has no audio features for the track.
DEFAULT_TRACK_ENERGY = 0.5
DEFAULT_TRACK_VALENCE = 0.5

UNKNOWN_ARTIST = "Unknown Artist"

# Daily affirmation: how many recent entries are sent, and how much of each.
AFFIRMATION_HISTORY = 5
AFFIRMATION_SNIPPET_CHARS = 50


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DATABASE_URL: str = "postgresql://moodtune:moodtune@db:5432/moodtune"
    APP_ENV: str = "development"
    API_PREFIX: str = "/api"
    LOG_LEVEL: str = "INFO"

    # Comma-separated allowed origins, or "*" to allow all.
    # Example: "https://moodtune.app,https://api.moodtune.app"
    CORS_ORIGINS: str = "*"

    OPENAI_API_KEY: str = ""
    OPENAI_MODEL: str = "gpt-4o"
    OPENAI_BASE_URL: Optional[str] = None
    OPENAI_TIMEOUT_SECONDS: float = 30.0

    SPOTIFY_CLIENT_ID: str = ""
    SPOTIFY_CLIENT_SECRET: str = ""
    SPOTIFY_MARKET: str = "US"
    SPOTIFY_TIMEOUT_SECONDS: float = 10.0
    RECOMMENDATION_LIMIT: int = 20

    @property
    def cors_origins_list(self) -> list[str]:
        if self.CORS_ORIGINS.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
