"""Client configuration using pydantic-settings."""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings

DEFAULT_API_URL = "http://localhost:3001"


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    # Finance API base endpoint (API_URL wins over BACKEND_URL)
    api_url: str = Field(
        default=DEFAULT_API_URL,
        validation_alias=AliasChoices("API_URL", "BACKEND_URL"),
    )

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    @property
    def base_url(self) -> str:
        return (self.api_url or DEFAULT_API_URL).rstrip("/")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
    }


settings = Settings()


def get_base_url() -> str:
    """Return the API base URL without trailing slashes."""
    return settings.base_url
