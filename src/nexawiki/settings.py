"""
Application Settings

Centralized configuration using Pydantic Settings for type safety and validation.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with validation and type safety."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Required settings
    gemini_api_key: str

    # Summary service
    gemini_api_url: str = (
        "https://generativelanguage.googleapis.com/v1beta/models/"
        "gemini-1.5-flash:generateContent"
    )

    # Search index service
    wikipedia_api_url: str = "https://en.wikipedia.org/w/api.php"
    wikipedia_article_url: str = "https://en.wikipedia.org/?curid={page_id}"
    max_search_results: int = Field(default=10, gt=0)

    # Transport
    request_timeout: float = Field(default=10.0, gt=0)

    # Display
    app_name: str = "NexaWiki"
    app_description: str = "AI-Powered Knowledge Search"

    # Local state
    preferences_file: str = ".nexawiki/preferences.json"
    log_dir: str = "logs"

    @property
    def page_title(self) -> str:
        """Window/page title shown by front ends."""
        return f"{self.app_name} | {self.app_description}"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()  # type: ignore
