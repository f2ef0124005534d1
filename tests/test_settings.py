"""
Tests for application settings
"""

import pytest
from pydantic import ValidationError

from nexawiki.settings import Settings


class TestSettings:
    """Test cases for Settings validation"""

    def test_defaults(self, monkeypatch):
        """Test default endpoints and limits"""
        monkeypatch.delenv("MAX_SEARCH_RESULTS", raising=False)
        settings = Settings(gemini_api_key="key", _env_file=None)

        assert settings.wikipedia_api_url == "https://en.wikipedia.org/w/api.php"
        assert settings.wikipedia_article_url.endswith("?curid={page_id}")
        assert settings.max_search_results == 10
        assert settings.page_title == "NexaWiki | AI-Powered Knowledge Search"

    def test_reads_environment(self, monkeypatch):
        """Test values are taken from environment variables"""
        monkeypatch.setenv("GEMINI_API_KEY", "from-env")
        monkeypatch.setenv("MAX_SEARCH_RESULTS", "5")

        settings = Settings(_env_file=None)

        assert settings.gemini_api_key == "from-env"
        assert settings.max_search_results == 5

    def test_result_limit_must_be_positive(self):
        """Test a zero result cap is rejected"""
        with pytest.raises(ValidationError):
            Settings(gemini_api_key="key", max_search_results=0, _env_file=None)

    def test_api_key_required(self, monkeypatch):
        """Test the summary API key is mandatory"""
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        with pytest.raises(ValidationError):
            Settings(_env_file=None)
