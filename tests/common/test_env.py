"""Tests for environment configuration interface."""

from common.env import Environment, env


class TestEnvironment:
    """Tests for Environment class."""

    def test_log_level_default(self, monkeypatch):
        """Test log_level returns default value."""
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        assert Environment.log_level() == "INFO"

    def test_log_level_is_upper_cased(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert Environment.log_level() == "DEBUG"

    def test_github_api_url_default(self, monkeypatch):
        """Test github_api_url returns the public API by default."""
        monkeypatch.delenv("GITHUB_API_URL", raising=False)
        assert Environment.github_api_url() == "https://api.github.com"

    def test_github_api_url_strips_trailing_slash(self, monkeypatch):
        monkeypatch.setenv("GITHUB_API_URL", "https://ghe.example.com/api/v3/")
        assert Environment.github_api_url() == "https://ghe.example.com/api/v3"

    def test_github_token_unset(self, monkeypatch):
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)
        assert Environment.github_token() is None
        assert Environment.github_token("ci-bot") is None

    def test_github_token_shared(self, monkeypatch):
        monkeypatch.setenv("GITHUB_TOKEN", "shared")
        monkeypatch.delenv("GITHUB_TOKEN_CI_BOT", raising=False)
        assert Environment.github_token("ci-bot") == "shared"

    def test_github_token_for_credentials_id(self, monkeypatch):
        """Test credential-specific variable wins; id is normalized."""
        monkeypatch.setenv("GITHUB_TOKEN", "shared")
        monkeypatch.setenv("GITHUB_TOKEN_CI_BOT", "bot-token")
        assert Environment.github_token("ci-bot") == "bot-token"

    def test_github_timeout(self, monkeypatch):
        monkeypatch.delenv("GITHUB_TIMEOUT", raising=False)
        assert Environment.github_timeout() is None

        monkeypatch.setenv("GITHUB_TIMEOUT", "30")
        assert Environment.github_timeout() == 30.0

    def test_included_regions(self, monkeypatch):
        monkeypatch.delenv("INCLUDED_REGIONS", raising=False)
        assert Environment.included_regions() == ""

        monkeypatch.setenv("INCLUDED_REGIONS", "src/**\ndocs/**")
        assert Environment.included_regions() == "src/**\ndocs/**"

    def test_singleton(self):
        assert isinstance(env, Environment)
