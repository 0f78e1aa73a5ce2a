"""Tests for OaiPmhSettings and get_settings."""

from oaiweave import __version__
from oaiweave.config import OaiPmhSettings, get_settings


def test_defaults():
    settings = OaiPmhSettings(_env_file=None)

    assert settings.request_timeout == 30.0
    assert settings.user_agent == f"oaiweave/{__version__}"
    assert settings.follow_redirects is True
    assert settings.default_metadata_prefix == "oai_dc"
    assert settings.pre_request_hooks == []
    assert settings.post_request_hooks == []


def test_environment_overrides(monkeypatch):
    """Test that OAIWEAVE_-prefixed environment variables are picked up."""
    monkeypatch.setenv("OAIWEAVE_REQUEST_TIMEOUT", "5")
    monkeypatch.setenv("OAIWEAVE_DEFAULT_METADATA_PREFIX", "marc21")
    monkeypatch.setenv("oaiweave_user_agent", "my-harvester/1.0")

    settings = OaiPmhSettings(_env_file=None)

    assert settings.request_timeout == 5.0
    assert settings.default_metadata_prefix == "marc21"
    assert settings.user_agent == "my-harvester/1.0"


def test_get_settings_is_cached():
    get_settings.cache_clear()

    assert get_settings() is get_settings()
