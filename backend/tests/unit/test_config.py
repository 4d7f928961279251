"""
Unit tests for configuration loading.
"""

import pytest
from pydantic import ValidationError

from aboga.core.config import (
    ApplicationConfig,
    BackendConfig,
    Config,
    GenerativeConfig,
    get_config,
    reset_config,
    set_config,
)
from aboga.core.exceptions import ConfigurationError


class TestBackendConfig:
    def test_hosted_requires_url_and_key(self, monkeypatch):
        monkeypatch.delenv("SUPABASE_URL", raising=False)
        monkeypatch.delenv("SUPABASE_ANON_KEY", raising=False)
        with pytest.raises(ValidationError) as exc_info:
            BackendConfig(data_backend="hosted")
        assert "SUPABASE_URL" in str(exc_info.value)
        assert "SUPABASE_ANON_KEY" in str(exc_info.value)

    def test_hosted_urls(self):
        config = BackendConfig(data_backend="hosted", supabase_url="https://demo.supabase.co/", supabase_anon_key="k")
        assert config.rest_url == "https://demo.supabase.co/rest/v1"
        assert config.auth_url == "https://demo.supabase.co/auth/v1"

    def test_sql_backend_needs_no_credentials(self):
        config = BackendConfig(data_backend="sql", supabase_url="", supabase_anon_key="")
        assert config.database_url

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("DATA_BACKEND", "hosted")
        monkeypatch.setenv("SUPABASE_URL", "https://env.supabase.co")
        monkeypatch.setenv("SUPABASE_ANON_KEY", "env-key")
        config = BackendConfig()
        assert config.supabase_url == "https://env.supabase.co"
        assert config.supabase_anon_key == "env-key"


class TestGenerativeConfig:
    def test_endpoint_url(self):
        config = GenerativeConfig(gemini_api_key="k", gemini_model="gemini-2.5-flash")
        assert config.endpoint_url == (
            "https://generativelanguage.googleapis.com/v1/models/gemini-2.5-flash:generateContent"
        )


class TestApplicationConfig:
    def test_defaults(self):
        config = ApplicationConfig(environment="test")
        assert config.assistant_strategy == "keyword"
        assert config.free_message_quota == 10

    def test_invalid_environment(self):
        with pytest.raises(ValidationError):
            ApplicationConfig(environment="moon")

    def test_invalid_port(self):
        with pytest.raises(ValidationError):
            ApplicationConfig(environment="test", api_port=70000)

    def test_quota_must_allow_an_exchange(self):
        with pytest.raises(ValidationError):
            ApplicationConfig(environment="test", free_message_quota=1)


class TestConfig:
    def test_missing_backend_credentials_are_fatal(self, monkeypatch):
        monkeypatch.setenv("DATA_BACKEND", "hosted")
        monkeypatch.delenv("SUPABASE_URL", raising=False)
        monkeypatch.delenv("SUPABASE_ANON_KEY", raising=False)
        with pytest.raises(ConfigurationError):
            Config()

    def test_missing_generative_key_is_not_fatal(self, caplog):
        config = Config(
            backend=BackendConfig(data_backend="sql"),
            generative=GenerativeConfig(gemini_api_key=""),
            application=ApplicationConfig(environment="test"),
        )
        assert config.uses_sql_backend()
        assert "GEMINI_API_KEY not set" in caplog.text

    def test_global_instance(self, config):
        set_config(config)
        assert get_config() is config
        reset_config()
        assert get_config() is not config
        reset_config()
