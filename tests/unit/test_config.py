"""Tests for relay.config -- provider table and RelaySettings."""

import pytest

from relay.config import ANTHROPIC_API_VERSION, PROVIDERS, RelaySettings, provider_info
from relay.models import Provider


class TestProviderTable:
    def test_every_provider_listed(self):
        assert set(PROVIDERS) == set(Provider)

    def test_env_vars(self):
        assert provider_info(Provider.OPENAI).env_var == "OPENAI_API_KEY"
        assert provider_info(Provider.ANTHROPIC).env_var == "ANTHROPIC_API_KEY"
        assert provider_info(Provider.GEMINI).env_var == "GEMINI_API_KEY"
        assert provider_info(Provider.GROQ).env_var == "GROQ_API_KEY"

    def test_groq_uses_openai_compatible_path(self):
        assert provider_info(Provider.GROQ).base_url == "https://api.groq.com/openai/v1"

    def test_google_alias(self):
        assert "google" in provider_info(Provider.GEMINI).aliases

    def test_lookup_by_value(self):
        assert provider_info("anthropic").display == "Anthropic"

    def test_anthropic_version_pinned(self):
        assert ANTHROPIC_API_VERSION == "2023-06-01"


class TestRelaySettings:
    def test_defaults(self):
        settings = RelaySettings()
        assert settings.timeout_seconds == 120.0
        assert settings.log_level == "WARNING"
        assert settings.extra_patterns == ()
        assert settings.base_url(Provider.OPENAI) == "https://api.openai.com/v1"

    def test_from_empty_env(self):
        assert RelaySettings.from_env({}) == RelaySettings()

    def test_base_url_override_strips_slash(self):
        settings = RelaySettings.from_env({"RELAY_OPENAI_BASE_URL": "http://proxy.local/v1/"})
        assert settings.base_url(Provider.OPENAI) == "http://proxy.local/v1"
        assert settings.base_url(Provider.GROQ) == "https://api.groq.com/openai/v1"

    def test_timeout_from_env(self):
        assert RelaySettings.from_env({"RELAY_TIMEOUT_SECONDS": "30"}).timeout_seconds == 30.0

    @pytest.mark.parametrize("raw", ["abc", "0", "-5"])
    def test_bad_timeout_rejected(self, raw):
        with pytest.raises(ValueError, match="RELAY_TIMEOUT_SECONDS"):
            RelaySettings.from_env({"RELAY_TIMEOUT_SECONDS": raw})

    def test_log_level_uppercased(self):
        assert RelaySettings.from_env({"RELAY_LOG_LEVEL": "debug"}).log_level == "DEBUG"

    def test_model_patterns_parsed(self):
        settings = RelaySettings.from_env(
            {"RELAY_MODEL_PATTERNS": "qwen=groq, Deepseek=GROQ,"}
        )
        assert settings.extra_patterns == (("qwen", Provider.GROQ), ("deepseek", Provider.GROQ))

    def test_model_patterns_unknown_provider(self):
        with pytest.raises(ValueError, match="unknown provider"):
            RelaySettings.from_env({"RELAY_MODEL_PATTERNS": "qwen=mistral"})

    def test_model_patterns_malformed(self):
        with pytest.raises(ValueError, match="prefix=provider"):
            RelaySettings.from_env({"RELAY_MODEL_PATTERNS": "qwen"})
