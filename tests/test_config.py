"""Tests for configuration."""

import os
from unittest.mock import patch

from holefiller.config import Config, load_config


class TestConfig:
    def test_default_config(self):
        config = Config()
        assert config.llm_provider == "anthropic"
        assert config.max_tokens == 50
        assert config.temperature == 0.2
        assert config.trigger_delay_ms == 1000
        assert config.context_lines == 3
        assert config.include_line_suffix is False

    def test_trigger_delay_in_seconds(self):
        config = Config(trigger_delay_ms=250)
        assert config.trigger_delay == 0.25

    @patch.dict(os.environ, {"ANTHROPIC_API_KEY": "env-key"})
    def test_api_key_from_env(self):
        config = Config()
        assert config.anthropic_api_key == "env-key"

    @patch.dict(os.environ, {"OPENAI_API_KEY": "env-key"})
    def test_explicit_key_wins_over_env(self):
        config = Config(openai_api_key="explicit")
        assert config.openai_api_key == "explicit"

    @patch.dict(
        os.environ,
        {
            "HOLEFILLER_LLM_PROVIDER": "openai",
            "HOLEFILLER_LLM_MODEL": "gpt-4o-mini",
            "HOLEFILLER_TRIGGER_DELAY_MS": "400",
            "HOLEFILLER_OPENAI_BASE_URL": "http://localhost:11434/v1",
        },
    )
    def test_load_config_from_env(self):
        config = load_config()
        assert config.llm_provider == "openai"
        assert config.llm_model == "gpt-4o-mini"
        assert config.trigger_delay_ms == 400
        assert config.openai_base_url == "http://localhost:11434/v1"
