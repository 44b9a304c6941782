"""Tests for seo_agent.config.Settings.from_env."""

import logging
from pathlib import Path

from seo_agent.config import Settings


class TestFromEnv:
    def test_defaults(self):
        settings = Settings.from_env({})
        assert settings.llm_provider == "ollama"
        assert settings.ollama_base_url == "http://localhost:11434"
        assert settings.request_timeout == 30.0
        assert settings.max_concurrent_requests == 5
        assert settings.render_mode == "auto"
        assert settings.reports_dir == Path("reports")
        assert settings.log_level == "INFO"

    def test_reads_values(self):
        settings = Settings.from_env(
            {
                "LLM_PROVIDER": "OpenAI",
                "OPENAI_API_KEY": "sk-test",
                "OPENAI_MODEL": "gpt-4o-mini",
                "REQUEST_TIMEOUT": "12.5",
                "MAX_CONCURRENT_REQUESTS": "3",
                "RENDER_MODE": "http",
                "REPORTS_DIR": "/tmp/seo",
                "LOG_LEVEL": "debug",
            }
        )
        assert settings.llm_provider == "openai"
        assert settings.openai_api_key == "sk-test"
        assert settings.openai_model == "gpt-4o-mini"
        assert settings.request_timeout == 12.5
        assert settings.max_concurrent_requests == 3
        assert settings.render_mode == "http"
        assert settings.reports_dir == Path("/tmp/seo")
        assert settings.log_level == "DEBUG"

    def test_unknown_provider_falls_back(self, caplog):
        with caplog.at_level(logging.WARNING, logger="seo_agent.config"):
            settings = Settings.from_env({"LLM_PROVIDER": "gemini"})
        assert settings.llm_provider == "ollama"
        assert "gemini" in caplog.text

    def test_unknown_render_mode_falls_back(self):
        assert Settings.from_env({"RENDER_MODE": "turbo"}).render_mode == "auto"

    def test_invalid_numbers_use_defaults(self, caplog):
        with caplog.at_level(logging.WARNING, logger="seo_agent.config"):
            settings = Settings.from_env({"REQUEST_TIMEOUT": "soon", "MAX_CONCURRENT_REQUESTS": "-2"})
        assert settings.request_timeout == 30.0
        assert settings.max_concurrent_requests == 5
        assert "REQUEST_TIMEOUT" in caplog.text
        assert "MAX_CONCURRENT_REQUESTS" in caplog.text

    def test_fractional_concurrency_uses_default(self, caplog):
        with caplog.at_level(logging.WARNING, logger="seo_agent.config"):
            settings = Settings.from_env({"MAX_CONCURRENT_REQUESTS": "0.5"})
        assert settings.max_concurrent_requests == 5
        assert "MAX_CONCURRENT_REQUESTS" in caplog.text

    def test_non_finite_numbers_use_defaults(self):
        for raw in ("nan", "inf", "-inf"):
            settings = Settings.from_env({"REQUEST_TIMEOUT": raw, "MAX_CONCURRENT_REQUESTS": raw})
            assert settings.request_timeout == 30.0
            assert settings.max_concurrent_requests == 5

    def test_unknown_log_level_falls_back(self, caplog):
        with caplog.at_level(logging.WARNING, logger="seo_agent.config"):
            settings = Settings.from_env({"LOG_LEVEL": "verbose"})
        assert settings.log_level == "INFO"
        assert "VERBOSE" in caplog.text

    def test_known_log_level_kept(self):
        assert Settings.from_env({"LOG_LEVEL": " warning "}).log_level == "WARNING"
