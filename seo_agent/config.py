"""Runtime configuration read from environment variables.

A ``.env`` file in the working directory is loaded first (python-dotenv), so
local credentials do not need to be exported by hand.  Variables already set
in the environment take precedence over the file.
"""

import logging
import math
import os
from functools import lru_cache
from pathlib import Path
from typing import Literal, Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

LLMProvider = Literal["ollama", "openai", "anthropic"]
RenderMode = Literal["auto", "http", "browser"]

USER_AGENT = "Mozilla/5.0 (compatible; SEO-Agent/1.0; +https://github.com/seo-agent/seo-agent)"

_LLM_PROVIDERS = ("ollama", "openai", "anthropic")
_RENDER_MODES = ("auto", "http", "browser")


class Settings(BaseModel):
    llm_provider: LLMProvider = "ollama"

    ollama_base_url: str = "http://localhost:11434"
    ollama_model: str = "llama3.1"

    openai_api_key: str = ""
    openai_model: str = "gpt-4o"

    anthropic_api_key: str = ""
    anthropic_model: str = "claude-sonnet-4-5-20250929"

    request_timeout: float = Field(default=30.0, gt=0, description="Per-call timeout in seconds.")
    max_concurrent_requests: int = Field(default=5, ge=1)
    render_mode: RenderMode = "auto"
    reports_dir: Path = Path("reports")
    log_level: str = "INFO"
    user_agent: str = USER_AGENT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from *environ* (defaults to ``os.environ``)."""
        env = os.environ if environ is None else environ

        provider = env.get("LLM_PROVIDER", "ollama").strip().lower() or "ollama"
        if provider not in _LLM_PROVIDERS:
            logger.warning("Unknown LLM_PROVIDER %r – falling back to ollama", provider)
            provider = "ollama"

        render_mode = env.get("RENDER_MODE", "auto").strip().lower() or "auto"
        if render_mode not in _RENDER_MODES:
            logger.warning("Unknown RENDER_MODE %r – falling back to auto", render_mode)
            render_mode = "auto"

        return cls(
            llm_provider=provider,
            ollama_base_url=env.get("OLLAMA_BASE_URL", "http://localhost:11434"),
            ollama_model=env.get("OLLAMA_MODEL", "llama3.1"),
            openai_api_key=env.get("OPENAI_API_KEY", ""),
            openai_model=env.get("OPENAI_MODEL", "gpt-4o"),
            anthropic_api_key=env.get("ANTHROPIC_API_KEY", ""),
            anthropic_model=env.get("ANTHROPIC_MODEL", "claude-sonnet-4-5-20250929"),
            request_timeout=_positive_number(env, "REQUEST_TIMEOUT", 30.0),
            max_concurrent_requests=_positive_int(env, "MAX_CONCURRENT_REQUESTS", 5),
            render_mode=render_mode,
            reports_dir=Path(env.get("REPORTS_DIR", "reports")),
            log_level=_log_level(env),
        )


def _positive_number(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid %s=%r – using default %s", name, raw, default)
        return default
    if not math.isfinite(value) or value <= 0:
        logger.warning("Out-of-range %s=%r – using default %s", name, raw, default)
        return default
    return value


def _positive_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid %s=%r – using default %s", name, raw, default)
        return default
    if value < 1:
        logger.warning("Non-positive %s=%r – using default %s", name, raw, default)
        return default
    return value


def _log_level(env: Mapping[str, str]) -> str:
    level = env.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"
    if not isinstance(logging.getLevelName(level), int):
        logger.warning("Unknown LOG_LEVEL %r – falling back to INFO", level)
        return "INFO"
    return level


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings, loaded once."""
    load_dotenv()
    return Settings.from_env()
