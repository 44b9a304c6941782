"""Text-completion backends used to turn check results into prose.

One :class:`TextCompletion` is built per process from the settings and passed
to every step that needs it.  Backends raise :class:`LLMError` on any failure;
callers go through :func:`generate_or_fallback` so an unreachable model never
fails a run.
"""

import logging
from typing import Optional, Protocol

import anthropic
import httpx
import openai
from anthropic import AsyncAnthropic
from openai import AsyncOpenAI

from seo_agent.config import Settings

logger = logging.getLogger(__name__)

MAX_TOKENS = 2048


class LLMError(Exception):
    """Raised when a completion backend cannot produce text."""


class TextCompletion(Protocol):
    async def generate(self, prompt: str) -> str:
        ...


class OllamaCompletion:
    """Local model served by Ollama's ``/api/chat`` endpoint."""

    def __init__(self, base_url: str, model: str, *, timeout: float = 30.0):
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout

    async def generate(self, prompt: str) -> str:
        payload = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "stream": False,
            "options": {"temperature": 0},
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(f"{self.base_url}/api/chat", json=payload)
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise LLMError(f"Ollama request failed: {exc}") from exc

        content = (data.get("message") or {}).get("content", "")
        if not content:
            raise LLMError("Ollama returned an empty response.")
        return content.strip()


class OpenAICompletion:
    def __init__(self, api_key: str, model: str, *, timeout: float = 30.0):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self._client: Optional[AsyncOpenAI] = None

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self.api_key, timeout=self.timeout, max_retries=0)
        return self._client

    async def generate(self, prompt: str) -> str:
        if not self.api_key:
            raise LLMError("OPENAI_API_KEY is not set.")
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=0,
                max_tokens=MAX_TOKENS,
            )
        except openai.OpenAIError as exc:
            raise LLMError(f"OpenAI request failed: {exc}") from exc

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise LLMError("OpenAI returned an empty response.")
        return content.strip()


class AnthropicCompletion:
    def __init__(self, api_key: str, model: str, *, timeout: float = 30.0):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self._client: Optional[AsyncAnthropic] = None

    @property
    def client(self) -> AsyncAnthropic:
        if self._client is None:
            self._client = AsyncAnthropic(api_key=self.api_key, timeout=self.timeout, max_retries=0)
        return self._client

    async def generate(self, prompt: str) -> str:
        if not self.api_key:
            raise LLMError("ANTHROPIC_API_KEY is not set.")
        try:
            response = await self.client.messages.create(
                model=self.model,
                max_tokens=MAX_TOKENS,
                temperature=0,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.AnthropicError as exc:
            raise LLMError(f"Anthropic request failed: {exc}") from exc

        text = "".join(block.text for block in response.content if block.type == "text")
        if not text:
            raise LLMError("Anthropic returned an empty response.")
        return text.strip()


def build_text_completion(settings: Settings) -> TextCompletion:
    """Return the backend selected by ``LLM_PROVIDER``."""
    if settings.llm_provider == "openai":
        return OpenAICompletion(settings.openai_api_key, settings.openai_model, timeout=settings.request_timeout)
    if settings.llm_provider == "anthropic":
        return AnthropicCompletion(
            settings.anthropic_api_key, settings.anthropic_model, timeout=settings.request_timeout
        )
    return OllamaCompletion(settings.ollama_base_url, settings.ollama_model, timeout=settings.request_timeout)


async def generate_or_fallback(llm: TextCompletion, prompt: str, fallback: str) -> str:
    """Return the model's answer to *prompt*, or *fallback* if the model fails."""
    try:
        return await llm.generate(prompt)
    except LLMError as exc:
        logger.warning("LLM unavailable – %s", exc)
        return fallback
