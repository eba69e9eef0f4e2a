from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict

DEFAULT_TEMPERATURE = 0.1
DEFAULT_MAX_TOKENS = 4000
DEFAULT_TIMEOUT = 300  # seconds, same for every provider


class LLMProvider(str, Enum):
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GEMINI = "gemini"
    OLLAMA = "ollama"
    LOCAL = "local"
    ENTERPRISE = "enterprise"
    APIGEE = "apigee"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    LLMProvider.OPENAI: "OpenAI",
    LLMProvider.ANTHROPIC: "Anthropic",
    LLMProvider.GEMINI: "Gemini",
    LLMProvider.OLLAMA: "Ollama",
    LLMProvider.LOCAL: "Local LLM",
    LLMProvider.ENTERPRISE: "Enterprise LLM",
    LLMProvider.APIGEE: "Apigee",
}


@dataclass(frozen=True)
class LLMConfig:
    """Immutable settings for a single provider.

    Fields a provider does not use (e.g. `api_key` for Ollama) are kept as-is
    and simply ignored by its adapter.
    """

    provider: LLMProvider
    model: str
    api_key: str | None = None
    base_url: str | None = None
    temperature: float = DEFAULT_TEMPERATURE
    max_tokens: int = DEFAULT_MAX_TOKENS
    timeout: float = DEFAULT_TIMEOUT

    def describe(self) -> Dict[str, Any]:
        """Return a log/JSON friendly view with the credential masked."""
        return {
            "provider": self.provider.value,
            "model": self.model,
            "base_url": self.base_url,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "timeout": self.timeout,
            "has_api_key": bool(self.api_key),
        }
