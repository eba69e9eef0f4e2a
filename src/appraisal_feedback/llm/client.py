from __future__ import annotations

import logging

from . import adapters
from .config import LLMConfig, LLMProvider
from .errors import LLMError, UnsupportedProviderError

logger = logging.getLogger(__name__)


class LLMClient:
    """Uniform "complete this prompt" front for every supported provider.

    The client is stateless: each `complete` call builds and sends exactly one
    HTTP request through the adapter registered for `config.provider`, and
    nothing is retried or cached between calls.
    """

    def __init__(self, config: LLMConfig):
        self._config = config

    @property
    def config(self) -> LLMConfig:
        return self._config

    @property
    def provider(self) -> LLMProvider:
        return self._config.provider

    def complete(self, prompt: str) -> str:
        """Send `prompt` as a single user turn and return the model reply as text."""
        adapter = adapters.ADAPTERS.get(self._config.provider)
        if adapter is None:
            raise UnsupportedProviderError(f"Unsupported LLM provider: {self._config.provider}")
        try:
            return adapter(self._config, prompt)
        except LLMError as exc:
            logger.error("LLM call failed for provider %s: %s", self._config.provider.value, exc)
            raise

    def is_available(self) -> bool:
        """Cheap local check that the config looks complete enough to try a call."""
        cfg = self._config
        if cfg.provider in (LLMProvider.OPENAI, LLMProvider.ANTHROPIC, LLMProvider.GEMINI):
            return bool(cfg.api_key)
        if cfg.provider in (LLMProvider.OLLAMA, LLMProvider.LOCAL):
            return bool(cfg.base_url)
        if cfg.provider == LLMProvider.ENTERPRISE:
            return bool(cfg.base_url and cfg.api_key)
        # Apigee needs token exchange that is not implemented yet
        return False

    def __repr__(self) -> str:
        return f"LLMClient(provider={self._config.provider.value!r}, model={self._config.model!r})"
