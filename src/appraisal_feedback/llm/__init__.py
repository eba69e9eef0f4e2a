from __future__ import annotations

"""LLM dispatch layer: config, client and environment-driven provider selection."""

from .client import LLMClient
from .config import DEFAULT_TIMEOUT, LLMConfig, LLMProvider
from .errors import ConfigurationError, LLMError, ProviderError, UnsupportedProviderError
from .resolver import build_config_for_provider, create_llm_client_from_env, resolve_config_from_env

__all__ = [
    "LLMClient",
    "LLMConfig",
    "LLMProvider",
    "DEFAULT_TIMEOUT",
    "LLMError",
    "ConfigurationError",
    "ProviderError",
    "UnsupportedProviderError",
    "build_config_for_provider",
    "resolve_config_from_env",
    "create_llm_client_from_env",
]
