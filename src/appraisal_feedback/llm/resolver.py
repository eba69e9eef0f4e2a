from __future__ import annotations

"""Pick an LLM provider from environment variables.

The environment is passed in as a plain mapping so the priority scan can be
exercised without touching `os.environ`; `None` means the real process
environment.
"""

import logging
import os
from dataclasses import dataclass
from typing import List, Mapping, Tuple

from .client import LLMClient
from .config import DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE, LLMConfig, LLMProvider
from .errors import ConfigurationError, UnsupportedProviderError

logger = logging.getLogger(__name__)

# (provider, env key whose presence makes it a candidate), highest priority first
PROVIDER_PRIORITY: List[Tuple[LLMProvider, str]] = [
    (LLMProvider.OPENAI, "OPENAI_API_KEY"),
    (LLMProvider.ANTHROPIC, "ANTHROPIC_API_KEY"),
    (LLMProvider.GEMINI, "GEMINI_API_KEY"),
    (LLMProvider.ENTERPRISE, "ENTERPRISE_LLM_URL"),
    (LLMProvider.LOCAL, "LOCAL_LLM_URL"),
    (LLMProvider.OLLAMA, "OLLAMA_HOST"),
]


@dataclass(frozen=True)
class _EnvKeys:
    model_key: str
    model_default: str
    temperature_key: str
    max_tokens_key: str
    api_key_key: str | None = None
    base_url_key: str | None = None
    base_url_default: str | None = None
    max_tokens_default: int = DEFAULT_MAX_TOKENS


_ENV_KEYS = {
    LLMProvider.OPENAI: _EnvKeys(
        model_key="OPENAI_MODEL",
        model_default="gpt-4",
        temperature_key="OPENAI_TEMPERATURE",
        max_tokens_key="OPENAI_MAX_TOKENS",
        api_key_key="OPENAI_API_KEY",
        base_url_key="OPENAI_BASE_URL",
    ),
    LLMProvider.ANTHROPIC: _EnvKeys(
        model_key="ANTHROPIC_MODEL",
        model_default="claude-3-sonnet-20240229",
        temperature_key="ANTHROPIC_TEMPERATURE",
        max_tokens_key="ANTHROPIC_MAX_TOKENS",
        api_key_key="ANTHROPIC_API_KEY",
        base_url_key="ANTHROPIC_BASE_URL",
    ),
    LLMProvider.GEMINI: _EnvKeys(
        model_key="GEMINI_MODEL",
        model_default="gemini-pro",
        temperature_key="GEMINI_TEMPERATURE",
        max_tokens_key="GEMINI_MAX_TOKENS",
        api_key_key="GEMINI_API_KEY",
        base_url_key="GEMINI_BASE_URL",
    ),
    LLMProvider.LOCAL: _EnvKeys(
        model_key="LOCAL_LLM_MODEL",
        model_default="llama-3.2-3b-instruct",
        temperature_key="LOCAL_LLM_TEMPERATURE",
        max_tokens_key="LOCAL_LLM_MAX_TOKENS",
        api_key_key="LOCAL_LLM_API_KEY",
        base_url_key="LOCAL_LLM_URL",
        # with the adapter's /v1/chat/completions suffix this becomes /v1/v1/chat/completions;
        # that is the documented default, leave the trailing /v1 in place
        base_url_default="http://localhost:1234/v1",
        max_tokens_default=40000,
    ),
    LLMProvider.OLLAMA: _EnvKeys(
        model_key="OLLAMA_MODEL",
        model_default="llama-3.2-3b-instruct",
        temperature_key="OLLAMA_TEMPERATURE",
        max_tokens_key="OLLAMA_NUM_PREDICT",
        base_url_key="OLLAMA_HOST",
        base_url_default="http://localhost:11434",
    ),
    LLMProvider.ENTERPRISE: _EnvKeys(
        model_key="ENTERPRISE_LLM_MODEL",
        model_default="llama-3.2-3b-instruct",
        temperature_key="ENTERPRISE_LLM_TEMPERATURE",
        max_tokens_key="ENTERPRISE_LLM_MAX_TOKENS",
        api_key_key="ENTERPRISE_LLM_API_KEY",
        base_url_key="ENTERPRISE_LLM_URL",
    ),
}


def _get(env: Mapping[str, str], key: str | None) -> str | None:
    # empty strings count as unset
    if key is None:
        return None
    return env.get(key) or None


def _parse_float(env: Mapping[str, str], key: str, default: float, provider: LLMProvider) -> float:
    raw = _get(env, key)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{key} must be a number, got {raw!r}", provider=provider.value) from exc


def _parse_positive_int(env: Mapping[str, str], key: str, default: int, provider: LLMProvider) -> int:
    raw = _get(env, key)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{key} must be an integer, got {raw!r}", provider=provider.value) from exc
    if value <= 0:
        raise ConfigurationError(f"{key} must be positive, got {value}", provider=provider.value)
    return value


def build_config_for_provider(provider: LLMProvider, env: Mapping[str, str] | None = None) -> LLMConfig:
    """Build the config for `provider`, applying env overrides on top of its defaults."""
    env = os.environ if env is None else env
    keys = _ENV_KEYS.get(provider)
    if keys is None:
        raise UnsupportedProviderError(f"Unsupported provider: {provider}")

    return LLMConfig(
        provider=provider,
        model=_get(env, keys.model_key) or keys.model_default,
        api_key=_get(env, keys.api_key_key),
        base_url=_get(env, keys.base_url_key) or keys.base_url_default,
        temperature=_parse_float(env, keys.temperature_key, DEFAULT_TEMPERATURE, provider),
        max_tokens=_parse_positive_int(env, keys.max_tokens_key, keys.max_tokens_default, provider),
    )


def resolve_config_from_env(env: Mapping[str, str] | None = None) -> LLMConfig | None:
    """Return the config of the first usable provider, or None when nothing is set up."""
    env = os.environ if env is None else env

    for provider, trigger_key in PROVIDER_PRIORITY:
        if not _get(env, trigger_key):
            continue
        try:
            config = build_config_for_provider(provider, env)
        except (ConfigurationError, UnsupportedProviderError) as exc:
            logger.warning("Failed to create %s client: %s", provider.value, exc)
            continue
        if LLMClient(config).is_available():
            logger.info("Using LLM provider %s (model=%s)", provider.value, config.model)
            return config
        logger.debug("Skipping %s: configuration incomplete", provider.value)

    logger.info("No LLM provider configured")
    return None


def create_llm_client_from_env(env: Mapping[str, str] | None = None) -> LLMClient | None:
    config = resolve_config_from_env(env)
    return LLMClient(config) if config is not None else None
