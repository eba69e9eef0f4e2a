import pytest

from appraisal_feedback.llm import (
    ConfigurationError,
    LLMClient,
    LLMProvider,
    UnsupportedProviderError,
    build_config_for_provider,
    create_llm_client_from_env,
    resolve_config_from_env,
)


def test_anthropic_only_gets_defaults():
    config = resolve_config_from_env({"ANTHROPIC_API_KEY": "ak"})

    assert config.provider == LLMProvider.ANTHROPIC
    assert config.model == "claude-3-sonnet-20240229"
    assert config.temperature == 0.1
    assert config.max_tokens == 4000
    assert config.timeout == 300
    assert config.api_key == "ak"
    assert config.base_url is None


def test_openai_beats_ollama():
    config = resolve_config_from_env({"OPENAI_API_KEY": "sk", "OLLAMA_HOST": "http://gpu:11434"})
    assert config.provider == LLMProvider.OPENAI
    assert config.model == "gpt-4"


def test_nothing_configured_returns_none():
    assert resolve_config_from_env({}) is None
    assert create_llm_client_from_env({"UNRELATED": "1"}) is None


def test_empty_values_do_not_count():
    assert resolve_config_from_env({"OPENAI_API_KEY": "", "GEMINI_API_KEY": "gk"}).provider == LLMProvider.GEMINI


@pytest.mark.parametrize(
    "env, expected",
    [
        ({"ANTHROPIC_API_KEY": "a", "GEMINI_API_KEY": "g", "OLLAMA_HOST": "http://o"}, LLMProvider.ANTHROPIC),
        ({"GEMINI_API_KEY": "g", "ENTERPRISE_LLM_URL": "http://e", "ENTERPRISE_LLM_API_KEY": "k"}, LLMProvider.GEMINI),
        ({"ENTERPRISE_LLM_URL": "http://e", "ENTERPRISE_LLM_API_KEY": "k", "LOCAL_LLM_URL": "http://l"}, LLMProvider.ENTERPRISE),
        ({"LOCAL_LLM_URL": "http://l", "OLLAMA_HOST": "http://o"}, LLMProvider.LOCAL),
        ({"OLLAMA_HOST": "http://o"}, LLMProvider.OLLAMA),
    ],
)
def test_priority_order(env, expected):
    assert resolve_config_from_env(env).provider == expected


def test_enterprise_without_key_is_skipped():
    # URL alone makes it a candidate but not available, so the scan moves on
    config = resolve_config_from_env({"ENTERPRISE_LLM_URL": "http://e", "OLLAMA_HOST": "http://o"})
    assert config.provider == LLMProvider.OLLAMA

    assert resolve_config_from_env({"ENTERPRISE_LLM_URL": "http://e"}) is None


def test_bad_override_skips_to_next_candidate():
    env = {
        "OPENAI_API_KEY": "sk",
        "OPENAI_TEMPERATURE": "warm",
        "ANTHROPIC_API_KEY": "ak",
    }
    assert resolve_config_from_env(env).provider == LLMProvider.ANTHROPIC


def test_overrides_are_applied():
    env = {
        "OPENAI_API_KEY": "sk",
        "OPENAI_MODEL": "gpt-4o-mini",
        "OPENAI_TEMPERATURE": "0.7",
        "OPENAI_MAX_TOKENS": "256",
        "OPENAI_BASE_URL": "https://gateway.internal",
    }
    config = resolve_config_from_env(env)
    assert config.model == "gpt-4o-mini"
    assert config.temperature == 0.7
    assert config.max_tokens == 256
    assert config.base_url == "https://gateway.internal"
    assert config.timeout == 300


def test_local_defaults():
    config = build_config_for_provider(LLMProvider.LOCAL, {})
    assert config.model == "llama-3.2-3b-instruct"
    assert config.max_tokens == 40000
    assert config.base_url == "http://localhost:1234/v1"
    assert config.api_key is None


def test_ollama_defaults_and_num_predict():
    config = build_config_for_provider(LLMProvider.OLLAMA, {"OLLAMA_NUM_PREDICT": "512"})
    assert config.base_url == "http://localhost:11434"
    assert config.model == "llama-3.2-3b-instruct"
    assert config.max_tokens == 512
    assert config.api_key is None


def test_enterprise_has_no_default_url():
    config = build_config_for_provider(LLMProvider.ENTERPRISE, {"ENTERPRISE_LLM_API_KEY": "k"})
    assert config.base_url is None
    assert config.max_tokens == 4000


def test_timeout_is_not_configurable():
    config = build_config_for_provider(LLMProvider.GEMINI, {"GEMINI_API_KEY": "g", "GEMINI_TIMEOUT": "5"})
    assert config.timeout == 300


@pytest.mark.parametrize("raw", ["lots", "0", "-5", "1.5"])
def test_invalid_max_tokens(raw):
    with pytest.raises(ConfigurationError):
        build_config_for_provider(LLMProvider.ANTHROPIC, {"ANTHROPIC_MAX_TOKENS": raw})


def test_apigee_cannot_be_built():
    with pytest.raises(UnsupportedProviderError):
        build_config_for_provider(LLMProvider.APIGEE, {})


def test_reads_process_environment_by_default(monkeypatch):
    for key in ("OPENAI_API_KEY", "ANTHROPIC_API_KEY", "GEMINI_API_KEY", "ENTERPRISE_LLM_URL", "LOCAL_LLM_URL"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("OLLAMA_HOST", "http://ollama.lan:11434")

    client = create_llm_client_from_env()

    assert isinstance(client, LLMClient)
    assert client.provider == LLMProvider.OLLAMA
    assert client.config.base_url == "http://ollama.lan:11434"
    assert client.is_available()


def test_describe_masks_credential():
    info = resolve_config_from_env({"OPENAI_API_KEY": "sk-secret"}).describe()
    assert info["has_api_key"] is True
    assert "sk-secret" not in repr(info)
    assert info["provider"] == "openai"
