from __future__ import annotations

"""Provider adapters: one plain function per backend.

Every adapter takes an `LLMConfig` plus the prompt and returns the completion
text. They talk to the REST endpoints with `requests` directly instead of the
vendor SDKs, so each one is just: build headers, build the JSON body, POST,
pull the text out of the response.
"""

import json
import logging
import time
from typing import Any, Dict, Sequence
from urllib.parse import urlsplit

import requests

from .config import LLMConfig, LLMProvider
from .errors import ConfigurationError, ProviderError, UnsupportedProviderError

logger = logging.getLogger(__name__)

OPENAI_URL = "https://api.openai.com/v1/chat/completions"
ANTHROPIC_URL = "https://api.anthropic.com/v1/messages"
ANTHROPIC_VERSION = "2023-06-01"  # required header
GEMINI_URL_TEMPLATE = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
OLLAMA_URL = "http://localhost:11434/api/chat"
_READ_CHUNK = 1


# ---------------------------------------------------------------------------
# helpers
# ---------------------------------------------------------------------------


def _timed_out(config: LLMConfig) -> ProviderError:
    return ProviderError(
        f"{config.provider.label} request timed out after {config.timeout}s", provider=config.provider.value
    )


def _transport_failed(config: LLMConfig, url: str, exc: Exception) -> ProviderError:
    # str(exc) embeds the full URL, and Gemini carries its key in the query string
    host = urlsplit(url).hostname or "unknown host"
    return ProviderError(
        f"{config.provider.label} request failed ({type(exc).__name__}) talking to {host}",
        provider=config.provider.value,
    )


def _read_body(config: LLMConfig, resp: requests.Response, deadline: float) -> bytes:
    """Read the body while enforcing the overall deadline.

    Reads one byte at a time: a larger read blocks until its buffer is full,
    so a server trickling bytes could stretch it far past the deadline.
    """
    chunks = []
    for chunk in resp.iter_content(chunk_size=_READ_CHUNK):
        if time.monotonic() > deadline:
            raise _timed_out(config)
        chunks.append(chunk)
    return b"".join(chunks)


def _post_json(
    config: LLMConfig,
    url: str,
    payload: Dict[str, Any],
    headers: Dict[str, str] | None = None,
    params: Dict[str, str] | None = None,
) -> Any:
    label = config.provider.label
    all_headers = {"Content-Type": "application/json"}
    if headers:
        all_headers.update(headers)

    logger.debug("[%s] POST %s model=%s", config.provider.value, url, config.model)
    deadline = time.monotonic() + config.timeout
    try:
        resp = requests.post(
            url,
            json=payload,
            headers=all_headers,
            params=params,
            timeout=config.timeout,
            stream=True,
        )
    except requests.Timeout as exc:
        raise _timed_out(config) from exc
    except requests.RequestException as exc:
        raise _transport_failed(config, url, exc) from exc

    try:
        if not 200 <= resp.status_code < 300:
            raise ProviderError(
                f"{label} API error: {resp.status_code} - {resp.reason}",
                provider=config.provider.value,
                status_code=resp.status_code,
                reason=resp.reason,
            )
        if time.monotonic() > deadline:
            raise _timed_out(config)
        try:
            body = _read_body(config, resp, deadline)
        except requests.RequestException as exc:
            # iter_content reports a stalled read as ConnectionError
            raise _transport_failed(config, url, exc) from exc
    finally:
        resp.close()

    try:
        return json.loads(body)
    except ValueError as exc:
        raise ProviderError(
            f"{label} returned a non-JSON body", provider=config.provider.value, status_code=resp.status_code
        ) from exc


def _extract_text(config: LLMConfig, data: Any, path: Sequence[str | int]) -> str:
    """Walk `path` through the decoded body; anything missing or empty is malformed."""
    node = data
    try:
        for key in path:
            node = node[key]
    except (KeyError, IndexError, TypeError):
        node = None
    if not isinstance(node, str) or not node:
        raise ProviderError(
            f"{config.provider.label} returned a malformed response (missing {_format_path(path)})",
            provider=config.provider.value,
        )
    return node


def _format_path(path: Sequence[str | int]) -> str:
    out = ""
    for key in path:
        if isinstance(key, int):
            out += f"[{key}]"
        else:
            out += f".{key}" if out else key
    return out


def _join(base_url: str, suffix: str) -> str:
    return f"{base_url.rstrip('/')}{suffix}"


def _user_turn(prompt: str):
    return [{"role": "user", "content": prompt}]


# ---------------------------------------------------------------------------
# adapters
# ---------------------------------------------------------------------------


def call_openai(config: LLMConfig, prompt: str) -> str:
    if not config.api_key:
        raise ConfigurationError("OpenAI API key not configured", provider=config.provider.value)

    url = _join(config.base_url, "/v1/chat/completions") if config.base_url else OPENAI_URL
    payload = {
        "model": config.model,
        "messages": _user_turn(prompt),
        "temperature": config.temperature,
        "max_tokens": config.max_tokens,
    }
    data = _post_json(config, url, payload, headers={"Authorization": f"Bearer {config.api_key}"})
    return _extract_text(config, data, ("choices", 0, "message", "content"))


def call_anthropic(config: LLMConfig, prompt: str) -> str:
    if not config.api_key:
        raise ConfigurationError("Anthropic API key not configured", provider=config.provider.value)

    url = _join(config.base_url, "/v1/messages") if config.base_url else ANTHROPIC_URL
    headers = {
        "x-api-key": config.api_key,
        "anthropic-version": ANTHROPIC_VERSION,
    }
    payload = {
        "model": config.model,
        "messages": _user_turn(prompt),
        "temperature": config.temperature,
        "max_tokens": config.max_tokens,
    }
    data = _post_json(config, url, payload, headers=headers)
    return _extract_text(config, data, ("content", 0, "text"))


def call_gemini(config: LLMConfig, prompt: str) -> str:
    if not config.api_key:
        raise ConfigurationError("Google Gemini API key not configured", provider=config.provider.value)

    # Gemini authenticates through the `key` query parameter, not a header
    url = GEMINI_URL_TEMPLATE.format(model=config.model)
    payload = {
        "contents": [{"parts": [{"text": prompt}]}],
        "generationConfig": {
            "temperature": config.temperature,
            "maxOutputTokens": config.max_tokens,
        },
    }
    data = _post_json(config, url, payload, params={"key": config.api_key})
    return _extract_text(config, data, ("candidates", 0, "content", "parts", 0, "text"))


def call_ollama(config: LLMConfig, prompt: str) -> str:
    url = _join(config.base_url, "/api/chat") if config.base_url else OLLAMA_URL
    # No token cap is sent; /api/chat streams NDJSON unless told otherwise
    payload = {
        "model": config.model,
        "messages": _user_turn(prompt),
        "temperature": config.temperature,
        "stream": False,
    }
    data = _post_json(config, url, payload)
    return _extract_text(config, data, ("message", "content"))


def call_local(config: LLMConfig, prompt: str) -> str:
    if not config.base_url:
        raise ConfigurationError("Local LLM base URL not configured", provider=config.provider.value)

    headers = {}
    if config.api_key:
        headers["Authorization"] = f"Bearer {config.api_key}"
    payload = {
        "model": config.model,
        "messages": _user_turn(prompt),
        "temperature": config.temperature,
        "max_tokens": config.max_tokens,
    }
    data = _post_json(config, _join(config.base_url, "/v1/chat/completions"), payload, headers=headers)
    return _extract_text(config, data, ("choices", 0, "message", "content"))


def call_enterprise(config: LLMConfig, prompt: str) -> str:
    if not config.base_url:
        raise ConfigurationError("Enterprise LLM base URL not configured", provider=config.provider.value)

    headers = {}
    if config.api_key:
        headers["Authorization"] = f"Bearer {config.api_key}"
    # flat completion body, not chat formatted
    payload = {
        "model": config.model,
        "prompt": prompt,
        "temperature": config.temperature,
        "max_tokens": config.max_tokens,
    }
    data = _post_json(config, config.base_url, payload, headers=headers)

    if isinstance(data, dict):
        for field in ("response", "text", "content"):
            value = data.get(field)
            if isinstance(value, str) and value:
                return value
    raise ProviderError(
        "Enterprise LLM returned a malformed response (no response/text/content field)",
        provider=config.provider.value,
    )


def call_apigee(config: LLMConfig, prompt: str) -> str:
    # Reserved for token-exchange support; never touches the network.
    raise UnsupportedProviderError(
        "Apigee integration requires additional configuration", provider=config.provider.value
    )


ADAPTERS = {
    LLMProvider.OPENAI: call_openai,
    LLMProvider.ANTHROPIC: call_anthropic,
    LLMProvider.GEMINI: call_gemini,
    LLMProvider.OLLAMA: call_ollama,
    LLMProvider.LOCAL: call_local,
    LLMProvider.ENTERPRISE: call_enterprise,
    LLMProvider.APIGEE: call_apigee,
}
