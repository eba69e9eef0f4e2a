from __future__ import annotations

"""Exception types raised by the LLM layer.

Callers outside the LLM layer only need to catch `LLMError`; the subclasses
exist so failures can be told apart in logs.
"""


class LLMError(Exception):
    """Base class for every failure surfaced by the LLM client."""

    def __init__(self, message: str, provider: str | None = None):
        self.message = message
        self.provider = provider
        super().__init__(message)


class ConfigurationError(LLMError):
    """A required setting (API key, base URL, numeric override) is missing or invalid."""


class ProviderError(LLMError):
    """The provider call failed: HTTP error, transport error or malformed body."""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        status_code: int | None = None,
        reason: str | None = None,
    ):
        super().__init__(message, provider)
        self.status_code = status_code
        self.reason = reason


class UnsupportedProviderError(LLMError):
    """The provider has no working adapter."""
