"""Performance-review feedback generation with pluggable LLM providers."""

__version__ = "0.1.0"
