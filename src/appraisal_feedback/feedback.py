from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping

from .llm import LLMError, create_llm_client_from_env
from .models import AppraisalData
from .prompts import create_feedback_prompt, generate_mock_feedback

logger = logging.getLogger(__name__)


@dataclass
class FeedbackResult:
    feedback: str
    source: str  # "llm" or "fallback"
    provider: str | None = None


def generate_feedback(data: AppraisalData, env: Mapping[str, str] | None = None) -> FeedbackResult:
    """Ask the configured LLM for review text, falling back to the canned generator.

    Only `LLMError` triggers the fallback; anything else is a bug and propagates.
    """
    client = create_llm_client_from_env(env)
    if client is None or not client.is_available():
        logger.info("No LLM client available, using fallback feedback for %s", data.employee_id)
        return FeedbackResult(feedback=generate_mock_feedback(data), source="fallback")

    try:
        text = client.complete(create_feedback_prompt(data))
    except LLMError as exc:
        logger.warning("LLM client failed (%s), falling back to mock feedback: %s", type(exc).__name__, exc)
        return FeedbackResult(feedback=generate_mock_feedback(data), source="fallback")

    return FeedbackResult(feedback=text, source="llm", provider=client.provider.value)
