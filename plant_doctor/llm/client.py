"""Shared LLM client for care profile enrichment.

The client is an instructor-patched OpenAI client so callers get
validated Pydantic objects back. With observability turned on and
Langfuse keys present, the OpenAI client comes from ``langfuse.openai``
and every completion is traced; otherwise the plain SDK is used.

Only the enrichment helpers use an LLM. Diagnosis itself is rule-based.
"""

import logging
from functools import lru_cache

import instructor

from plant_doctor.core.config import settings

logger = logging.getLogger(__name__)


def _langfuse_ready() -> bool:
    obs = settings.observability
    if not obs.enabled:
        return False
    if not obs.langfuse_public_key or not obs.langfuse_secret_key:
        logger.warning("Langfuse keys missing; using the untraced OpenAI client")
        return False
    return True


@lru_cache(maxsize=1)
def get_llm_client() -> instructor.Instructor:
    """Return the process-wide instructor client (created on first use).

    Returns:
        instructor.Instructor wrapping either ``langfuse.openai.OpenAI``
        or ``openai.OpenAI``.
    """
    if _langfuse_ready():
        try:
            from langfuse.openai import OpenAI as TracedOpenAI

            logger.info("LLM client: Langfuse-traced OpenAI")
            return instructor.from_openai(TracedOpenAI(api_key=settings.openai_api_key))
        except ImportError:
            logger.warning("langfuse is not installed; using the untraced OpenAI client")

    from openai import OpenAI

    return instructor.from_openai(OpenAI(api_key=settings.openai_api_key))
