"""Langfuse tracing for API endpoints and enrichment calls.

``observe()`` decorates a function with ``langfuse.observe`` when
observability is enabled and leaves it untouched otherwise.
``init_tracing()`` creates the Langfuse client once at startup.
"""

import logging
import os
from collections.abc import Callable
from types import ModuleType
from typing import Any

from plant_doctor.core.config import settings

logger = logging.getLogger(__name__)

# The Langfuse SDK reads LANGFUSE_* on import. Bridge our OBSERVABILITY__*
# settings into those names without overriding anything already exported.
if settings.observability.enabled:
    _obs = settings.observability
    for _env_name, _value in (
        ("LANGFUSE_PUBLIC_KEY", _obs.langfuse_public_key),
        ("LANGFUSE_SECRET_KEY", _obs.langfuse_secret_key),
        ("LANGFUSE_HOST", _obs.langfuse_base_url),
    ):
        if _value:
            os.environ.setdefault(_env_name, _value)


def _identity(fn: Callable) -> Callable:
    return fn


def _langfuse() -> ModuleType | None:
    try:
        import langfuse
    except ImportError:
        logger.warning("langfuse is not installed; tracing is off")
        return None
    return langfuse


def observe(**kwargs: Any) -> Callable[..., Any]:
    """Trace the decorated function via Langfuse when enabled.

    Args:
        **kwargs: Forwarded to ``langfuse.observe`` (``name``, ``as_type``...).

    Returns:
        The Langfuse decorator, or an identity decorator when tracing is off
        or langfuse is not installed.

    Example::

        @observe(name="api_diagnose")
        def diagnose_endpoint(request):
            ...
    """
    if not settings.observability.enabled:
        return _identity
    langfuse = _langfuse()
    if langfuse is None:
        return _identity
    return langfuse.observe(**kwargs)  # type: ignore[no-any-return]


def init_tracing() -> None:
    """Create the Langfuse client at app startup, if tracing is configured.

    Safe to call more than once.
    """
    obs = settings.observability
    if not obs.enabled:
        logger.debug("Tracing off (OBSERVABILITY__ENABLED=false)")
        return
    if not obs.langfuse_public_key or not obs.langfuse_secret_key:
        logger.warning("Observability enabled but Langfuse keys are missing; tracing is off")
        return
    langfuse = _langfuse()
    if langfuse is None:
        return

    try:
        langfuse.Langfuse(
            public_key=obs.langfuse_public_key,
            secret_key=obs.langfuse_secret_key,
            base_url=obs.langfuse_base_url,
        )
    except Exception:
        logger.exception("Langfuse client could not be created; tracing is off")
        return
    logger.info(f"Langfuse tracing initialized (base_url={obs.langfuse_base_url})")
