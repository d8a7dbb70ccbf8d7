"""Care profile ingestion.

Looks a species up in an injected CareProfileCache and, on a miss, asks
the LLM for a structured CareProfile and caches it. The cache is owned
by the caller; nothing here touches the diagnostic knowledgebase.
"""

import logging
import threading

import instructor

from plant_doctor.core.config import settings
from plant_doctor.enrichment.models import CareProfile
from plant_doctor.llm.client import get_llm_client
from plant_doctor.llm.tracing import observe

logger = logging.getLogger(__name__)

CARE_PROFILE_SYSTEM_PROMPT = """You are a horticulture expert writing data for a home gardening app used mostly in Ireland and the UK.

Given a plant species, produce a structured care profile.

RULES:
1. Use the common English name for species, companions and foes
2. Only list companions and foes that are well established in gardening practice
3. harvest_days is days from sowing (or planting out for perennials) to first harvest
4. Leave succession_days empty for perennials and crops harvested once
5. Care tips should suit a mild, wet climate with low winter light
6. Keep fun_fact and why_grow to one sentence each
"""


def _cache_key(species: str) -> str:
    return " ".join(species.lower().split())


class CareProfileCache:
    """Mutable, thread-safe cache of generated care profiles.

    Keys are case- and whitespace-insensitive species names.
    """

    def __init__(self) -> None:
        self._profiles: dict[str, CareProfile] = {}
        self._lock = threading.Lock()

    def get(self, species: str) -> CareProfile | None:
        with self._lock:
            return self._profiles.get(_cache_key(species))

    def put(self, species: str, profile: CareProfile) -> None:
        with self._lock:
            self._profiles[_cache_key(species)] = profile

    def __contains__(self, species: str) -> bool:
        return self.get(species) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._profiles)


@observe(name="ingest_species")
def ingest_species(
    species: str,
    cache: CareProfileCache,
    client: instructor.Instructor | None = None,
) -> CareProfile | None:
    """Return a care profile for a species, generating it if needed.

    Args:
        species: Species name as the user typed it.
        cache: Where generated profiles are kept.
        client: Instructor client (defaults to the shared one).

    Returns:
        The cached or newly generated profile, or None if generation failed.
    """
    species = species.strip()
    if not species:
        return None

    existing = cache.get(species)
    if existing is not None:
        return existing

    logger.info(f"Ingesting new plant species: {species}")

    try:
        llm = client or get_llm_client()
        profile = llm.chat.completions.create(
            model=settings.llm.model,
            messages=[
                {"role": "system", "content": CARE_PROFILE_SYSTEM_PROMPT},
                {"role": "user", "content": f"Plant: {species}"},
            ],
            response_model=CareProfile,
            temperature=settings.llm.temperature,
            max_completion_tokens=settings.llm.max_completion_tokens,
        )
    except Exception as e:
        logger.error(f"Care profile generation failed for {species}: {e}")
        return None

    cache.put(species, profile)
    logger.info(f"Cached care profile for {species} ({len(cache)} cached)")
    return profile
