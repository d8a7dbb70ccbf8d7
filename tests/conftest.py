"""Shared test fixtures and configuration."""

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from plant_doctor.enrichment.ingest import CareProfileCache
from plant_doctor.llm.client import get_llm_client
from plant_doctor.main import app, get_care_profile_cache, get_record_service
from plant_doctor.store import (
    DiagnosticRecordService,
    DiagnosticStoreError,
    InMemoryDiagnosticStore,
)


@pytest.fixture(autouse=True)
def _clear_llm_client_cache() -> Generator[None]:
    """Clear the LLM client lru_cache after every test.

    Prevents a mocked client from one test leaking into the next.
    """
    yield
    get_llm_client.cache_clear()


@pytest.fixture
def memory_store() -> InMemoryDiagnosticStore:
    """Empty in-memory store where plants p1/p2 belong to user u1."""
    return InMemoryDiagnosticStore(plant_owners={"p1": "u1", "p2": "u1", "p3": "u2"})


@pytest.fixture
def record_service(memory_store: InMemoryDiagnosticStore) -> DiagnosticRecordService:
    """Record service over the in-memory store."""
    return DiagnosticRecordService(memory_store)


@pytest.fixture
def care_cache() -> CareProfileCache:
    """Empty care profile cache."""
    return CareProfileCache()


@pytest.fixture
def client(
    record_service: DiagnosticRecordService, care_cache: CareProfileCache
) -> Generator[TestClient]:
    """Test client with a fresh store and cache per test."""
    app.dependency_overrides[get_record_service] = lambda: record_service
    app.dependency_overrides[get_care_profile_cache] = lambda: care_cache
    yield TestClient(app)
    app.dependency_overrides.clear()


class FailingStore:
    """Store whose every call fails."""

    async def save(self, plant_id, symptoms, diagnosis, treatment_plan):  # type: ignore[no-untyped-def]
        raise DiagnosticStoreError("disk full")

    async def list_for_plant(self, plant_id):  # type: ignore[no-untyped-def]
        raise DiagnosticStoreError("connection lost")

    async def list_for_user(self, user_id):  # type: ignore[no-untyped-def]
        raise DiagnosticStoreError("connection lost")

    async def set_resolved(self, diagnostic_id, resolved):  # type: ignore[no-untyped-def]
        raise DiagnosticStoreError("read-only")


@pytest.fixture
def failing_service() -> DiagnosticRecordService:
    """Record service over a store that always fails."""
    return DiagnosticRecordService(FailingStore())
