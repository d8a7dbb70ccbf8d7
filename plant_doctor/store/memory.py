"""In-memory diagnostic store.

Adequate for a local-first single-user deployment and for tests.
Records are lost on restart; use JsonDiagnosticStore to keep them.

Plant ownership lives outside this service, so user lookups go through
an injected plant_id -> user_id mapping.
"""

import asyncio
import logging
import uuid
from collections.abc import Mapping
from datetime import UTC, datetime

from plant_doctor.diagnostics.models import PersistedDiagnostic, TreatmentPlan

logger = logging.getLogger(__name__)


class InMemoryDiagnosticStore:
    """DiagnosticStore backed by a dict, guarded by an asyncio lock."""

    def __init__(self, plant_owners: Mapping[str, str] | None = None) -> None:
        self._records: dict[str, PersistedDiagnostic] = {}
        self._plant_owners: dict[str, str] = dict(plant_owners or {})
        self._lock = asyncio.Lock()

    def assign_plant(self, plant_id: str, user_id: str) -> None:
        """Record which user owns a plant."""
        self._plant_owners[plant_id] = user_id

    def _new_record(
        self,
        plant_id: str,
        symptoms: list[str],
        diagnosis: str | None,
        treatment_plan: TreatmentPlan | None,
    ) -> PersistedDiagnostic:
        return PersistedDiagnostic(
            id=str(uuid.uuid4()),
            plant_id=plant_id,
            symptoms=list(symptoms),
            diagnosis=diagnosis,
            treatment_plan=treatment_plan,
            resolved=False,
            created_at=datetime.now(UTC),
        )

    @staticmethod
    def _newest_first(records: list[PersistedDiagnostic]) -> list[PersistedDiagnostic]:
        # Reversed insertion order first, so same-instant saves stay newest first
        return sorted(reversed(records), key=lambda r: r.created_at, reverse=True)

    async def save(
        self,
        plant_id: str,
        symptoms: list[str],
        diagnosis: str | None,
        treatment_plan: TreatmentPlan | None,
    ) -> PersistedDiagnostic:
        record = self._new_record(plant_id, symptoms, diagnosis, treatment_plan)
        async with self._lock:
            self._records[record.id] = record
        logger.info(f"Saved diagnostic {record.id} for plant {plant_id}")
        return record.model_copy(deep=True)

    async def list_for_plant(self, plant_id: str) -> list[PersistedDiagnostic]:
        async with self._lock:
            matches = [
                r.model_copy(deep=True) for r in self._records.values() if r.plant_id == plant_id
            ]
        return self._newest_first(matches)

    async def list_for_user(self, user_id: str) -> list[PersistedDiagnostic]:
        async with self._lock:
            matches = [
                r.model_copy(deep=True)
                for r in self._records.values()
                if self._plant_owners.get(r.plant_id) == user_id
            ]
        return self._newest_first(matches)

    async def set_resolved(self, diagnostic_id: str, resolved: bool) -> bool:
        async with self._lock:
            record = self._records.get(diagnostic_id)
            if record is None:
                return False
            self._records[diagnostic_id] = record.model_copy(update={"resolved": resolved})
        logger.info(f"Diagnostic {diagnostic_id} resolved={resolved}")
        return True
