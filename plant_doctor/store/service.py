"""Diagnostic record service.

The caller-facing persistence API. A diagnosis is computed first and
saved afterwards; if the store fails, these methods log the failure and
return None / [] / False so the caller can still show the result it
already has.
"""

import logging

from plant_doctor.diagnostics.models import PersistedDiagnostic, TreatmentPlan
from plant_doctor.store.base import DiagnosticStore

logger = logging.getLogger(__name__)


class DiagnosticRecordService:
    """Saves and looks up diagnostic sessions through an injected store."""

    def __init__(self, store: DiagnosticStore) -> None:
        self.store = store

    async def save_diagnostic(
        self,
        plant_id: str,
        symptoms: list[str],
        diagnosis: str | None = None,
        treatment_plan: TreatmentPlan | None = None,
    ) -> PersistedDiagnostic | None:
        """Persist a diagnostic session.

        Returns:
            The stored record, or None if the store failed.
        """
        try:
            return await self.store.save(plant_id, list(symptoms), diagnosis, treatment_plan)
        except Exception as e:
            logger.error(f"Error saving diagnostic for plant {plant_id}: {e}")
            return None

    async def get_diagnostic_history(self, plant_id: str) -> list[PersistedDiagnostic]:
        """Diagnostics for a plant, newest first. Empty if the store failed."""
        try:
            return await self.store.list_for_plant(plant_id)
        except Exception as e:
            logger.error(f"Error fetching diagnostic history for plant {plant_id}: {e}")
            return []

    async def get_user_diagnostics(self, user_id: str) -> list[PersistedDiagnostic]:
        """Diagnostics across all of a user's plants, newest first."""
        try:
            return await self.store.list_for_user(user_id)
        except Exception as e:
            logger.error(f"Error fetching diagnostics for user {user_id}: {e}")
            return []

    async def update_diagnostic_status(self, diagnostic_id: str, resolved: bool) -> bool:
        """Mark a diagnostic resolved or unresolved.

        Returns:
            True on success; False if the id is unknown or the store failed.
        """
        try:
            updated = await self.store.set_resolved(diagnostic_id, resolved)
        except Exception as e:
            logger.error(f"Error updating diagnostic {diagnostic_id}: {e}")
            return False
        if not updated:
            logger.warning(f"Diagnostic {diagnostic_id} not found")
        return updated
