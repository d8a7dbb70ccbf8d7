"""Diagnostic record store interface.

The diagnostic engine never talks to a concrete database. Callers hand a
DiagnosticStore to DiagnosticRecordService, which is the only code that
awaits it. Stores raise DiagnosticStoreError on failure; the service
turns that into a None/False/[] return for the caller.
"""

from typing import Protocol

from plant_doctor.diagnostics.models import PersistedDiagnostic, TreatmentPlan


class DiagnosticStoreError(Exception):
    """A store could not complete a read or write."""


class DiagnosticStore(Protocol):
    """Async persistence for saved diagnostic sessions."""

    async def save(
        self,
        plant_id: str,
        symptoms: list[str],
        diagnosis: str | None,
        treatment_plan: TreatmentPlan | None,
    ) -> PersistedDiagnostic:
        """Persist a new, unresolved diagnostic and return the stored record."""
        ...

    async def list_for_plant(self, plant_id: str) -> list[PersistedDiagnostic]:
        """All diagnostics for a plant, newest first."""
        ...

    async def list_for_user(self, user_id: str) -> list[PersistedDiagnostic]:
        """All diagnostics across a user's plants, newest first."""
        ...

    async def set_resolved(self, diagnostic_id: str, resolved: bool) -> bool:
        """Toggle the resolved flag. Returns False if the id is unknown."""
        ...
