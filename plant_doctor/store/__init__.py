"""Persistence for saved diagnostic sessions."""

from plant_doctor.core.config import StoreSettings
from plant_doctor.store.base import DiagnosticStore, DiagnosticStoreError
from plant_doctor.store.json_store import JsonDiagnosticStore
from plant_doctor.store.memory import InMemoryDiagnosticStore
from plant_doctor.store.service import DiagnosticRecordService


def create_store(config: StoreSettings) -> DiagnosticStore:
    """Build the store selected in settings."""
    if config.backend == "json":
        return JsonDiagnosticStore(config.json_path)
    return InMemoryDiagnosticStore()


__all__ = [
    "DiagnosticRecordService",
    "DiagnosticStore",
    "DiagnosticStoreError",
    "InMemoryDiagnosticStore",
    "JsonDiagnosticStore",
    "create_store",
]
