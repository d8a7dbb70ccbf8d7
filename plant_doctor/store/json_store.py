"""JSON-file diagnostic store.

Keeps the in-memory store's behavior and writes every change through to
a single JSON file, loaded lazily on first use. File IO runs in a worker
thread so the event loop is never blocked.
"""

import asyncio
import json
import logging
import tempfile
from collections.abc import Mapping
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from plant_doctor.diagnostics.models import PersistedDiagnostic, TreatmentPlan
from plant_doctor.store.base import DiagnosticStoreError
from plant_doctor.store.memory import InMemoryDiagnosticStore

logger = logging.getLogger(__name__)

_RECORDS = TypeAdapter(list[PersistedDiagnostic])


class JsonDiagnosticStore(InMemoryDiagnosticStore):
    """DiagnosticStore persisted to a JSON file.

    Loads are serialized by ``_load_lock`` and file writes by
    ``_write_lock``; the snapshot and its write happen under the same
    write lock so the file always holds the latest state.
    """

    def __init__(self, path: Path, plant_owners: Mapping[str, str] | None = None) -> None:
        super().__init__(plant_owners)
        self.path = path
        self._loaded = False
        self._load_lock = asyncio.Lock()
        self._write_lock = asyncio.Lock()

    def _read(self) -> list[PersistedDiagnostic]:
        if not self.path.exists():
            return []
        with open(self.path, encoding="utf-8") as f:
            return _RECORDS.validate_python(json.load(f))

    def _write(self, records: list[PersistedDiagnostic]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp", delete=False
        ) as tmp:
            tmp.write(_RECORDS.dump_json(records, indent=2))
        tmp_path = Path(tmp.name)
        try:
            tmp_path.replace(self.path)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise

    async def _ensure_loaded(self) -> None:
        if self._loaded:
            return
        async with self._load_lock:
            if self._loaded:
                return
            try:
                records = await asyncio.to_thread(self._read)
            except (OSError, ValueError, ValidationError) as e:
                raise DiagnosticStoreError(f"Could not load {self.path}: {e}") from e
            async with self._lock:
                self._records = {r.id: r for r in records}
                self._loaded = True
        logger.info(f"Loaded {len(records)} diagnostics from {self.path}")

    async def _flush(self) -> None:
        async with self._write_lock:
            async with self._lock:
                snapshot = list(self._records.values())
            try:
                await asyncio.to_thread(self._write, snapshot)
            except OSError as e:
                raise DiagnosticStoreError(f"Could not write {self.path}: {e}") from e

    async def save(
        self,
        plant_id: str,
        symptoms: list[str],
        diagnosis: str | None,
        treatment_plan: TreatmentPlan | None,
    ) -> PersistedDiagnostic:
        await self._ensure_loaded()
        record = await super().save(plant_id, symptoms, diagnosis, treatment_plan)
        try:
            await self._flush()
        except DiagnosticStoreError:
            # Roll back so memory and disk agree
            async with self._lock:
                self._records.pop(record.id, None)
            raise
        return record

    async def list_for_plant(self, plant_id: str) -> list[PersistedDiagnostic]:
        await self._ensure_loaded()
        return await super().list_for_plant(plant_id)

    async def list_for_user(self, user_id: str) -> list[PersistedDiagnostic]:
        await self._ensure_loaded()
        return await super().list_for_user(user_id)

    async def set_resolved(self, diagnostic_id: str, resolved: bool) -> bool:
        await self._ensure_loaded()
        async with self._lock:
            previous = self._records.get(diagnostic_id)
        updated = await super().set_resolved(diagnostic_id, resolved)
        if not updated:
            return False
        try:
            await self._flush()
        except DiagnosticStoreError:
            async with self._lock:
                if previous is not None:
                    self._records[diagnostic_id] = previous
            raise
        return True
