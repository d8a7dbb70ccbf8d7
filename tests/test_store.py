"""Tests for diagnostic persistence.

Covers the in-memory store, the JSON-file store and the record
service's failure handling. Store methods are async, so each test
drives them with asyncio.run().
"""

import asyncio
import json
from pathlib import Path

import pytest

from plant_doctor.core.config import StoreSettings
from plant_doctor.diagnostics.engine import build_treatment_plan, diagnose
from plant_doctor.diagnostics.models import PersistedDiagnostic, TreatmentPlan
from plant_doctor.store import (
    DiagnosticRecordService,
    DiagnosticStoreError,
    InMemoryDiagnosticStore,
    JsonDiagnosticStore,
    create_store,
)


def _plan(symptoms: list[str]) -> TreatmentPlan:
    return build_treatment_plan(diagnose(symptoms))


# =============================================================================
# IN-MEMORY STORE
# =============================================================================


class TestInMemoryStore:
    """Tests for InMemoryDiagnosticStore."""

    def test_save_assigns_id_and_defaults(self, memory_store: InMemoryDiagnosticStore) -> None:
        record = asyncio.run(
            memory_store.save("p1", ["root-rot"], "Overwatering", _plan(["root-rot"]))
        )
        assert record.id
        assert record.plant_id == "p1"
        assert record.resolved is False
        assert record.created_at.tzinfo is not None
        assert record.treatment_plan is not None
        assert record.treatment_plan.diagnosis == "Overwatering"

    def test_ids_are_unique(self, memory_store: InMemoryDiagnosticStore) -> None:
        async def run() -> list[PersistedDiagnostic]:
            return [await memory_store.save("p1", ["leaf-drop"], None, None) for _ in range(5)]

        records = asyncio.run(run())
        assert len({r.id for r in records}) == 5

    def test_history_is_newest_first(self, memory_store: InMemoryDiagnosticStore) -> None:
        async def run() -> tuple[list[str], list[PersistedDiagnostic]]:
            ids = []
            for symptom in ["leaf-drop", "root-rot", "pest-presence"]:
                ids.append((await memory_store.save("p1", [symptom], None, None)).id)
            await memory_store.save("p2", ["pale-leaves"], None, None)
            return ids, await memory_store.list_for_plant("p1")

        ids, history = asyncio.run(run())
        assert [r.id for r in history] == list(reversed(ids))

    def test_unknown_plant_has_empty_history(self, memory_store: InMemoryDiagnosticStore) -> None:
        assert asyncio.run(memory_store.list_for_plant("nope")) == []

    def test_list_for_user_spans_plants(self, memory_store: InMemoryDiagnosticStore) -> None:
        async def run() -> list[PersistedDiagnostic]:
            await memory_store.save("p1", ["leaf-drop"], None, None)
            await memory_store.save("p2", ["root-rot"], None, None)
            await memory_store.save("p3", ["pest-presence"], None, None)
            return await memory_store.list_for_user("u1")

        records = asyncio.run(run())
        assert sorted(r.plant_id for r in records) == ["p1", "p2"]

    def test_assign_plant(self, memory_store: InMemoryDiagnosticStore) -> None:
        memory_store.assign_plant("p9", "u9")

        async def run() -> list[PersistedDiagnostic]:
            await memory_store.save("p9", ["leaf-drop"], None, None)
            return await memory_store.list_for_user("u9")

        assert len(asyncio.run(run())) == 1

    def test_set_resolved_round_trip(self, memory_store: InMemoryDiagnosticStore) -> None:
        async def run() -> tuple[bool, bool, PersistedDiagnostic]:
            record = await memory_store.save("p1", ["leaf-drop"], None, None)
            first = await memory_store.set_resolved(record.id, True)
            second = await memory_store.set_resolved(record.id, True)
            return first, second, (await memory_store.list_for_plant("p1"))[0]

        first, second, stored = asyncio.run(run())
        assert first is True
        assert second is True
        assert stored.resolved is True

    def test_set_resolved_unknown_id(self, memory_store: InMemoryDiagnosticStore) -> None:
        assert asyncio.run(memory_store.set_resolved("missing", True)) is False

    def test_returned_records_are_copies(self, memory_store: InMemoryDiagnosticStore) -> None:
        async def run() -> PersistedDiagnostic:
            record = await memory_store.save("p1", ["leaf-drop"], None, None)
            record.resolved = True
            record.symptoms.append("root-rot")
            return (await memory_store.list_for_plant("p1"))[0]

        stored = asyncio.run(run())
        assert stored.resolved is False
        assert stored.symptoms == ["leaf-drop"]


# =============================================================================
# JSON STORE
# =============================================================================


class TestJsonStore:
    """Tests for JsonDiagnosticStore."""

    def test_persists_across_instances(self, tmp_path: Path) -> None:
        path = tmp_path / "diagnostics.json"

        async def write() -> str:
            store = JsonDiagnosticStore(path)
            record = await store.save("p1", ["root-rot"], "Overwatering", _plan(["root-rot"]))
            await store.set_resolved(record.id, True)
            return record.id

        record_id = asyncio.run(write())
        assert path.exists()

        history = asyncio.run(JsonDiagnosticStore(path).list_for_plant("p1"))
        assert [r.id for r in history] == [record_id]
        assert history[0].resolved is True
        assert history[0].treatment_plan is not None
        assert history[0].treatment_plan.pot_recommendations is not None

    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        store = JsonDiagnosticStore(tmp_path / "absent.json")
        assert asyncio.run(store.list_for_plant("p1")) == []

    def test_file_is_a_json_list(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "diagnostics.json"
        asyncio.run(JsonDiagnosticStore(path).save("p1", ["leaf-drop"], None, None))
        data = json.loads(path.read_text())
        assert isinstance(data, list)
        assert data[0]["plant_id"] == "p1"

    def test_corrupt_file_raises_store_error(self, tmp_path: Path) -> None:
        path = tmp_path / "diagnostics.json"
        path.write_text("{not json")
        with pytest.raises(DiagnosticStoreError):
            asyncio.run(JsonDiagnosticStore(path).list_for_plant("p1"))

    def test_unknown_id_does_not_write(self, tmp_path: Path) -> None:
        path = tmp_path / "diagnostics.json"
        assert asyncio.run(JsonDiagnosticStore(path).set_resolved("missing", True)) is False
        assert not path.exists()

    def test_concurrent_saves_all_reach_disk(self, tmp_path: Path) -> None:
        path = tmp_path / "diagnostics.json"

        async def save_many() -> list[PersistedDiagnostic]:
            store = JsonDiagnosticStore(path)
            return await asyncio.gather(
                *(store.save(f"p{i}", ["root-rot"], "Overwatering", None) for i in range(30))
            )

        saved = asyncio.run(save_many())
        assert len(saved) == 30

        data = json.loads(path.read_text())
        assert {r["id"] for r in data} == {r.id for r in saved}
        assert list(tmp_path.glob("*.tmp")) == []

    def test_failed_status_write_rolls_back(self, tmp_path: Path) -> None:
        store = JsonDiagnosticStore(tmp_path / "diagnostics.json")
        service = DiagnosticRecordService(store)

        def fail_write(records: list[PersistedDiagnostic]) -> None:
            raise OSError("disk full")

        async def run() -> tuple[bool, list[PersistedDiagnostic]]:
            record = await service.save_diagnostic("p1", ["root-rot"], "Overwatering")
            assert record is not None
            store._write = fail_write  # type: ignore[method-assign]
            updated = await service.update_diagnostic_status(record.id, True)
            return updated, await service.get_diagnostic_history("p1")

        updated, history = asyncio.run(run())
        assert updated is False
        assert history[0].resolved is False


class TestCreateStore:
    """Tests for create_store()."""

    def test_memory_backend(self) -> None:
        assert isinstance(create_store(StoreSettings()), InMemoryDiagnosticStore)
        assert not isinstance(create_store(StoreSettings()), JsonDiagnosticStore)

    def test_json_backend(self, tmp_path: Path) -> None:
        store = create_store(StoreSettings(backend="json", json_path=tmp_path / "d.json"))
        assert isinstance(store, JsonDiagnosticStore)
        assert store.path == tmp_path / "d.json"


# =============================================================================
# RECORD SERVICE
# =============================================================================


class TestDiagnosticRecordService:
    """Tests for DiagnosticRecordService."""

    def test_save_and_history(self, record_service: DiagnosticRecordService) -> None:
        async def run() -> tuple[PersistedDiagnostic | None, list[PersistedDiagnostic]]:
            saved = await record_service.save_diagnostic(
                "p1", ["root-rot"], "Overwatering", _plan(["root-rot"])
            )
            return saved, await record_service.get_diagnostic_history("p1")

        saved, history = asyncio.run(run())
        assert saved is not None
        assert [r.id for r in history] == [saved.id]

    def test_user_diagnostics(self, record_service: DiagnosticRecordService) -> None:
        async def run() -> list[PersistedDiagnostic]:
            await record_service.save_diagnostic("p1", ["leaf-drop"])
            await record_service.save_diagnostic("p3", ["leaf-drop"])
            return await record_service.get_user_diagnostics("u2")

        assert [r.plant_id for r in asyncio.run(run())] == ["p3"]

    def test_update_status(self, record_service: DiagnosticRecordService) -> None:
        async def run() -> tuple[bool, bool]:
            saved = await record_service.save_diagnostic("p1", ["leaf-drop"])
            assert saved is not None
            return (
                await record_service.update_diagnostic_status(saved.id, True),
                await record_service.update_diagnostic_status("missing", True),
            )

        assert asyncio.run(run()) == (True, False)

    def test_failures_degrade_gracefully(
        self, failing_service: DiagnosticRecordService, caplog: pytest.LogCaptureFixture
    ) -> None:
        service = failing_service

        async def run() -> tuple:
            return (
                await service.save_diagnostic("p1", ["leaf-drop"]),
                await service.get_diagnostic_history("p1"),
                await service.get_user_diagnostics("u1"),
                await service.update_diagnostic_status("d1", True),
            )

        assert asyncio.run(run()) == (None, [], [], False)
        assert "disk full" in caplog.text
