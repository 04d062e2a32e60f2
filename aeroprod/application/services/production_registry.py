"""
Production registry application service.

Owns the in-memory collection of aircraft keyed by code and mirrors it to the
durable store after every mutation. Each operation runs under the registry
lock and follows the same shape: validate, mutate a working copy, persist,
then publish the copy. A failed persist leaves the previous state in place.
"""

import logging
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TypeVar

from pydantic import ValidationError

from aeroprod.core.config import Settings
from aeroprod.domain.production.entities import Aircraft, Part, QualityTest, Stage
from aeroprod.domain.production.repositories.record_store import RecordStore
from aeroprod.domain.production.services.stage_workflow import (
    ReleaseStatus,
    StageWorkflowService,
)
from aeroprod.domain.production.value_objects.enums import PartStatus
from aeroprod.domain.shared.exceptions import (
    AircraftNotFoundError,
    DuplicateCodeError,
)
from aeroprod.infrastructure.persistence.json_lines_store import JsonLinesStore

from ..dtos.production_dtos import AircraftUpdate, PartUpdate, QualityTestUpdate
from .report_renderer import ReportRenderer

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_COLLECTION = "aircraft"


class ProductionRegistry:
    """
    Application service for aircraft, their child records and stage progression.

    Objects returned by read operations are copies; changing them has no
    effect on the registry. Child records are addressed by index, and a delete
    shifts the indices of every later record, so callers must re-fetch after
    deleting.
    """

    def __init__(
        self,
        store: RecordStore,
        workflow: StageWorkflowService | None = None,
        renderer: ReportRenderer | None = None,
        collection: str = DEFAULT_COLLECTION,
    ) -> None:
        """
        Initialize the registry and load the stored collection.

        Args:
            store: Durable record store
            workflow: Stage transition rules (non-strict by default)
            renderer: Report writer used by ``generate_report``
            collection: Store collection holding aircraft records
        """
        self._store = store
        self._workflow = workflow or StageWorkflowService()
        self._renderer = renderer or ReportRenderer(Path("reports"))
        self._collection = collection
        self._aircraft: dict[str, Aircraft] = {}
        self._invalid_records = 0
        self._lock = threading.RLock()
        self._load()

    @classmethod
    def from_settings(cls, settings: Settings) -> "ProductionRegistry":
        return cls(
            store=JsonLinesStore(settings.DATA_DIR),
            workflow=StageWorkflowService(strict=settings.STRICT_STAGE_TRANSITIONS),
            renderer=ReportRenderer(settings.REPORTS_DIR),
            collection=settings.AIRCRAFT_STORE,
        )

    # ─────────────────────────────────
    # Loading and persistence
    # ─────────────────────────────────
    def _load(self) -> None:
        records = self._store.load_all(self._collection)
        if records is None:
            logger.info("No stored aircraft collection %r, starting empty", self._collection)
            return

        for record in records:
            try:
                aircraft = Aircraft.model_validate(record)
            except ValidationError as e:
                self._invalid_records += 1
                logger.warning(
                    "Skipping invalid aircraft record %r (%d validation errors)",
                    record.get("code"),
                    e.error_count(),
                )
                continue
            if aircraft.code in self._aircraft:
                logger.warning("Duplicate aircraft record %s, keeping the later one", aircraft.code)
            self._aircraft[aircraft.code] = aircraft

        logger.info(
            "Loaded %d aircraft (%d corrupted records skipped)",
            len(self._aircraft),
            self.corrupted_records,
        )

    def _persist_all(self) -> None:
        self._store.replace_all(
            self._collection,
            [a.model_dump(mode="json") for a in self._aircraft.values()],
        )

    @contextmanager
    def _mutation(self, code: str) -> Iterator[Aircraft]:
        """
        Yield a working copy of an aircraft; publish and persist it on success.

        If the body raises, nothing changes. If persisting raises, the
        previous collection is restored before the error propagates.
        """
        with self._lock:
            working = self._find(code).model_copy(deep=True)
            yield working
            working.mark_updated()
            self._commit({**self._aircraft, code: working})

    def _commit(self, new_state: dict[str, Aircraft]) -> None:
        previous = self._aircraft
        self._aircraft = new_state
        try:
            self._persist_all()
        except Exception:
            self._aircraft = previous
            logger.exception("Failed to persist aircraft collection, changes rolled back")
            raise

    def _find(self, code: str) -> Aircraft:
        aircraft = self._aircraft.get(code)
        if aircraft is None:
            raise AircraftNotFoundError(code)
        return aircraft

    def _read(self, code: str, getter: Callable[[Aircraft], T]) -> T:
        with self._lock:
            return getter(self._find(code).model_copy(deep=True))

    @property
    def corrupted_records(self) -> int:
        """Stored records skipped on load, unreadable lines and invalid records alike."""
        return self._store.skipped_records.get(self._collection, 0) + self._invalid_records

    def __len__(self) -> int:
        return len(self._aircraft)

    def __contains__(self, code: object) -> bool:
        return code in self._aircraft

    # ─────────────────────────────────
    # Aircraft
    # ─────────────────────────────────
    def register(self, aircraft: Aircraft) -> Aircraft:
        """
        Register a new aircraft and append it to the store.

        Raises:
            DuplicateCodeError: If an aircraft with the same code exists
            OSError: If the append fails (nothing is registered)
        """
        with self._lock:
            if aircraft.code in self._aircraft:
                raise DuplicateCodeError(aircraft.code)
            stored = aircraft.model_copy(deep=True)
            self._store.append_one(self._collection, stored.model_dump(mode="json"))
            self._aircraft[stored.code] = stored
            logger.info("Registered aircraft %s (%s)", stored.code, stored.model)
            return stored.model_copy(deep=True)

    def get(self, code: str) -> Aircraft:
        return self._read(code, lambda a: a)

    def list_aircraft(self) -> list[Aircraft]:
        """Return every aircraft in registration order."""
        with self._lock:
            return [a.model_copy(deep=True) for a in self._aircraft.values()]

    def update(self, code: str, updates: AircraftUpdate) -> Aircraft:
        """Apply the provided model, category, capacity and range fields."""
        with self._mutation(code) as aircraft:
            aircraft.apply_updates(updates.changes())
        logger.info("Updated aircraft %s", code)
        return aircraft.model_copy(deep=True)

    def delete(self, code: str) -> None:
        with self._lock:
            self._find(code)
            self._commit({k: v for k, v in self._aircraft.items() if k != code})
        logger.info("Deleted aircraft %s", code)

    # ─────────────────────────────────
    # Parts
    # ─────────────────────────────────
    def add_part(self, code: str, part: Part) -> int:
        """Append a part and return its index."""
        with self._mutation(code) as aircraft:
            aircraft.parts.append(part.model_copy(deep=True))
            index = len(aircraft.parts) - 1
        logger.info("Added part %r to aircraft %s at index %d", part.name, code, index)
        return index

    def list_parts(self, code: str) -> list[Part]:
        return self._read(code, lambda a: a.parts)

    def get_part(self, code: str, index: int) -> Part:
        return self._read(code, lambda a: a.part_at(index))

    def update_part(self, code: str, index: int, updates: PartUpdate) -> Part:
        with self._mutation(code) as aircraft:
            part = aircraft.part_at(index)
            for field, value in updates.changes().items():
                setattr(part, field, value)
        return part.model_copy(deep=True)

    def update_part_status(self, code: str, index: int, status: PartStatus) -> Part:
        with self._mutation(code) as aircraft:
            part = aircraft.part_at(index)
            part.status = status
        logger.info("Part %d of aircraft %s is now %s", index, code, status.value)
        return part.model_copy(deep=True)

    def delete_part(self, code: str, index: int) -> None:
        """Delete a part; later parts shift down by one index."""
        with self._mutation(code) as aircraft:
            aircraft.part_at(index)
            del aircraft.parts[index]
        logger.info("Deleted part %d of aircraft %s", index, code)

    # ─────────────────────────────────
    # Stages
    # ─────────────────────────────────
    def add_stage(self, code: str, stage: Stage) -> int:
        """Append a stage to the end of the pipeline and return its index."""
        with self._mutation(code) as aircraft:
            aircraft.stages.append(stage.model_copy(deep=True))
            index = len(aircraft.stages) - 1
        logger.info("Added stage %r to aircraft %s at index %d", stage.name, code, index)
        return index

    def list_stages(self, code: str) -> list[Stage]:
        return self._read(code, lambda a: a.stages)

    def get_stage(self, code: str, index: int) -> Stage:
        return self._read(code, lambda a: a.stage_at(index))

    def assign_employee(self, code: str, stage_index: int, employee_id: str) -> Stage:
        """Add an employee to a stage; assigning someone twice is a no-op."""
        with self._mutation(code) as aircraft:
            stage = aircraft.stage_at(stage_index)
            added = stage.assign_employee(employee_id)
        if added:
            logger.info(
                "Assigned employee %s to stage %d of aircraft %s",
                employee_id,
                stage_index,
                code,
            )
        return stage.model_copy(deep=True)

    def advance_stage(self, code: str, stage_index: int) -> Stage:
        """
        Start a stage.

        Raises:
            AircraftNotFoundError: If the aircraft does not exist
            InvalidIndexError: If no stage exists at ``stage_index``
            PreviousStageIncompleteError: If the preceding stage is not DONE
        """
        with self._mutation(code) as aircraft:
            stage = self._workflow.start_stage(aircraft, stage_index)
        logger.info("Started stage %d (%s) of aircraft %s", stage_index, stage.name, code)
        return stage.model_copy(deep=True)

    def complete_stage(self, code: str, stage_index: int) -> Stage:
        """
        Close a stage; closing the final stage is gated on test outcomes.

        Raises:
            AircraftNotFoundError: If the aircraft does not exist
            InvalidIndexError: If no stage exists at ``stage_index``
            FailedTestsPendingError: If the final stage is closed while a test
                kind's latest outcome is REJECTED
        """
        with self._mutation(code) as aircraft:
            stage = self._workflow.complete_stage(aircraft, stage_index)
            final = aircraft.is_final_stage(stage_index)
        logger.info("Completed stage %d (%s) of aircraft %s", stage_index, stage.name, code)
        if final:
            logger.info("Aircraft %s completed its final production stage", code)
        return stage.model_copy(deep=True)

    def release_status(self, code: str) -> ReleaseStatus:
        return self._read(code, self._workflow.release_status)

    # ─────────────────────────────────
    # Quality tests
    # ─────────────────────────────────
    def register_test(self, code: str, test: QualityTest) -> int:
        """Append a test result and return its index."""
        with self._mutation(code) as aircraft:
            aircraft.tests.append(test.model_copy(deep=True))
            index = len(aircraft.tests) - 1
        logger.info(
            "Registered %s test for aircraft %s: %s",
            test.kind.value,
            code,
            test.outcome.value,
        )
        return index

    def list_tests(self, code: str) -> list[QualityTest]:
        return self._read(code, lambda a: a.tests)

    def get_test(self, code: str, index: int) -> QualityTest:
        return self._read(code, lambda a: a.test_at(index))

    def update_test(self, code: str, index: int, updates: QualityTestUpdate) -> QualityTest:
        with self._mutation(code) as aircraft:
            test = aircraft.test_at(index)
            for field, value in updates.changes().items():
                setattr(test, field, value)
        return test.model_copy(deep=True)

    def delete_test(self, code: str, index: int) -> None:
        with self._mutation(code) as aircraft:
            aircraft.test_at(index)
            del aircraft.tests[index]
        logger.info("Deleted test %d of aircraft %s", index, code)

    # ─────────────────────────────────
    # Reports
    # ─────────────────────────────────
    def generate_report(self, code: str) -> Path:
        """Write the text report for an aircraft and return its path."""
        return self._renderer.write(self.get(code))
