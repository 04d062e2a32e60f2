"""
Stage Workflow Service

Rules for moving an aircraft's production stages through
PENDING -> IN_PROGRESS -> DONE, and the release gate applied when the final
stage is closed.

The service mutates the aggregate it is given and never persists; the
registry owns persistence and rollback.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from ...shared.exceptions import (
    FailedTestsPendingError,
    InvalidStageTransitionError,
    PreviousStageIncompleteError,
)
from ..entities.aircraft import Aircraft
from ..entities.quality_test import QualityTest
from ..entities.stage import Stage
from ..value_objects.enums import QualityTestKind, QualityTestOutcome, StageStatus

logger = logging.getLogger(__name__)


def latest_outcome_per_kind(
    tests: Iterable[QualityTest],
) -> dict[QualityTestKind, QualityTestOutcome]:
    """Reduce a test history to one outcome per kind; later registrations win."""
    latest: dict[QualityTestKind, QualityTestOutcome] = {}
    for test in tests:
        latest[test.kind] = test.outcome
    return latest


@dataclass
class ReleaseStatus:
    """Read-only view of the release gate for one aircraft."""

    aircraft_code: str
    latest_outcomes: dict[QualityTestKind, QualityTestOutcome] = field(
        default_factory=dict
    )
    stage_count: int = 0
    final_stage_status: StageStatus | None = None

    @property
    def rejected_kinds(self) -> list[QualityTestKind]:
        return [
            kind
            for kind, outcome in self.latest_outcomes.items()
            if outcome is QualityTestOutcome.REJECTED
        ]

    @property
    def can_complete_final_stage(self) -> bool:
        return self.stage_count > 0 and not self.rejected_kinds

    @property
    def is_released(self) -> bool:
        return self.final_stage_status is StageStatus.DONE


class StageWorkflowService:
    """
    Service for stage state transitions and the final-stage release gate.

    With ``strict`` disabled the service keeps the historical behaviour: a
    stage may be re-advanced from any status, and any stage may be completed
    without having been started. Strict mode rejects both.
    """

    def __init__(self, strict: bool = False) -> None:
        self._strict = strict

    @property
    def strict(self) -> bool:
        return self._strict

    def start_stage(self, aircraft: Aircraft, stage_index: int) -> Stage:
        """
        Move a stage to IN_PROGRESS.

        Raises:
            InvalidIndexError: If no stage exists at ``stage_index``
            PreviousStageIncompleteError: If the preceding stage is not DONE
            InvalidStageTransitionError: In strict mode, if the stage is not PENDING
        """
        stage = aircraft.stage_at(stage_index)

        if stage_index > 0:
            previous = aircraft.stages[stage_index - 1]
            if previous.status is not StageStatus.DONE:
                raise PreviousStageIncompleteError(stage_index, previous.status.value)

        self._check_transition(stage, stage_index, StageStatus.IN_PROGRESS)
        stage.start()
        return stage

    def complete_stage(self, aircraft: Aircraft, stage_index: int) -> Stage:
        """
        Move a stage to DONE, applying the release gate on the final stage.

        Raises:
            InvalidIndexError: If no stage exists at ``stage_index``
            FailedTestsPendingError: If completing the final stage while the
                latest test of some kind is REJECTED
            InvalidStageTransitionError: In strict mode, if the stage is not IN_PROGRESS
        """
        stage = aircraft.stage_at(stage_index)
        self._check_transition(stage, stage_index, StageStatus.DONE)

        if aircraft.is_final_stage(stage_index):
            self.check_release_gate(aircraft)

        stage.complete()
        return stage

    def check_release_gate(self, aircraft: Aircraft) -> None:
        """Raise FailedTestsPendingError if any test kind's latest outcome is REJECTED."""
        rejected = self.release_status(aircraft).rejected_kinds
        if rejected:
            logger.warning(
                "Release gate blocked for aircraft %s: rejected %s",
                aircraft.code,
                ", ".join(kind.value for kind in rejected),
            )
            raise FailedTestsPendingError([kind.value for kind in rejected])

    def release_status(self, aircraft: Aircraft) -> ReleaseStatus:
        return ReleaseStatus(
            aircraft_code=aircraft.code,
            latest_outcomes=latest_outcome_per_kind(aircraft.tests),
            stage_count=len(aircraft.stages),
            final_stage_status=aircraft.stages[-1].status if aircraft.stages else None,
        )

    def _check_transition(
        self, stage: Stage, stage_index: int, target: StageStatus
    ) -> None:
        if stage.status.can_transition_to(target):
            return
        if self._strict:
            raise InvalidStageTransitionError(
                stage_index, stage.status.value, target.value
            )
        logger.warning(
            "Stage %d (%s) moved from %s to %s out of order",
            stage_index,
            stage.name,
            stage.status.value,
            target.value,
        )
