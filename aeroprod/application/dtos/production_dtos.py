"""
Production-related Data Transfer Objects.

Create DTOs convert to domain records; update DTOs carry only the fields the
caller wants changed (unset and null fields are left alone).
"""

from typing import Any

from pydantic import BaseModel, Field

from aeroprod.domain.production.entities import Aircraft, Part, QualityTest, Stage
from aeroprod.domain.production.services.stage_workflow import ReleaseStatus
from aeroprod.domain.production.value_objects.enums import (
    AircraftCategory,
    PartCategory,
    PartStatus,
    QualityTestKind,
    QualityTestOutcome,
    StageStatus,
)


class PartialUpdate(BaseModel):
    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True, exclude_none=True)


class AircraftCreate(BaseModel):
    code: str = Field(..., min_length=1, max_length=50, description="Unique aircraft code")
    model: str = Field(..., min_length=1, max_length=200)
    category: AircraftCategory
    capacity: int = Field(..., ge=0, description="Passenger or payload capacity")
    range_km: int = Field(..., ge=0, description="Range in kilometres")

    def to_domain(self) -> Aircraft:
        return Aircraft(**self.model_dump())


class AircraftUpdate(PartialUpdate):
    model: str | None = Field(None, min_length=1, max_length=200)
    category: AircraftCategory | None = None
    capacity: int | None = Field(None, ge=0)
    range_km: int | None = Field(None, ge=0)


class PartCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    category: PartCategory
    supplier: str = Field(..., min_length=1, max_length=200)
    status: PartStatus = PartStatus.IN_PRODUCTION

    def to_domain(self) -> Part:
        return Part(**self.model_dump())


class PartUpdate(PartialUpdate):
    name: str | None = Field(None, min_length=1, max_length=200)
    category: PartCategory | None = None
    supplier: str | None = Field(None, min_length=1, max_length=200)
    status: PartStatus | None = None


class PartStatusUpdate(BaseModel):
    status: PartStatus


class StageCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    deadline_days: int = Field(..., ge=0, description="Deadline in days")

    def to_domain(self) -> Stage:
        return Stage(**self.model_dump())


class EmployeeAssignment(BaseModel):
    employee_id: str = Field(..., min_length=1, max_length=64)


class QualityTestCreate(BaseModel):
    kind: QualityTestKind
    outcome: QualityTestOutcome

    def to_domain(self) -> QualityTest:
        return QualityTest(**self.model_dump())


class QualityTestUpdate(PartialUpdate):
    kind: QualityTestKind | None = None
    outcome: QualityTestOutcome | None = None


class ReleaseStatusResponse(BaseModel):
    aircraft_code: str
    latest_outcomes: dict[QualityTestKind, QualityTestOutcome]
    rejected_kinds: list[QualityTestKind]
    stage_count: int
    final_stage_status: StageStatus | None
    can_complete_final_stage: bool
    is_released: bool

    @classmethod
    def from_status(cls, status: ReleaseStatus) -> "ReleaseStatusResponse":
        return cls(
            aircraft_code=status.aircraft_code,
            latest_outcomes=status.latest_outcomes,
            rejected_kinds=status.rejected_kinds,
            stage_count=status.stage_count,
            final_stage_status=status.final_stage_status,
            can_complete_final_stage=status.can_complete_final_stage,
            is_released=status.is_released,
        )


class ReportResponse(BaseModel):
    aircraft_code: str
    path: str
    content: str


class PartEntry(BaseModel):
    """A part together with its current position in the aircraft's sequence."""

    index: int
    part: Part


class StageEntry(BaseModel):
    index: int
    stage: Stage


class QualityTestEntry(BaseModel):
    index: int
    test: QualityTest
