"""Production stage entity."""

from pydantic import Field, field_validator

from ...shared.base import DomainModel
from ..value_objects.enums import StageStatus


class Stage(DomainModel):
    """
    One step of an aircraft's production pipeline.

    Stages are ordered by their position in the owning aircraft's sequence.
    ``employee_ids`` behaves as a set: it never holds duplicates and its order
    carries no meaning.
    """

    name: str = Field(min_length=1, max_length=200)
    deadline_days: int = Field(ge=0)
    status: StageStatus = StageStatus.PENDING
    employee_ids: list[str] = Field(default_factory=list)

    @field_validator("employee_ids")
    @classmethod
    def _dedupe_employee_ids(cls, v: list[str]) -> list[str]:
        return list(dict.fromkeys(v))

    @property
    def is_done(self) -> bool:
        return self.status is StageStatus.DONE

    def start(self) -> None:
        self.status = StageStatus.IN_PROGRESS

    def complete(self) -> None:
        self.status = StageStatus.DONE

    def assign_employee(self, employee_id: str) -> bool:
        """Add an employee to the stage. Returns False if already assigned."""
        if employee_id in self.employee_ids:
            return False
        self.employee_ids = [*self.employee_ids, employee_id]
        return True
