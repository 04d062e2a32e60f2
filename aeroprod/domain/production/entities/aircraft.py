"""Aircraft aggregate: owns its parts, production stages and quality tests."""

from typing import Any, TypeVar

from pydantic import Field, field_validator

from ...shared.base import Entity
from ...shared.exceptions import InvalidIndexError
from ..value_objects.enums import AircraftCategory
from .part import Part
from .quality_test import QualityTest
from .stage import Stage

T = TypeVar("T")

UPDATABLE_FIELDS = ("model", "category", "capacity", "range_km")


def _at(items: list[T], index: int, collection: str) -> T:
    # Negative indices are rejected rather than counted from the end.
    if index < 0 or index >= len(items):
        raise InvalidIndexError(collection, index, len(items))
    return items[index]


class Aircraft(Entity):
    """
    Aircraft aggregate root.

    The code identifies the aircraft and cannot change after creation. Child
    records are addressed by position; deleting one shifts the indices of
    every record after it.
    """

    code: str = Field(min_length=1, max_length=50, frozen=True)
    model: str = Field(min_length=1, max_length=200)
    category: AircraftCategory
    capacity: int = Field(ge=0)
    range_km: int = Field(ge=0)

    parts: list[Part] = Field(default_factory=list)
    stages: list[Stage] = Field(default_factory=list)
    tests: list[QualityTest] = Field(default_factory=list)

    @field_validator("code")
    @classmethod
    def _strip_code(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("code must not be blank")
        return v

    @property
    def identity(self) -> str:
        return self.code

    def apply_updates(self, updates: dict[str, Any]) -> None:
        """Apply provided top-level fields; ``None`` values are ignored."""
        for field in UPDATABLE_FIELDS:
            value = updates.get(field)
            if value is not None:
                setattr(self, field, value)

    # Child access
    def part_at(self, index: int) -> Part:
        return _at(self.parts, index, "part")

    def stage_at(self, index: int) -> Stage:
        return _at(self.stages, index, "stage")

    def test_at(self, index: int) -> QualityTest:
        return _at(self.tests, index, "test")

    def is_final_stage(self, index: int) -> bool:
        return index == len(self.stages) - 1
