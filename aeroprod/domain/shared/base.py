"""Base classes for domain entities."""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DomainModel(BaseModel):
    """Base class for records owned by an aggregate (no identity of their own)."""

    model_config = ConfigDict(validate_assignment=True, use_enum_values=False)


class Entity(DomainModel, ABC):
    """Base class for entities (have identity, can change over time)."""

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime | None = None

    @property
    @abstractmethod
    def identity(self) -> Any:
        """Value that identifies the entity across changes."""

    def __eq__(self, other: Any) -> bool:
        """Entities are equal if they have the same identity and type."""
        if not isinstance(other, self.__class__):
            return False
        return self.identity == other.identity

    def __hash__(self) -> int:
        return hash((self.__class__.__name__, self.identity))

    def mark_updated(self) -> None:
        """Mark the entity as updated."""
        self.updated_at = utcnow()
