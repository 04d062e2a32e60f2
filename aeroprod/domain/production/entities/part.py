"""Part record owned by an aircraft."""

from pydantic import Field

from ...shared.base import DomainModel
from ..value_objects.enums import PartCategory, PartStatus


class Part(DomainModel):
    name: str = Field(min_length=1, max_length=200)
    category: PartCategory
    supplier: str = Field(min_length=1, max_length=200)
    status: PartStatus = PartStatus.IN_PRODUCTION
