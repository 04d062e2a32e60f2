"""Employee identity used for stage assignment and authorization."""

from pydantic import Field

from ...shared.base import Entity
from ..value_objects.enums import PermissionLevel


class Employee(Entity):
    id: str = Field(min_length=1, max_length=64, frozen=True)
    name: str = Field(min_length=1, max_length=200)
    phone: str = ""
    address: str = ""
    username: str = Field(min_length=1, max_length=64)
    password_hash: str = ""
    permission_level: PermissionLevel = PermissionLevel.OPERATOR

    @property
    def identity(self) -> str:
        return self.id

    @property
    def is_admin(self) -> bool:
        return self.permission_level is PermissionLevel.ADMIN
