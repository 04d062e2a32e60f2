"""Employee-related Data Transfer Objects."""

from typing import Any

from pydantic import BaseModel, Field

from aeroprod.domain.production.entities import Employee
from aeroprod.domain.production.value_objects.enums import PermissionLevel


class EmployeeCreate(BaseModel):
    id: str = Field(..., min_length=1, max_length=64)
    name: str = Field(..., min_length=1, max_length=200)
    phone: str = ""
    address: str = ""
    username: str = Field(..., min_length=1, max_length=64)
    password: str = Field(..., min_length=1)
    permission_level: PermissionLevel = PermissionLevel.OPERATOR


class EmployeeUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    phone: str | None = None
    address: str | None = None
    username: str | None = Field(None, min_length=1, max_length=64)
    password: str | None = Field(None, min_length=1)
    permission_level: PermissionLevel | None = None

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True, exclude_none=True)


class EmployeePublic(BaseModel):
    """Employee view without credentials."""

    id: str
    name: str
    phone: str
    address: str
    username: str
    permission_level: PermissionLevel

    @classmethod
    def from_domain(cls, employee: Employee) -> "EmployeePublic":
        return cls(
            id=employee.id,
            name=employee.name,
            phone=employee.phone,
            address=employee.address,
            username=employee.username,
            permission_level=employee.permission_level,
        )


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
