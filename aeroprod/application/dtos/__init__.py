"""
Data Transfer Objects for the application layer.

Request and response shapes shared by the registry, the identity service and
the HTTP routes.
"""

from .employee_dtos import EmployeeCreate, EmployeePublic, EmployeeUpdate, LoginRequest
from .production_dtos import (
    AircraftCreate,
    AircraftUpdate,
    EmployeeAssignment,
    PartCreate,
    PartEntry,
    PartStatusUpdate,
    PartUpdate,
    QualityTestCreate,
    QualityTestEntry,
    QualityTestUpdate,
    ReleaseStatusResponse,
    ReportResponse,
    StageCreate,
    StageEntry,
)

__all__ = [
    # Production DTOs
    "AircraftCreate",
    "AircraftUpdate",
    "PartCreate",
    "PartUpdate",
    "PartStatusUpdate",
    "PartEntry",
    "StageCreate",
    "StageEntry",
    "EmployeeAssignment",
    "QualityTestCreate",
    "QualityTestUpdate",
    "QualityTestEntry",
    "ReleaseStatusResponse",
    "ReportResponse",
    # Employee DTOs
    "EmployeeCreate",
    "EmployeeUpdate",
    "EmployeePublic",
    "LoginRequest",
]
