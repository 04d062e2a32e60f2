from .enums import (
    AircraftCategory,
    PartCategory,
    PartStatus,
    PermissionLevel,
    QualityTestKind,
    QualityTestOutcome,
    StageStatus,
)

__all__ = [
    "AircraftCategory",
    "PartCategory",
    "PartStatus",
    "PermissionLevel",
    "QualityTestKind",
    "QualityTestOutcome",
    "StageStatus",
]
