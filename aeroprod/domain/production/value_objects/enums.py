"""Domain enums for aircraft production."""

from enum import Enum


class AircraftCategory(str, Enum):
    COMMERCIAL = "COMMERCIAL"
    MILITARY = "MILITARY"


class PartCategory(str, Enum):
    DOMESTIC = "DOMESTIC"
    IMPORTED = "IMPORTED"


class PartStatus(str, Enum):
    """Logistics status of a part."""

    IN_PRODUCTION = "IN_PRODUCTION"
    IN_TRANSPORT = "IN_TRANSPORT"
    RECEIVED = "RECEIVED"
    INSTALLED = "INSTALLED"


class StageStatus(str, Enum):
    """Production stage status enumeration."""

    PENDING = "PENDING"  # Not started
    IN_PROGRESS = "IN_PROGRESS"  # Started, predecessor done
    DONE = "DONE"  # Closed

    @property
    def is_terminal(self) -> bool:
        return self is StageStatus.DONE

    def can_transition_to(self, target_status: "StageStatus") -> bool:
        """Check if a stage can move from this status to ``target_status``."""
        valid_transitions = {
            StageStatus.PENDING: {StageStatus.IN_PROGRESS},
            StageStatus.IN_PROGRESS: {StageStatus.DONE},
            StageStatus.DONE: set(),  # Terminal state
        }
        return target_status in valid_transitions.get(self, set())


class QualityTestKind(str, Enum):
    ELECTRICAL = "ELECTRICAL"
    HYDRAULIC = "HYDRAULIC"
    AERODYNAMIC = "AERODYNAMIC"


class QualityTestOutcome(str, Enum):
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class PermissionLevel(str, Enum):
    ADMIN = "ADMIN"
    ENGINEER = "ENGINEER"
    OPERATOR = "OPERATOR"
