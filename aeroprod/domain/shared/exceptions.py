"""
Domain Exceptions

Typed errors for aircraft production and identity management. Every error
carries a discriminating ``error_type`` and a ``details`` mapping so the API
layer can render it without knowing the concrete class.
"""

from enum import Enum


class ErrorType(str, Enum):
    """Error type enumeration for discriminated unions."""

    NOT_FOUND = "not_found"
    INVALID_INDEX = "invalid_index"
    CONFLICT = "conflict"
    BUSINESS_RULE = "business_rule"
    PERMISSION = "permission"


class DomainError(Exception):
    """Base class for all domain errors with type discrimination."""

    def __init__(
        self,
        message: str,
        error_type: ErrorType,
        details: dict[str, str | int | bool | list[str] | None] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.details = details or {}

    @property
    def code(self) -> str:
        return self.__class__.__name__

    def to_dict(self) -> dict:
        """Convert error to dictionary for API responses."""
        return {
            "type": self.error_type.value,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


# Lookup errors
class NotFoundError(DomainError):
    """Raised when an addressed aircraft or employee does not exist."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        super().__init__(message, ErrorType.NOT_FOUND, details)


class AircraftNotFoundError(NotFoundError):
    def __init__(self, code: str) -> None:
        super().__init__(f"Aircraft not found: {code}", {"aircraft_code": code})
        self.aircraft_code = code


class EmployeeNotFoundError(NotFoundError):
    def __init__(self, employee_id: str) -> None:
        super().__init__(
            f"Employee not found: {employee_id}", {"employee_id": employee_id}
        )
        self.employee_id = employee_id


class InvalidIndexError(DomainError):
    """Raised when a part, stage or test index is outside the current sequence."""

    def __init__(self, collection: str, index: int, size: int) -> None:
        super().__init__(
            f"Invalid {collection} index {index} (sequence has {size} entries)",
            ErrorType.INVALID_INDEX,
            {"collection": collection, "index": index, "size": size},
        )
        self.collection = collection
        self.index = index
        self.size = size


# Identity conflicts
class DuplicateCodeError(DomainError):
    """Raised when registering an aircraft whose code is already taken."""

    def __init__(self, code: str) -> None:
        super().__init__(
            f"Aircraft code already exists: {code}",
            ErrorType.CONFLICT,
            {"aircraft_code": code},
        )
        self.aircraft_code = code


class DuplicateEmployeeError(DomainError):
    """Raised when an employee id or username is already taken."""

    def __init__(self, field: str, value: str) -> None:
        super().__init__(
            f"Employee {field} already exists: {value}",
            ErrorType.CONFLICT,
            {"field": field, "value": value},
        )
        self.field = field
        self.value = value


# Stage workflow
class StageWorkflowError(DomainError):
    """Base class for stage progression errors."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        super().__init__(message, ErrorType.BUSINESS_RULE, details)


class PreviousStageIncompleteError(StageWorkflowError):
    """Raised when starting a stage whose predecessor is not DONE."""

    def __init__(self, stage_index: int, previous_status: str) -> None:
        super().__init__(
            f"Cannot start stage {stage_index}: previous stage is {previous_status}",
            {"stage_index": stage_index, "previous_status": previous_status},
        )
        self.stage_index = stage_index
        self.previous_status = previous_status


class FailedTestsPendingError(StageWorkflowError):
    """Raised when completing the final stage while a test kind's latest outcome is REJECTED."""

    def __init__(self, rejected_kinds: list[str]) -> None:
        super().__init__(
            "Rejected tests pending: register a new approved test of kind "
            f"{', '.join(rejected_kinds)} before completing the aircraft",
            {"rejected_kinds": rejected_kinds},
        )
        self.rejected_kinds = rejected_kinds


class InvalidStageTransitionError(StageWorkflowError):
    """Raised in strict mode when a stage would move out of forward order."""

    def __init__(
        self, stage_index: int, current_status: str, attempted_status: str
    ) -> None:
        super().__init__(
            f"Cannot change stage {stage_index} from {current_status} to {attempted_status}",
            {
                "stage_index": stage_index,
                "current_status": current_status,
                "attempted_status": attempted_status,
            },
        )
        self.stage_index = stage_index
        self.current_status = current_status
        self.attempted_status = attempted_status


# Authorization
class PermissionDeniedError(DomainError):
    def __init__(self, actor_id: str, action: str) -> None:
        super().__init__(
            f"Permission denied: {actor_id} may not {action}",
            ErrorType.PERMISSION,
            {"actor_id": actor_id, "action": action},
        )
        self.actor_id = actor_id
        self.action = action


class LastAdminProtectedError(DomainError):
    """Raised when an operation would leave the system without an administrator."""

    def __init__(self, employee_id: str, action: str) -> None:
        super().__init__(
            f"Cannot {action} the last administrator ({employee_id})",
            ErrorType.CONFLICT,
            {"employee_id": employee_id, "action": action},
        )
        self.employee_id = employee_id
        self.action = action
