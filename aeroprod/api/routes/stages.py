"""
Production Stage API Routes.

Stage creation, employee assignment and the start/complete workflow. Starting
a stage requires the previous stage to be DONE; completing the final stage
requires that no test kind's latest outcome is REJECTED.
"""

from fastapi import APIRouter, status

from aeroprod.api.deps import IdentityDep, RegistryDep
from aeroprod.application.dtos import EmployeeAssignment, StageCreate, StageEntry

router = APIRouter(prefix="/aircraft/{code}/stages", tags=["stages"])


@router.post("", response_model=StageEntry, status_code=status.HTTP_201_CREATED)
def add_stage(code: str, request: StageCreate, registry: RegistryDep) -> StageEntry:
    index = registry.add_stage(code, request.to_domain())
    return StageEntry(index=index, stage=registry.get_stage(code, index))


@router.get("", response_model=list[StageEntry])
def list_stages(code: str, registry: RegistryDep) -> list[StageEntry]:
    return [StageEntry(index=i, stage=s) for i, s in enumerate(registry.list_stages(code))]


@router.get("/{index}", response_model=StageEntry)
def get_stage(code: str, index: int, registry: RegistryDep) -> StageEntry:
    return StageEntry(index=index, stage=registry.get_stage(code, index))


@router.post(
    "/{index}/advance",
    summary="Start stage",
    response_model=StageEntry,
    responses={409: {"description": "Previous stage not completed"}},
)
def advance_stage(code: str, index: int, registry: RegistryDep) -> StageEntry:
    return StageEntry(index=index, stage=registry.advance_stage(code, index))


@router.post(
    "/{index}/complete",
    summary="Complete stage",
    response_model=StageEntry,
    responses={409: {"description": "Rejected tests pending on the final stage"}},
)
def complete_stage(code: str, index: int, registry: RegistryDep) -> StageEntry:
    return StageEntry(index=index, stage=registry.complete_stage(code, index))


@router.post("/{index}/employees", summary="Assign employee", response_model=StageEntry)
def assign_employee(
    code: str,
    index: int,
    request: EmployeeAssignment,
    registry: RegistryDep,
    identity: IdentityDep,
) -> StageEntry:
    # Only known employees may be assigned
    identity.get_user(request.employee_id)
    return StageEntry(
        index=index, stage=registry.assign_employee(code, index, request.employee_id)
    )
