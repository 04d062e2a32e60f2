"""
Employee API Routes.

Changes are made on behalf of the employee named in the ``X-Actor-Id``
header. Credentials are never returned.
"""

from fastapi import APIRouter, HTTPException, status

from aeroprod.api.deps import ActorIdDep, IdentityDep
from aeroprod.application.dtos import (
    EmployeeCreate,
    EmployeePublic,
    EmployeeUpdate,
    LoginRequest,
)

router = APIRouter(tags=["users"])


@router.post("/auth/login", summary="Authenticate employee", response_model=EmployeePublic)
def login(request: LoginRequest, identity: IdentityDep) -> EmployeePublic:
    employee = identity.authenticate(request.username, request.password)
    if employee is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
        )
    return EmployeePublic.from_domain(employee)


@router.get("/users", response_model=list[EmployeePublic])
def list_users(identity: IdentityDep) -> list[EmployeePublic]:
    return [EmployeePublic.from_domain(e) for e in identity.list_users()]


@router.get("/users/{employee_id}", response_model=EmployeePublic)
def get_user(employee_id: str, identity: IdentityDep) -> EmployeePublic:
    return EmployeePublic.from_domain(identity.get_user(employee_id))


@router.post(
    "/users",
    response_model=EmployeePublic,
    status_code=status.HTTP_201_CREATED,
    responses={403: {"description": "Actor is not an administrator"}},
)
def create_user(
    request: EmployeeCreate, identity: IdentityDep, actor_id: ActorIdDep
) -> EmployeePublic:
    return EmployeePublic.from_domain(identity.register_by_actor(request, actor_id))


@router.patch("/users/{employee_id}", response_model=EmployeePublic)
def update_user(
    employee_id: str, request: EmployeeUpdate, identity: IdentityDep, actor_id: ActorIdDep
) -> EmployeePublic:
    return EmployeePublic.from_domain(identity.update_user(employee_id, request, actor_id))


@router.delete("/users/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(employee_id: str, identity: IdentityDep, actor_id: ActorIdDep) -> None:
    identity.delete_user(employee_id, actor_id)
