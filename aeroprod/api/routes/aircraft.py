"""
Aircraft API Routes.

Registration, lookup, update and removal of aircraft, plus the release gate
summary and text reports.
"""

from fastapi import APIRouter, status

from aeroprod.api.deps import RegistryDep
from aeroprod.application.dtos import (
    AircraftCreate,
    AircraftUpdate,
    ReleaseStatusResponse,
    ReportResponse,
)
from aeroprod.domain.production.entities import Aircraft

router = APIRouter(prefix="/aircraft", tags=["aircraft"])


@router.post(
    "",
    summary="Register aircraft",
    response_model=Aircraft,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"description": "Aircraft code already exists"}},
)
def register_aircraft(request: AircraftCreate, registry: RegistryDep) -> Aircraft:
    return registry.register(request.to_domain())


@router.get("", summary="List aircraft", response_model=list[Aircraft])
def list_aircraft(registry: RegistryDep) -> list[Aircraft]:
    return registry.list_aircraft()


@router.get("/{code}", summary="Get aircraft", response_model=Aircraft)
def get_aircraft(code: str, registry: RegistryDep) -> Aircraft:
    return registry.get(code)


@router.patch("/{code}", summary="Update aircraft", response_model=Aircraft)
def update_aircraft(code: str, request: AircraftUpdate, registry: RegistryDep) -> Aircraft:
    return registry.update(code, request)


@router.delete("/{code}", summary="Delete aircraft", status_code=status.HTTP_204_NO_CONTENT)
def delete_aircraft(code: str, registry: RegistryDep) -> None:
    registry.delete(code)


@router.get(
    "/{code}/release",
    summary="Release gate status",
    description="Latest outcome per test kind and whether the final stage may be completed.",
    response_model=ReleaseStatusResponse,
)
def get_release_status(code: str, registry: RegistryDep) -> ReleaseStatusResponse:
    return ReleaseStatusResponse.from_status(registry.release_status(code))


@router.post(
    "/{code}/report",
    summary="Generate report",
    response_model=ReportResponse,
    status_code=status.HTTP_201_CREATED,
)
def generate_report(code: str, registry: RegistryDep) -> ReportResponse:
    path = registry.generate_report(code)
    return ReportResponse(
        aircraft_code=code,
        path=str(path),
        content=path.read_text(encoding="utf-8"),
    )
