"""
Part API Routes.

Parts are addressed by index; deleting a part shifts the index of every part
after it.
"""

from fastapi import APIRouter, status

from aeroprod.api.deps import RegistryDep
from aeroprod.application.dtos import PartCreate, PartEntry, PartStatusUpdate, PartUpdate

router = APIRouter(prefix="/aircraft/{code}/parts", tags=["parts"])


@router.post("", response_model=PartEntry, status_code=status.HTTP_201_CREATED)
def add_part(code: str, request: PartCreate, registry: RegistryDep) -> PartEntry:
    index = registry.add_part(code, request.to_domain())
    return PartEntry(index=index, part=registry.get_part(code, index))


@router.get("", response_model=list[PartEntry])
def list_parts(code: str, registry: RegistryDep) -> list[PartEntry]:
    return [PartEntry(index=i, part=p) for i, p in enumerate(registry.list_parts(code))]


@router.get("/{index}", response_model=PartEntry)
def get_part(code: str, index: int, registry: RegistryDep) -> PartEntry:
    return PartEntry(index=index, part=registry.get_part(code, index))


@router.patch("/{index}", response_model=PartEntry)
def update_part(
    code: str, index: int, request: PartUpdate, registry: RegistryDep
) -> PartEntry:
    return PartEntry(index=index, part=registry.update_part(code, index, request))


@router.put("/{index}/status", response_model=PartEntry)
def update_part_status(
    code: str, index: int, request: PartStatusUpdate, registry: RegistryDep
) -> PartEntry:
    return PartEntry(
        index=index, part=registry.update_part_status(code, index, request.status)
    )


@router.delete("/{index}", status_code=status.HTTP_204_NO_CONTENT)
def delete_part(code: str, index: int, registry: RegistryDep) -> None:
    registry.delete_part(code, index)
