"""Quality Test API Routes."""

from fastapi import APIRouter, status

from aeroprod.api.deps import RegistryDep
from aeroprod.application.dtos import (
    QualityTestCreate,
    QualityTestEntry,
    QualityTestUpdate,
)

router = APIRouter(prefix="/aircraft/{code}/tests", tags=["tests"])


@router.post("", response_model=QualityTestEntry, status_code=status.HTTP_201_CREATED)
def register_test(
    code: str, request: QualityTestCreate, registry: RegistryDep
) -> QualityTestEntry:
    index = registry.register_test(code, request.to_domain())
    return QualityTestEntry(index=index, test=registry.get_test(code, index))


@router.get("", response_model=list[QualityTestEntry])
def list_tests(code: str, registry: RegistryDep) -> list[QualityTestEntry]:
    return [
        QualityTestEntry(index=i, test=t) for i, t in enumerate(registry.list_tests(code))
    ]


@router.get("/{index}", response_model=QualityTestEntry)
def get_test(code: str, index: int, registry: RegistryDep) -> QualityTestEntry:
    return QualityTestEntry(index=index, test=registry.get_test(code, index))


@router.patch("/{index}", response_model=QualityTestEntry)
def update_test(
    code: str, index: int, request: QualityTestUpdate, registry: RegistryDep
) -> QualityTestEntry:
    return QualityTestEntry(index=index, test=registry.update_test(code, index, request))


@router.delete("/{index}", status_code=status.HTTP_204_NO_CONTENT)
def delete_test(code: str, index: int, registry: RegistryDep) -> None:
    registry.delete_test(code, index)
