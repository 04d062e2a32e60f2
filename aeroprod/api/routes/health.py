"""Health check route."""

from fastapi import APIRouter

from aeroprod.api.deps import IdentityDep, RegistryDep

router = APIRouter()


@router.get("/health", summary="Service health")
def get_health(registry: RegistryDep, identity: IdentityDep) -> dict:
    corrupted = registry.corrupted_records + identity.corrupted_records
    return {
        "status": "degraded" if corrupted else "healthy",
        "aircraft": len(registry),
        "corrupted_records": corrupted,
    }
