"""
API Dependencies

The registry and the identity service are built once per application and
kept on ``app.state``; routes receive them through these dependencies.
"""

from typing import Annotated

from fastapi import Depends, Header, Request

from aeroprod.application.services import IdentityService, ProductionRegistry


def get_registry(request: Request) -> ProductionRegistry:
    return request.app.state.registry


def get_identity(request: Request) -> IdentityService:
    return request.app.state.identity


RegistryDep = Annotated[ProductionRegistry, Depends(get_registry)]
IdentityDep = Annotated[IdentityService, Depends(get_identity)]


def get_actor_id(
    x_actor_id: Annotated[str, Header(description="Employee id performing the change")],
) -> str:
    return x_actor_id


ActorIdDep = Annotated[str, Depends(get_actor_id)]

