"""
Application factory.

Builds the FastAPI app, wires the registry and identity service from
settings, and maps domain errors to HTTP responses.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from aeroprod.api.routes import aircraft, health, parts, quality_tests, stages, users
from aeroprod.application.services import IdentityService, ProductionRegistry
from aeroprod.core.config import Settings, get_settings
from aeroprod.core.logging import setup_logging
from aeroprod.domain.shared.exceptions import DomainError, ErrorType

logger = logging.getLogger(__name__)

ERROR_STATUS_CODES: dict[ErrorType, int] = {
    ErrorType.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorType.INVALID_INDEX: status.HTTP_404_NOT_FOUND,
    ErrorType.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorType.BUSINESS_RULE: status.HTTP_409_CONFLICT,
    ErrorType.PERMISSION: status.HTTP_403_FORBIDDEN,
}


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    status_code = ERROR_STATUS_CODES.get(exc.error_type, status.HTTP_400_BAD_REQUEST)
    logger.info(
        "%s %s rejected with %s: %s",
        request.method,
        request.url.path,
        exc.code,
        exc.message,
    )
    return JSONResponse(status_code=status_code, content=exc.to_dict())


def create_app(
    settings: Settings | None = None,
    registry: ProductionRegistry | None = None,
    identity: IdentityService | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(title=settings.PROJECT_NAME)
    app.state.settings = settings
    app.state.registry = registry or ProductionRegistry.from_settings(settings)
    app.state.identity = identity or IdentityService.from_settings(settings)

    app.add_exception_handler(DomainError, domain_error_handler)

    app.include_router(health.router, tags=["health"])
    app.include_router(aircraft.router)
    app.include_router(parts.router)
    app.include_router(stages.router)
    app.include_router(quality_tests.router)
    app.include_router(users.router)

    logger.info(
        "%s started (%s, data in %s)",
        settings.PROJECT_NAME,
        settings.ENVIRONMENT,
        settings.DATA_DIR,
    )
    return app
