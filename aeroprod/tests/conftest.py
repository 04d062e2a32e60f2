from collections.abc import Callable, Generator

import pytest
from fastapi.testclient import TestClient

from aeroprod.api.main import create_app
from aeroprod.application.services import IdentityService, ProductionRegistry
from aeroprod.core.config import Settings
from aeroprod.domain.production.entities import Aircraft, Stage
from aeroprod.domain.production.value_objects.enums import AircraftCategory
from aeroprod.infrastructure.persistence import JsonLinesStore


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        DATA_DIR=tmp_path / "data",
        REPORTS_DIR=tmp_path / "reports",
        DEFAULT_ADMIN_PASSWORD="admin-secret",
        _env_file=None,
    )


@pytest.fixture
def store(settings: Settings) -> JsonLinesStore:
    return JsonLinesStore(settings.DATA_DIR)


@pytest.fixture
def registry(settings: Settings) -> ProductionRegistry:
    return ProductionRegistry.from_settings(settings)


@pytest.fixture
def identity(settings: Settings) -> IdentityService:
    return IdentityService.from_settings(settings)


@pytest.fixture
def client(settings: Settings) -> Generator[TestClient, None, None]:
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def make_aircraft() -> Callable[..., Aircraft]:
    def _make(code: str = "AC1", stages: list[str] | None = None, **overrides) -> Aircraft:
        fields = {
            "code": code,
            "model": "E195-E2",
            "category": AircraftCategory.COMMERCIAL,
            "capacity": 132,
            "range_km": 4800,
        }
        fields.update(overrides)
        aircraft = Aircraft(**fields)
        for name in stages or []:
            aircraft.stages.append(Stage(name=name, deadline_days=10))
        return aircraft

    return _make
