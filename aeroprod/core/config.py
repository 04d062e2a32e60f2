from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="AEROPROD_",
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    PROJECT_NAME: str = "Aircraft Production Tracker"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    LOG_LEVEL: str = "INFO"
    HOST: str = "127.0.0.1"
    PORT: int = 8000

    # Flat-file storage
    DATA_DIR: Path = Path("data")
    REPORTS_DIR: Path = Path("reports")
    AIRCRAFT_STORE: str = "aircraft"
    USERS_STORE: str = "users"
    AUDIT_LOG_FILE: str = "user_audit.log"

    # Reject re-advancing or completing a stage out of PENDING -> IN_PROGRESS -> DONE order
    STRICT_STAGE_TRANSITIONS: bool = False

    DEFAULT_ADMIN_USERNAME: str = "admin"
    DEFAULT_ADMIN_PASSWORD: str = "admin123"

    @field_validator("LOG_LEVEL")
    @classmethod
    def _upper_log_level(cls, v: str) -> str:
        return v.upper()

    @computed_field  # type: ignore[prop-decorator]
    @property
    def audit_log_path(self) -> Path:
        return self.DATA_DIR / self.AUDIT_LOG_FILE


@lru_cache
def get_settings() -> Settings:
    return Settings()
