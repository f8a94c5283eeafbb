from __future__ import annotations
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Keys that show up in sample env files and must never reach a deployed service.
PLACEHOLDER_ADMIN_KEYS = {
    "your-very-secret-key-123",
    "changeme",
    "change-me",
    "secret",
    "admin",
}
MIN_ADMIN_KEY_LENGTH = 16


class MissingPolicy(str, Enum):
    """What the store does when its backing file can't be read."""
    EMPTY_IF_MISSING = "empty"
    FAIL_IF_MISSING = "fail"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    admin_api_key: str = Field(min_length=1)
    environment: str = "local"
    host: str = "0.0.0.0"
    port: int = 3000
    data_dir: Path = Path("data")
    allowed_origins: List[str] = ["http://localhost:3000"]
    products_missing_policy: MissingPolicy = MissingPolicy.EMPTY_IF_MISSING
    cart_missing_policy: MissingPolicy = MissingPolicy.EMPTY_IF_MISSING
    log_level: str = "INFO"

    @model_validator(mode="after")
    def _check_admin_key(self) -> "Settings":
        if self.environment == "local":
            return self
        if self.admin_api_key in PLACEHOLDER_ADMIN_KEYS:
            raise ValueError(f"ADMIN_API_KEY is a placeholder value; set a real secret for {self.environment!r}")
        if len(self.admin_api_key) < MIN_ADMIN_KEY_LENGTH:
            raise ValueError(f"ADMIN_API_KEY must be at least {MIN_ADMIN_KEY_LENGTH} characters outside local")
        return self

    @property
    def products_path(self) -> Path:
        return self.data_dir / "products.json"

    @property
    def cart_path(self) -> Path:
        return self.data_dir / "cart.json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
